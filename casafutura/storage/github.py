"""
Collections kept as JSON files in a GitHub repository.

Reads go through the contents API (which also hands out the blob sha used as
the concurrency token) and fall back to the copy published on GitHub Pages.
Writes need a token; without one they are kept in memory for the life of the
process.
"""
import asyncio
import base64
import copy
import json
import logging
from typing import Any, Optional
from urllib.parse import quote

import requests

from casafutura.domain.errors import DataFetchFailed
from casafutura.storage.base import (
    CollectionStore,
    DataFile,
    SaveResult,
    StorageConflict,
    StorageError,
)

logger = logging.getLogger(__name__)


def join_path(*segments: str) -> str:
    parts = [segment.strip("/") for segment in segments if segment]
    return "/".join(part for part in parts if part)


def encode_content(data: Any) -> str:
    raw = json.dumps(data, indent=2, ensure_ascii=False)
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def decode_content(content: str) -> Any:
    # the API wraps base64 at 60 columns; b64decode drops the newlines
    return json.loads(base64.b64decode(content).decode("utf-8"))


class GitHubStore(CollectionStore):
    API_URL = "https://api.github.com"

    def __init__(
        self,
        owner: str = "",
        repo: str = "",
        branch: str = "main",
        token: str = "",
        repo_data_path: str = "public/data",
        pages_base_url: str = "",
        pages_data_path: str = "data",
        timeout: int = 10,
        session: Optional[requests.Session] = None,
    ):
        self.owner = owner
        self.repo = repo
        self.branch = branch
        self.token = token
        self.repo_data_path = repo_data_path
        self.pages_base_url = pages_base_url.rstrip("/")
        self.pages_data_path = pages_data_path
        self.timeout = timeout
        self.http = session or requests.Session()
        self._memory_cache: dict[str, Any] = {}

    @property
    def has_repo_configuration(self) -> bool:
        return bool(self.owner and self.repo)

    @property
    def has_write_configuration(self) -> bool:
        return bool(self.owner and self.repo and self.token)

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _contents_url(self, name: str) -> str:
        path = join_path(self.repo_data_path, name)
        return f"{self.API_URL}/repos/{self.owner}/{self.repo}/contents/{quote(path)}"

    def _fetch_from_pages(self, name: str) -> Any:
        if not self.pages_base_url:
            raise StorageError("GitHub Pages base URL is not configured")

        url = f"{self.pages_base_url}/{join_path(self.pages_data_path, name)}"
        response = self.http.get(url, timeout=self.timeout)
        if not response.ok:
            raise StorageError(
                f"Could not load {name} from GitHub Pages (status {response.status_code})"
            )
        return response.json()

    def _fetch_from_repo(self, name: str) -> DataFile:
        response = self.http.get(
            self._contents_url(name),
            params={"ref": self.branch},
            headers=self._headers(),
            timeout=self.timeout,
        )
        if not response.ok:
            raise StorageError(
                f"GitHub API error {response.status_code} while fetching {name}"
            )

        payload = response.json()
        return DataFile(data=decode_content(payload["content"]), sha=payload["sha"])

    def _put_to_repo(
        self, name: str, data: Any, sha: Optional[str], message: Optional[str]
    ) -> SaveResult:
        body = {
            "message": message or f"chore: update {name} via app",
            "content": encode_content(data),
            "branch": self.branch,
        }
        if sha:
            body["sha"] = sha

        response = self.http.put(
            self._contents_url(name),
            json=body,
            headers=self._headers(),
            timeout=self.timeout,
        )
        # 409: sha does not match the branch head; 422: sha missing for an existing file
        if response.status_code in (409, 422):
            raise StorageConflict(f"{name} changed since it was loaded")
        if not response.ok:
            raise StorageError(
                f"GitHub API error {response.status_code} while saving {name}: {response.text}"
            )

        payload = response.json()
        return SaveResult(
            data=decode_content(payload["content"]["content"]),
            sha=payload["content"]["sha"],
            commit_url=(payload.get("commit") or {}).get("html_url"),
        )

    async def load(self, name: str) -> DataFile:
        if name in self._memory_cache:
            return DataFile(data=copy.deepcopy(self._memory_cache[name]))

        if self.has_repo_configuration:
            try:
                return await asyncio.to_thread(self._fetch_from_repo, name)
            except (requests.RequestException, StorageError, KeyError, ValueError) as e:
                logger.warning(f"Falling back to GitHub Pages for {name}: {e}")

        try:
            data = await asyncio.to_thread(self._fetch_from_pages, name)
        except (requests.RequestException, StorageError, ValueError) as e:
            logger.error(f"Error loading {name}: {e}")
            raise DataFetchFailed() from e
        return DataFile(data=data)

    async def save(
        self,
        name: str,
        data: Any,
        sha: Optional[str] = None,
        message: Optional[str] = None,
    ) -> SaveResult:
        if not self.has_write_configuration:
            logger.warning(
                f"Missing GitHub credentials; using in-memory persistence for {name}."
            )
            self._memory_cache[name] = copy.deepcopy(data)
            return SaveResult(data=data)

        try:
            return await asyncio.to_thread(self._put_to_repo, name, data, sha, message)
        except requests.RequestException as e:
            logger.error(f"Error saving {name} to GitHub: {e}", exc_info=True)
            raise StorageError(f"Could not save {name}") from e
