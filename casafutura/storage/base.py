import hashlib
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

SEED_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass
class DataFile:
    data: Any
    sha: Optional[str] = None  # concurrency token, None when the backend has none


@dataclass
class SaveResult(DataFile):
    commit_url: Optional[str] = None


class StorageError(Exception):
    pass


class StorageConflict(StorageError):
    """The collection changed since it was loaded (sha mismatch)."""


def content_sha(data: Any) -> str:
    raw = json.dumps(data, sort_keys=True, ensure_ascii=False)
    return hashlib.sha1(raw.encode("utf-8")).hexdigest()


def load_seed(name: str) -> Any:
    """Initial contents of a collection as shipped with the package."""
    path = SEED_DIR / name
    if not path.exists():
        logger.info(f"No seed file for {name}, starting empty")
        return []
    with path.open(encoding="utf-8") as f:
        return json.load(f)


class CollectionStore(ABC):
    """Load/save named JSON collections."""

    @abstractmethod
    async def load(self, name: str) -> DataFile:
        """Raises DataFetchFailed when the collection cannot be read."""

    @abstractmethod
    async def save(
        self,
        name: str,
        data: Any,
        sha: Optional[str] = None,
        message: Optional[str] = None,
    ) -> SaveResult:
        """
        Write the whole collection. With `sha`, the write only succeeds if the
        stored copy still matches it (StorageConflict otherwise).
        """
