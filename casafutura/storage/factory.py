import logging
from functools import lru_cache

from casafutura.core.config import settings
from casafutura.storage.base import CollectionStore
from casafutura.storage.github import GitHubStore
from casafutura.storage.memory import MemoryStore
from casafutura.storage.sql import SqlStore

logger = logging.getLogger(__name__)


def resolve_backend() -> str:
    backend = settings.storage_backend
    if backend == "auto":
        backend = "github" if settings.github_owner and settings.github_repo else "sql"
    return backend


@lru_cache
def get_store() -> CollectionStore:
    backend = resolve_backend()
    logger.info(f"Using {backend} storage backend")

    if backend == "github":
        return GitHubStore(
            owner=settings.github_owner,
            repo=settings.github_repo,
            branch=settings.github_branch,
            token=settings.github_token,
            repo_data_path=settings.github_data_path,
            pages_base_url=settings.github_pages_base_url,
            pages_data_path=settings.github_pages_data_path,
            timeout=settings.http_timeout_seconds,
        )
    if backend == "sql":
        return SqlStore()
    if backend == "memory":
        return MemoryStore()
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")
