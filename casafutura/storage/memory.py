import copy
from typing import Any, Optional

from casafutura.storage.base import (
    CollectionStore,
    DataFile,
    SaveResult,
    StorageConflict,
    content_sha,
    load_seed,
)


class MemoryStore(CollectionStore):
    """Process-local collections, seeded from the packaged data files."""

    def __init__(self, seed: bool = True, initial: Optional[dict[str, Any]] = None):
        self.seed = seed
        self._files: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def _current(self, name: str) -> Any:
        if name not in self._files:
            self._files[name] = load_seed(name) if self.seed else []
        return self._files[name]

    async def load(self, name: str) -> DataFile:
        data = self._current(name)
        return DataFile(data=copy.deepcopy(data), sha=content_sha(data))

    async def save(
        self,
        name: str,
        data: Any,
        sha: Optional[str] = None,
        message: Optional[str] = None,
    ) -> SaveResult:
        if sha is not None and sha != content_sha(self._current(name)):
            raise StorageConflict(f"{name} changed since it was loaded")

        self._files[name] = copy.deepcopy(data)
        return SaveResult(data=copy.deepcopy(data), sha=content_sha(data))
