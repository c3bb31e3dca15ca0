import json
import logging
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from casafutura.database import AsyncSessionLocal
from casafutura.domain.errors import DataFetchFailed
from casafutura.models import StoredCollection
from casafutura.storage.base import (
    CollectionStore,
    DataFile,
    SaveResult,
    StorageConflict,
    StorageError,
    content_sha,
    load_seed,
)

logger = logging.getLogger(__name__)


class SqlStore(CollectionStore):
    """
    Collections persisted as rows of the `data_files` table.
    A collection missing from the table is seeded from the packaged data
    file the first time it is loaded.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal,
        seed: bool = True,
    ):
        self.session_factory = session_factory
        self.seed = seed

    async def _get_or_seed(self, session: AsyncSession, name: str) -> StoredCollection:
        row = await session.get(StoredCollection, name)
        if row is not None:
            return row

        data = load_seed(name) if self.seed else []
        row = StoredCollection(
            name=name,
            content=json.dumps(data, ensure_ascii=False),
            sha=content_sha(data),
            message="seed",
        )
        session.add(row)
        try:
            await session.commit()
        except IntegrityError:
            # another request seeded it first
            await session.rollback()
            row = await session.get(StoredCollection, name)
            if row is None:
                raise
            return row

        logger.info(f"Seeded collection {name} ({len(data)} records)")
        return row

    async def load(self, name: str) -> DataFile:
        try:
            async with self.session_factory() as session:
                row = await self._get_or_seed(session, name)
                return DataFile(data=json.loads(row.content), sha=row.sha)
        except (SQLAlchemyError, ValueError) as e:
            logger.error(f"Error loading {name}: {e}", exc_info=True)
            raise DataFetchFailed() from e

    async def save(
        self,
        name: str,
        data: Any,
        sha: Optional[str] = None,
        message: Optional[str] = None,
    ) -> SaveResult:
        new_sha = content_sha(data)
        try:
            async with self.session_factory() as session:
                row = await self._get_or_seed(session, name)
                if sha is not None and row.sha != sha:
                    raise StorageConflict(f"{name} changed since it was loaded")

                row.content = json.dumps(data, ensure_ascii=False)
                row.sha = new_sha
                row.message = message or f"chore: update {name} via app"
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error saving {name}: {e}", exc_info=True)
            raise StorageError(f"Could not save {name}") from e

        return SaveResult(data=data, sha=new_sha)
