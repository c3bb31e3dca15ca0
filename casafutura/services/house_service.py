import logging
import re
from datetime import datetime, timezone
from typing import List, Optional

from casafutura.models import Collection
from casafutura.schemas.house import House, HouseCreate, HouseUpdate
from casafutura.storage.base import CollectionStore

logger = logging.getLogger(__name__)


class HouseAlreadyExists(ValueError):
    pass


def house_id_from_title(title: str) -> str:
    return re.sub(r"\s+", "-", title.strip().lower())


class HouseService:
    """Listings, stored as the houses.json collection."""

    def __init__(self, store: CollectionStore):
        self.store = store

    async def _load(self) -> tuple[List[House], Optional[str]]:
        data_file = await self.store.load(Collection.HOUSES.value)
        return [House.model_validate(item) for item in data_file.data], data_file.sha

    async def _save(self, houses: List[House], sha: Optional[str], message: str) -> None:
        await self.store.save(
            Collection.HOUSES.value,
            [house.model_dump(mode="json", by_alias=True) for house in houses],
            sha=sha,
            message=message,
        )

    async def get_all_houses(self) -> List[House]:
        houses, _ = await self._load()
        return houses

    async def get_active_houses(self) -> List[House]:
        return [house for house in await self.get_all_houses() if house.active]

    async def get_house(self, house_id: str) -> Optional[House]:
        for house in await self.get_all_houses():
            if house.id == house_id:
                return house
        return None

    async def create_house(self, house_in: HouseCreate) -> House:
        houses, sha = await self._load()

        house_id = house_id_from_title(house_in.title)
        if any(house.id == house_id for house in houses):
            raise HouseAlreadyExists(house_id)

        house = House(
            id=house_id,
            updated_at=datetime.now(timezone.utc),
            **house_in.model_dump(),
        )
        houses.append(house)
        await self._save(houses, sha, f"Aggiunta casa {house.title}")
        logger.info(f"Created house {house.id}")
        return house

    async def update_house(self, house_id: str, house_in: HouseUpdate) -> Optional[House]:
        houses, sha = await self._load()

        for index, house in enumerate(houses):
            if house.id == house_id:
                break
        else:
            return None

        # Only fields the client actually sent
        update_data = house_in.model_dump(exclude_unset=True)
        updated = House.model_validate(
            {
                **house.model_dump(),
                **update_data,
                "updated_at": datetime.now(timezone.utc),
            }
        )
        houses[index] = updated

        await self._save(houses, sha, f"Aggiornata casa {house_id}")
        logger.info(f"Updated house {house_id}: {sorted(update_data)}")
        return updated

    async def delete_house(self, house_id: str) -> bool:
        houses, sha = await self._load()
        remaining = [house for house in houses if house.id != house_id]
        if len(remaining) == len(houses):
            return False

        await self._save(remaining, sha, f"Rimossa casa {house_id}")
        logger.info(f"Deleted house {house_id}")
        return True
