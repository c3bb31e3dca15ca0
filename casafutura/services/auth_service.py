import logging
from typing import List, Optional

from casafutura.core.security import get_password_hash, verify_password
from casafutura.models import Collection, Role
from casafutura.schemas.user import User
from casafutura.storage.base import CollectionStore
from casafutura.utils.ids import new_id

logger = logging.getLogger(__name__)


class EmailAlreadyRegistered(ValueError):
    pass


class AuthService:
    def __init__(self, store: CollectionStore):
        self.store = store

    async def _load(self) -> tuple[List[User], Optional[str]]:
        data_file = await self.store.load(Collection.USERS.value)
        return [User.model_validate(item) for item in data_file.data], data_file.sha

    async def _add(self, user: User) -> None:
        users, sha = await self._load()
        if _find_by_email(users, user.email):
            raise EmailAlreadyRegistered(user.email)
        users.append(user)
        await self.store.save(
            Collection.USERS.value,
            [u.model_dump(mode="json", by_alias=True) for u in users],
            sha=sha,
            message=f"Nuovo utente {user.id}",
        )

    async def get_user(self, user_id: str) -> Optional[User]:
        users, _ = await self._load()
        return next((u for u in users if u.id == user_id), None)

    async def authenticate(self, email: str, password: str) -> Optional[User]:
        users, _ = await self._load()
        user = _find_by_email(users, email)
        if not user or not verify_password(password, user.password_hash):
            return None
        return user

    async def register(self, name: str, email: str, password: str) -> User:
        user = User(
            id=new_id("user-"),
            name=name,
            email=email,
            password_hash=get_password_hash(password),
            role=Role.GUEST,
        )
        await self._add(user)
        logger.info(f"Registered user {user.id}")
        return user

    async def ensure_manager(self, email: str, password: str, name: str) -> Optional[User]:
        """Create the manager account on first start if it does not exist yet."""
        users, _ = await self._load()
        existing = _find_by_email(users, email)
        if existing:
            return existing

        if not password:
            logger.warning("MANAGER_PASSWORD is not set; no manager account was created")
            return None

        manager = User(
            id=new_id("manager-"),
            name=name,
            email=email,
            password_hash=get_password_hash(password),
            role=Role.MANAGER,
        )
        await self._add(manager)
        logger.info(f"Created manager account {email}")
        return manager


def _find_by_email(users: List[User], email: str) -> Optional[User]:
    email = email.strip().lower()
    return next((u for u in users if u.email.lower() == email), None)
