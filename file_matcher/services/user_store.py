"""User persistence behind a small key-value interface."""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ..models.user import Role, User

logger = logging.getLogger(__name__)


class UserStore(ABC):
    """Lookups return copies; stored users only change through ``upsert``."""

    @abstractmethod
    def find(self, username: str) -> Optional[User]:
        ...

    @abstractmethod
    def get(self, user_id: str) -> Optional[User]:
        ...

    @abstractmethod
    def upsert(self, user: User) -> User:
        ...

    @abstractmethod
    def list_users(self) -> list[User]:
        ...

    def ensure_admin(self, username: str, password: str) -> User:
        """Seed the admin account if no user has that name yet."""
        existing = self.find(username)
        if existing:
            return existing
        return self.upsert(User(id="admin-001", username=username, password=password, role=Role.ADMIN))


class InMemoryUserStore(UserStore):
    def __init__(self):
        self._users: dict[str, User] = {}

    def find(self, username: str) -> Optional[User]:
        user = next((u for u in self._users.values() if u.username == username), None)
        return user.model_copy() if user else None

    def get(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return user.model_copy() if user else None

    def upsert(self, user: User) -> User:
        self._users[user.id] = user.model_copy()
        return user

    def list_users(self) -> list[User]:
        return [u.model_copy() for u in self._users.values()]


class JsonUserStore(InMemoryUserStore):
    """In-memory store mirrored to a JSON file on every write."""

    def __init__(self, path: Path):
        super().__init__()
        self.path = Path(path)
        self._load()

    def upsert(self, user: User) -> User:
        super().upsert(user)
        self._save()
        return user

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Could not read user store {self.path}: {e}")
            return
        for item in raw:
            user = User.model_validate(item)
            self._users[user.id] = user

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [u.model_dump(mode="json") for u in self._users.values()]
        self.path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
