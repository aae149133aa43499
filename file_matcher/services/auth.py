"""Username-based sign-in for admins and students."""

import logging
import secrets
from datetime import datetime, timezone
from typing import Optional

from ..config import settings
from ..models.user import LoginForm, Role, User
from .user_store import InMemoryUserStore, JsonUserStore, UserStore

logger = logging.getLogger(__name__)


class AuthService:
    """Sign-in rules.

    An unknown name without a password becomes a new student. An unknown
    name with a password is rejected. A known account with a password must
    be given that password.
    """

    def __init__(self, store: UserStore):
        self.store = store
        self._sessions: dict[str, str] = {}

    def login(self, form: LoginForm) -> Optional[tuple[str, User]]:
        user = self.store.find(form.username)
        now = datetime.now(tz=timezone.utc)

        if user is None:
            if form.password:
                logger.info(f"Rejected login for unknown user {form.username!r}")
                return None
            user = User(
                id=f"student-{secrets.token_hex(6)}",
                username=form.username,
                role=Role.STUDENT,
                created_at=now,
            )
        elif user.password and user.password != form.password:
            logger.info(f"Rejected login for {form.username!r}: wrong password")
            return None

        user.last_login_at = now
        self.store.upsert(user)

        token = secrets.token_urlsafe(24)
        self._sessions[token] = user.id
        return token, user

    def logout(self, token: str) -> bool:
        return self._sessions.pop(token, None) is not None

    def current_user(self, token: Optional[str]) -> Optional[User]:
        if not token:
            return None
        user_id = self._sessions.get(token)
        if user_id is None:
            return None
        return self.store.get(user_id)


def build_user_store() -> UserStore:
    store: UserStore
    if settings.user_store_path:
        store = JsonUserStore(settings.user_store_path)
    else:
        store = InMemoryUserStore()
    store.ensure_admin(settings.admin_username, settings.admin_password)
    return store


# Singleton
auth_service = AuthService(build_user_store())
