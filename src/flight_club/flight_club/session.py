"""Current-user session holder.

Holds a copy of the logged-in user, persisted in whatever mapping it is
given (the Flask session in the web layer, a dict in tests). The copy is not
authoritative and can drift from the stored record until it is refreshed.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, MutableMapping, Optional

from .core.enums import Role, UserStatus
from .users.model import User

SESSION_KEY = "current_user"


def _snapshot(user: User) -> dict:
    data = asdict(user)
    data.pop("password_hash", None)
    data["role"] = user.role.value
    data["status"] = user.status.value
    return data


def _restore(data: dict) -> User:
    return User(**{**data, "role": Role(data["role"]), "status": UserStatus(data["status"])})


class SessionHolder:
    def __init__(self, storage: MutableMapping[str, Any]):
        self._storage = storage

    @property
    def current_user(self) -> Optional[User]:
        data = self._storage.get(SESSION_KEY)
        return _restore(data) if data else None

    @property
    def user_id(self) -> Optional[str]:
        data = self._storage.get(SESSION_KEY)
        return data["id"] if data else None

    @property
    def is_authenticated(self) -> bool:
        return self._storage.get(SESSION_KEY) is not None

    def start(self, user: User) -> None:
        self._storage[SESSION_KEY] = _snapshot(user)

    def refresh(self, user: User) -> None:
        """Replace the snapshot if it belongs to `user`."""
        if self.user_id == user.id:
            self.start(user)

    def clear(self) -> None:
        self._storage.pop(SESSION_KEY, None)
