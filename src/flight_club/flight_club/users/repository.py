from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, not on a concrete store.
    Users are never deleted.
    """

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        phone: Optional[str] = None,
        age: Optional[int] = None,
        background: Optional[str] = None,
    ) -> User:
        raise NotImplementedError

    def update(self, user_id: str, changes: Mapping[str, Any]) -> Optional[User]:
        """Merge only the given fields. Returns None when the user does not exist."""

        raise NotImplementedError
