from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.constants import DEFAULT_LESSON
from ..core.enums import Role, UserStatus
from ..storage.backend import TableBackend
from ..storage.records import TableAccessor
from ..storage.tables import USERS
from .model import User
from .repository import UserRepository


def _optional_int(value: Any) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def row_to_user(row: Mapping[str, Any]) -> User:
    return User(
        id=str(row["id"]),
        name=row.get("name") or "",
        email=row.get("email") or "",
        role=Role(row["role"]),
        status=UserStatus(row.get("status") or UserStatus.ACTIVE.value),
        password_hash=row.get("password_hash") or "",
        phone=row.get("phone"),
        age=_optional_int(row.get("age")),
        background=row.get("background"),
        no_show_count=int(row.get("no_show_count") or 0),
        total_hours=float(row.get("total_hours") or 0),
        current_lesson=int(row.get("current_lesson") or DEFAULT_LESSON),
        created_at=row.get("created_at"),
    )


def initial_status(role: Role) -> UserStatus:
    return UserStatus.IN_TRAINING if role == Role.TRAINEE else UserStatus.ACTIVE


class TableUserRepository(UserRepository):
    def __init__(self, backend: TableBackend):
        self._table = TableAccessor(backend, USERS)

    def list_all(self) -> Sequence[User]:
        return [row_to_user(r) for r in self._table.rows(order_by="created_at")]

    def get_by_id(self, user_id: str) -> Optional[User]:
        row = self._table.row(user_id)
        return row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        rows = self._table.rows(email=email.strip().lower())
        return row_to_user(rows[0]) if rows else None

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
        row = self._table.insert(
            {
                "name": name,
                "email": email.strip().lower(),
                "phone": phone,
                "age": age,
                "role": role,
                "status": initial_status(role),
                "background": background,
                "password_hash": password_hash,
                "no_show_count": 0,
                "total_hours": 0,
                "current_lesson": DEFAULT_LESSON,
            }
        )
        return row_to_user(row)

    def update(self, user_id: str, changes: Mapping[str, Any]) -> Optional[User]:
        row = self._table.update(user_id, changes)
        return row_to_user(row) if row else None
