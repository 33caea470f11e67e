from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import FREEZE_THRESHOLD
from ..core.enums import Role, UserStatus


@dataclass(frozen=True)
class User:
    """Domain entity: club member.

    Plain data object; no storage access here.
    """

    id: str
    name: str
    email: str
    role: Role
    status: UserStatus
    password_hash: str = ""
    phone: Optional[str] = None
    age: Optional[int] = None
    background: Optional[str] = None
    no_show_count: int = 0
    total_hours: float = 0.0
    current_lesson: int = 1
    created_at: Optional[str] = None

    @property
    def is_frozen(self) -> bool:
        return self.status == UserStatus.FROZEN

    @property
    def strikes_left(self) -> int:
        return max(FREEZE_THRESHOLD - self.no_show_count, 0)
