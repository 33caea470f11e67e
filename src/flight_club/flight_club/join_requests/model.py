from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import JoinRequestStatus


@dataclass(frozen=True)
class JoinRequest:
    """Guest request to join the club, handled offline by staff."""

    id: str
    name: str
    email: str
    phone: Optional[str]
    message: Optional[str]
    status: JoinRequestStatus
    created_at: Optional[str] = None
