from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import LogAction


@dataclass(frozen=True)
class LogEntry:
    """Append-only activity record."""

    id: str
    user_id: Optional[str]
    action: LogAction
    details: str
    timestamp: str
