from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import LogAction
from .model import LogEntry


class LogRepository(Protocol):
    def list_all(self) -> Sequence[LogEntry]:
        """All entries, newest first."""

        raise NotImplementedError

    def append(self, *, user_id: Optional[str], action: LogAction, details: str) -> LogEntry:
        raise NotImplementedError
