from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import LogAction
from .model import LogEntry
from .repository import LogRepository


class ActivityLogService:
    def __init__(self, logs: LogRepository):
        self._logs = logs

    def record(self, *, user_id: Optional[str], action: LogAction, details: str) -> LogEntry:
        return self._logs.append(user_id=user_id, action=action, details=details)

    def list(self, *, limit: Optional[int] = None, user_id: Optional[str] = None) -> Sequence[LogEntry]:
        entries = list(self._logs.list_all())
        if user_id is not None:
            entries = [e for e in entries if e.user_id == user_id]
        if limit is not None:
            entries = entries[: max(int(limit), 0)]
        return entries
