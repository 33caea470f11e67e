from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.enums import LogAction
from ..storage.backend import TableBackend
from ..storage.records import TableAccessor
from ..storage.tables import LOGS
from .model import LogEntry
from .repository import LogRepository


def row_to_log(row: Mapping[str, Any]) -> LogEntry:
    return LogEntry(
        id=str(row["id"]),
        user_id=row.get("user_id"),
        action=LogAction(row["action"]),
        details=row.get("details") or "",
        timestamp=row.get("timestamp") or "",
    )


class TableLogRepository(LogRepository):
    def __init__(self, backend: TableBackend):
        self._table = TableAccessor(backend, LOGS, timestamp_field="timestamp")

    def list_all(self) -> Sequence[LogEntry]:
        return [row_to_log(r) for r in self._table.rows(order_by="timestamp", descending=True)]

    def append(self, *, user_id: Optional[str], action: LogAction, details: str) -> LogEntry:
        row = self._table.insert({"user_id": user_id, "action": action, "details": details})
        return row_to_log(row)
