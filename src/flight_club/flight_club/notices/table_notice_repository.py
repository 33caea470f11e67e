from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..storage.backend import TableBackend
from ..storage.records import TableAccessor
from ..storage.tables import NOTICES
from .model import Notice
from .repository import NoticeRepository


def row_to_notice(row: Mapping[str, Any]) -> Notice:
    return Notice(
        id=str(row["id"]),
        content=row.get("content") or "",
        created_by=row.get("created_by"),
        created_at=row.get("created_at") or "",
    )


class TableNoticeRepository(NoticeRepository):
    def __init__(self, backend: TableBackend):
        self._table = TableAccessor(backend, NOTICES)

    def list_all(self) -> Sequence[Notice]:
        return [row_to_notice(r) for r in self._table.rows(order_by="created_at", descending=True)]

    def create(self, *, content: str, created_by: str) -> Notice:
        return row_to_notice(self._table.insert({"content": content, "created_by": created_by}))

    def delete(self, notice_id: str) -> bool:
        return self._table.delete(notice_id)
