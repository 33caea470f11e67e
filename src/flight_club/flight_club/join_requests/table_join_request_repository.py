from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.enums import JoinRequestStatus
from ..storage.backend import TableBackend
from ..storage.records import TableAccessor
from ..storage.tables import JOIN_REQUESTS
from .model import JoinRequest
from .repository import JoinRequestRepository


def row_to_join_request(row: Mapping[str, Any]) -> JoinRequest:
    return JoinRequest(
        id=str(row["id"]),
        name=row.get("name") or "",
        email=row.get("email") or "",
        phone=row.get("phone"),
        message=row.get("message"),
        status=JoinRequestStatus(row.get("status") or JoinRequestStatus.PENDING.value),
        created_at=row.get("created_at"),
    )


class TableJoinRequestRepository(JoinRequestRepository):
    def __init__(self, backend: TableBackend):
        self._table = TableAccessor(backend, JOIN_REQUESTS)

    def list_all(self) -> Sequence[JoinRequest]:
        return [row_to_join_request(r) for r in self._table.rows(order_by="created_at", descending=True)]

    def create(self, *, name: str, email: str, phone: Optional[str], message: Optional[str]) -> JoinRequest:
        row = self._table.insert(
            {
                "name": name,
                "email": email,
                "phone": phone,
                "message": message,
                "status": JoinRequestStatus.PENDING,
            }
        )
        return row_to_join_request(row)
