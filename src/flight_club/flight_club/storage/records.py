from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional
from uuid import uuid4

from ..common.datetime_utils import now_iso
from .backend import TableBackend
from .tables import TableSpec


def new_record_id(prefix: str) -> str:
    return f"{prefix}-{uuid4().hex}"


def plain(value: Any) -> Any:
    """Strip enums down to their stored value."""
    return value.value if isinstance(value, Enum) else value


def plain_fields(fields: Mapping[str, Any]) -> dict:
    return {key: plain(value) for key, value in fields.items()}


class TableAccessor:
    """Shared CRUD plumbing for the per-entity repositories."""

    def __init__(self, backend: TableBackend, spec: TableSpec, *, timestamp_field: Optional[str] = "created_at"):
        self._backend = backend
        self._spec = spec
        self._timestamp_field = timestamp_field

    def rows(self, *, order_by: Optional[str] = None, descending: bool = False, **filters: Any) -> list[dict]:
        return list(
            self._backend.select(
                self._spec.name,
                filters=plain_fields(filters) or None,
                order_by=order_by,
                descending=descending,
            )
        )

    def row(self, record_id: str) -> Optional[dict]:
        found = self._backend.select(self._spec.name, filters={"id": record_id})
        return dict(found[0]) if found else None

    def insert(self, fields: Mapping[str, Any]) -> dict:
        row = {"id": new_record_id(self._spec.id_prefix)}
        if self._timestamp_field:
            row[self._timestamp_field] = now_iso()
        row.update(plain_fields(fields))
        return self._backend.insert(self._spec.name, row)

    def update(self, record_id: str, changes: Mapping[str, Any]) -> Optional[dict]:
        return self._backend.update(self._spec.name, record_id, plain_fields(changes))

    def delete(self, record_id: str) -> bool:
        return self._backend.delete(self._spec.name, record_id)
