from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence


class TableBackend(Protocol):
    """Interface of a table store (remote service or local mirror).

    Rows cross this interface as plain dicts keyed by domain field names.
    Implementations raise BackendUnavailableError when they cannot serve a call.
    """

    def select(
        self,
        table: str,
        *,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> Sequence[dict]:
        raise NotImplementedError

    def insert(self, table: str, row: Mapping[str, Any]) -> dict:
        raise NotImplementedError

    def update(self, table: str, record_id: str, fields: Mapping[str, Any]) -> Optional[dict]:
        """Merge `fields` into the row. Returns the merged row, or None if absent."""

        raise NotImplementedError

    def delete(self, table: str, record_id: str) -> bool:
        raise NotImplementedError
