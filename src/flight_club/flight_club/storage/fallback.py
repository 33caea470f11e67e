from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..core.exceptions import BackendUnavailableError
from .backend import TableBackend

logger = logging.getLogger(__name__)


class FallbackTableBackend(TableBackend):
    """Try the remote store first, serve from the local mirror when it fails.

    Known limitation: there is no synchronisation between the two stores.
    Writes made while the remote store is down stay local.
    """

    def __init__(self, primary: Optional[TableBackend], mirror: TableBackend):
        self._primary = primary
        self._mirror = mirror

    @property
    def remote_configured(self) -> bool:
        return self._primary is not None

    def _call(self, operation: str, table: str, *args, **kwargs):
        if self._primary is not None:
            try:
                return getattr(self._primary, operation)(table, *args, **kwargs)
            except BackendUnavailableError as exc:
                logger.warning("remote %s on %r failed, using local mirror: %s", operation, table, exc)
        return getattr(self._mirror, operation)(table, *args, **kwargs)

    def select(
        self,
        table: str,
        *,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> Sequence[dict]:
        return self._call("select", table, filters=filters, order_by=order_by, descending=descending)

    def insert(self, table: str, row: Mapping[str, Any]) -> dict:
        return self._call("insert", table, row)

    def update(self, table: str, record_id: str, fields: Mapping[str, Any]) -> Optional[dict]:
        return self._call("update", table, record_id, fields)

    def delete(self, table: str, record_id: str) -> bool:
        return self._call("delete", table, record_id)
