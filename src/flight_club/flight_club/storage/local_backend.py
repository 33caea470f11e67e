"""Local mirror used when the remote table store is unavailable.

Each table is kept as one JSON array under a named key of a simple
key-value store, the same layout the browser client used in localStorage.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Protocol, Sequence

from ..core.constants import STORAGE_KEY_PREFIX
from .backend import TableBackend
from .fields import from_mirror, to_mirror
from .tables import get_table


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileKeyValueStore(KeyValueStore):
    """One file per key under `directory`; survives process restarts."""

    def __init__(self, directory: str | Path):
        self._dir = Path(directory)
        self._dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        safe = "".join(ch if ch.isalnum() or ch in "-_." else "_" for ch in key)
        return self._dir / f"{safe}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        fd, tmp = tempfile.mkstemp(dir=self._dir, prefix=".tmp-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


def _sort_key(value: Any) -> tuple:
    # None sorts first; mixed numeric/str values fall back to their text form.
    if value is None:
        return (0, "")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (1, value)
    return (2, str(value))


class LocalMirrorBackend(TableBackend):
    def __init__(self, store: KeyValueStore, *, key_prefix: str = STORAGE_KEY_PREFIX):
        self._store = store
        self._key_prefix = key_prefix

    def storage_key(self, table: str) -> str:
        return f"{self._key_prefix}_{get_table(table).name}"

    def _load(self, table: str) -> list[dict]:
        raw = self._store.get(self.storage_key(table))
        if not raw:
            return []
        return [from_mirror(item) for item in json.loads(raw)]

    def _save(self, table: str, rows: Iterable[Mapping[str, Any]]) -> None:
        payload = [to_mirror(r) for r in rows]
        self._store.set(self.storage_key(table), json.dumps(payload, ensure_ascii=False))

    def has_table(self, table: str) -> bool:
        return self._store.get(self.storage_key(table)) is not None

    def initialize(self, defaults: Mapping[str, Sequence[Mapping[str, Any]]]) -> None:
        """Write default rows for every table that has never been stored."""
        for table, rows in defaults.items():
            if not self.has_table(table):
                self._save(table, rows)

    def select(
        self,
        table: str,
        *,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> Sequence[dict]:
        spec = get_table(table)
        rows = self._load(table)
        for column, value in (filters or {}).items():
            spec.check_column(column)
            rows = [r for r in rows if r.get(column) == value]
        if order_by:
            spec.check_column(order_by)
            rows.sort(key=lambda r: _sort_key(r.get(order_by)), reverse=descending)
        return rows

    def insert(self, table: str, row: Mapping[str, Any]) -> dict:
        spec = get_table(table)
        for column in row:
            spec.check_column(column)
        rows = self._load(table)
        stored = dict(row)
        rows.append(stored)
        self._save(table, rows)
        return dict(stored)

    def update(self, table: str, record_id: str, fields: Mapping[str, Any]) -> Optional[dict]:
        spec = get_table(table)
        for column in fields:
            spec.check_column(column)
        rows = self._load(table)
        for index, row in enumerate(rows):
            if row.get("id") == record_id:
                merged = {**row, **{k: v for k, v in fields.items() if k != "id"}}
                rows[index] = merged
                self._save(table, rows)
                return dict(merged)
        return None

    def delete(self, table: str, record_id: str) -> bool:
        rows = self._load(table)
        remaining = [r for r in rows if r.get("id") != record_id]
        if len(remaining) == len(rows):
            return False
        self._save(table, remaining)
        return True
