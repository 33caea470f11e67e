from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Mapping, Optional, Sequence

import mysql.connector

from ..core.exceptions import BackendUnavailableError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_value
from .backend import TableBackend
from .tables import get_table


def _normalize_row(row: Mapping[str, Any]) -> dict:
    return {key: normalize_mysql_value(value) for key, value in row.items()}


class MySQLTableBackend(TableBackend):
    """Remote table store on MySQL.

    Table and column names come from the static table specs only; values are
    always bound as parameters.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def _cursor(self):
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                yield cur
        except mysql.connector.Error as exc:
            raise BackendUnavailableError(str(exc)) from exc

    def _select_by_id(self, cur, table: str, record_id: str) -> Optional[dict]:
        spec = get_table(table)
        cur.execute(
            f"SELECT {', '.join(spec.columns)} FROM {spec.name} WHERE id=%s",
            (record_id,),
        )
        row = fetchone(cur)
        return _normalize_row(row) if row else None

    def select(
        self,
        table: str,
        *,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> Sequence[dict]:
        spec = get_table(table)
        clauses: list[str] = []
        params: list[object] = []
        for column, value in (filters or {}).items():
            spec.check_column(column)
            if value is None:
                clauses.append(f"{column} IS NULL")
            else:
                clauses.append(f"{column}=%s")
                params.append(value)

        sql = f"SELECT {', '.join(spec.columns)} FROM {spec.name}"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        if order_by:
            spec.check_column(order_by)
            sql += f" ORDER BY {order_by} {'DESC' if descending else 'ASC'}"

        with self._cursor() as cur:
            cur.execute(sql, tuple(params))
            return [_normalize_row(r) for r in fetchall(cur)]

    def insert(self, table: str, row: Mapping[str, Any]) -> dict:
        spec = get_table(table)
        columns = [spec.check_column(c) for c in row]
        placeholders = ",".join(["%s"] * len(columns))

        with self._cursor() as cur:
            cur.execute(
                f"INSERT INTO {spec.name}({', '.join(columns)}) VALUES({placeholders})",
                tuple(row[c] for c in columns),
            )
            stored = self._select_by_id(cur, table, str(row["id"]))
        return stored if stored is not None else dict(row)

    def update(self, table: str, record_id: str, fields: Mapping[str, Any]) -> Optional[dict]:
        spec = get_table(table)
        columns = [spec.check_column(c) for c in fields if c != "id"]

        with self._cursor() as cur:
            if columns:
                assignments = ", ".join(f"{c}=%s" for c in columns)
                cur.execute(
                    f"UPDATE {spec.name} SET {assignments} WHERE id=%s",
                    tuple(fields[c] for c in columns) + (record_id,),
                )
            # rowcount is 0 when the values did not change, so re-read instead.
            return self._select_by_id(cur, table, record_id)

    def delete(self, table: str, record_id: str) -> bool:
        spec = get_table(table)
        with self._cursor() as cur:
            cur.execute(f"DELETE FROM {spec.name} WHERE id=%s", (record_id,))
            return cur.rowcount > 0
