from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..storage.backend import TableBackend
from ..storage.records import TableAccessor
from ..storage.tables import INSTRUCTOR_STATS
from .model import InstructorStat
from .repository import InstructorStatRepository


def row_to_stat(row: Mapping[str, Any]) -> InstructorStat:
    return InstructorStat(
        id=str(row["id"]),
        instructor_id=str(row["instructor_id"]),
        lesson_type=str(row["lesson_type"]),
        hours=float(row.get("hours") or 0),
    )


class TableInstructorStatRepository(InstructorStatRepository):
    def __init__(self, backend: TableBackend):
        self._table = TableAccessor(backend, INSTRUCTOR_STATS, timestamp_field=None)

    def list_all(self) -> Sequence[InstructorStat]:
        return [row_to_stat(r) for r in self._table.rows()]

    def list_by_instructor(self, instructor_id: str) -> Sequence[InstructorStat]:
        return [row_to_stat(r) for r in self._table.rows(instructor_id=instructor_id)]

    def find(self, *, instructor_id: str, lesson_type: str) -> Optional[InstructorStat]:
        rows = self._table.rows(instructor_id=instructor_id, lesson_type=lesson_type)
        return row_to_stat(rows[0]) if rows else None

    def create(self, *, instructor_id: str, lesson_type: str, hours: float) -> InstructorStat:
        row = self._table.insert({"instructor_id": instructor_id, "lesson_type": lesson_type, "hours": hours})
        return row_to_stat(row)

    def set_hours(self, stat_id: str, hours: float) -> Optional[InstructorStat]:
        row = self._table.update(stat_id, {"hours": hours})
        return row_to_stat(row) if row else None
