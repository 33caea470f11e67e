from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import DayType
from ..storage.backend import TableBackend
from ..storage.records import TableAccessor
from ..storage.tables import SCHEDULE
from .model import Slot
from .repository import SlotRepository


def row_to_slot(row: Mapping[str, Any]) -> Slot:
    lesson = row.get("lesson_number")
    return Slot(
        id=str(row["id"]),
        date=str(row["date"]),
        time_start=str(row.get("time_start") or "")[:5],
        time_end=str(row.get("time_end") or "")[:5],
        day_type=DayType(row.get("day_type") or DayType.NORMAL.value),
        lead_instructor_id=row.get("lead_instructor_id") or None,
        second_instructor_id=row.get("second_instructor_id") or None,
        trainee_id=row.get("trainee_id") or None,
        lesson_number=int(lesson) if lesson not in (None, "") else None,
        notes=row.get("notes") or None,
        completed=bool(row.get("completed")),
        attendance_marked=bool(row.get("attendance_marked")),
        created_at=row.get("created_at"),
    )


def _chronological(slots: Sequence[Slot]) -> list[Slot]:
    return sorted(slots, key=lambda s: (s.date, s.time_start))


class TableSlotRepository(SlotRepository):
    def __init__(self, backend: TableBackend):
        self._table = TableAccessor(backend, SCHEDULE)

    def list_all(self) -> Sequence[Slot]:
        return _chronological([row_to_slot(r) for r in self._table.rows()])

    def list_by_date(self, day: date) -> Sequence[Slot]:
        return _chronological([row_to_slot(r) for r in self._table.rows(date=day.isoformat())])

    def list_by_month(self, year: int, month: int) -> Sequence[Slot]:
        prefix = f"{int(year):04d}-{int(month):02d}-"
        return [s for s in self.list_all() if s.date.startswith(prefix)]

    def get_by_id(self, slot_id: str) -> Optional[Slot]:
        row = self._table.row(slot_id)
        return row_to_slot(row) if row else None

    def create(
        self,
        *,
        day: date,
        time_start: str,
        time_end: str,
        day_type: DayType,
        notes: Optional[str] = None,
    ) -> Slot:
        row = self._table.insert(
            {
                "date": day.isoformat(),
                "time_start": time_start,
                "time_end": time_end,
                "day_type": day_type,
                "lead_instructor_id": None,
                "second_instructor_id": None,
                "trainee_id": None,
                "lesson_number": None,
                "notes": notes,
                "completed": False,
                "attendance_marked": False,
            }
        )
        return row_to_slot(row)

    def update(self, slot_id: str, changes: Mapping[str, Any]) -> Optional[Slot]:
        row = self._table.update(slot_id, changes)
        return row_to_slot(row) if row else None

    def delete(self, slot_id: str) -> bool:
        return self._table.delete(slot_id)
