from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import DayType
from .model import Slot


class SlotRepository(Protocol):
    def list_all(self) -> Sequence[Slot]:
        raise NotImplementedError

    def list_by_date(self, day: date) -> Sequence[Slot]:
        raise NotImplementedError

    def list_by_month(self, year: int, month: int) -> Sequence[Slot]:
        raise NotImplementedError

    def get_by_id(self, slot_id: str) -> Optional[Slot]:
        raise NotImplementedError

    def create(
        self,
        *,
        day: date,
        time_start: str,
        time_end: str,
        day_type: DayType,
        notes: Optional[str] = None,
    ) -> Slot:
        """Create an unassigned slot (no seats taken, not completed)."""

        raise NotImplementedError

    def update(self, slot_id: str, changes: Mapping[str, Any]) -> Optional[Slot]:
        raise NotImplementedError

    def delete(self, slot_id: str) -> bool:
        raise NotImplementedError
