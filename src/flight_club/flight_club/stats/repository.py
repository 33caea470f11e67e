from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import InstructorStat


class InstructorStatRepository(Protocol):
    def list_all(self) -> Sequence[InstructorStat]:
        raise NotImplementedError

    def list_by_instructor(self, instructor_id: str) -> Sequence[InstructorStat]:
        raise NotImplementedError

    def find(self, *, instructor_id: str, lesson_type: str) -> Optional[InstructorStat]:
        raise NotImplementedError

    def create(self, *, instructor_id: str, lesson_type: str, hours: float) -> InstructorStat:
        raise NotImplementedError

    def set_hours(self, stat_id: str, hours: float) -> Optional[InstructorStat]:
        raise NotImplementedError
