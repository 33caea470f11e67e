from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Sequence

from ..core.constants import INACTIVE_INSTRUCTOR_DAYS
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..core.syllabus import SYLLABUS
from ..schedules.model import Slot
from ..schedules.repository import SlotRepository
from ..users.model import User
from ..users.repository import UserRepository
from .model import InstructorStat, InstructorSummary
from .repository import InstructorStatRepository


class InstructorStatsService:
    """Instructor hour tracking and the activity overview.

    Hours are credited only through update_instructor_stats; completing a
    slot does not add hours by itself.
    """

    def __init__(self, stats: InstructorStatRepository, users: UserRepository, slots: SlotRepository):
        self._stats = stats
        self._users = users
        self._slots = slots

    def update_instructor_stats(self, instructor_id: str, lesson_type: str, hours: float) -> InstructorStat:
        lesson_type = (lesson_type or "").strip()
        if not lesson_type:
            raise ValidationError("סוג שיעור אינו תקין")
        try:
            hours = float(hours)
        except (TypeError, ValueError):
            raise ValidationError("מספר שעות אינו תקין")
        if hours <= 0:
            raise ValidationError("מספר שעות חייב להיות חיובי")

        user = self._users.get_by_id(instructor_id)
        if not user or not user.role.is_instructor:
            raise NotFoundError("המדריך לא נמצא")

        existing = self._stats.find(instructor_id=instructor_id, lesson_type=lesson_type)
        if existing:
            stat = self._stats.set_hours(existing.id, existing.hours + hours) or existing
        else:
            stat = self._stats.create(instructor_id=instructor_id, lesson_type=lesson_type, hours=hours)

        self._users.update(instructor_id, {"total_hours": user.total_hours + hours})
        return stat

    def stats_for(self, instructor_id: str) -> Sequence[InstructorStat]:
        return self._stats.list_by_instructor(instructor_id)

    @staticmethod
    def _taught_by(slots: Sequence[Slot], instructor_id: str) -> list[Slot]:
        return [s for s in slots if instructor_id in (s.lead_instructor_id, s.second_instructor_id)]

    @staticmethod
    def _lesson_counts(slots: Sequence[Slot]) -> dict[int, int]:
        counts = {lesson.number: 0 for lesson in SYLLABUS}
        for s in slots:
            if s.completed and s.lesson_number in counts:
                counts[s.lesson_number] += 1
        return counts

    def _summarize(self, instructor: User, slots: Sequence[Slot], today: date) -> InstructorSummary:
        taught = self._taught_by(slots, instructor.id)
        past = [s.date for s in taught if s.date <= today.isoformat()]
        last_activity: Optional[str] = max(past) if past else None
        cutoff = (today - timedelta(days=INACTIVE_INSTRUCTOR_DAYS)).isoformat()
        return InstructorSummary(
            instructor_id=instructor.id,
            name=instructor.name,
            role=instructor.role,
            total_hours=instructor.total_hours,
            last_activity=last_activity,
            inactive=last_activity is None or last_activity < cutoff,
            lessons_by_number=self._lesson_counts(taught),
        )

    def overview(self, today: date) -> list[InstructorSummary]:
        slots = self._slots.list_all()
        return [self._summarize(u, slots, today) for u in self._users.list_all() if u.role.is_instructor]

    def inactive_juniors(self, today: date) -> list[InstructorSummary]:
        return [s for s in self.overview(today) if s.role == Role.INSTRUCTOR_JUNIOR and s.inactive]

    def summary_for(self, instructor_id: str, today: date) -> InstructorSummary:
        user = self._users.get_by_id(instructor_id)
        if not user or not user.role.is_instructor:
            raise NotFoundError("המדריך לא נמצא")
        return self._summarize(user, self._slots.list_all(), today)
