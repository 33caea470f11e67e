from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from ..activity.repository import LogRepository
from ..common.validators import require_time
from ..core.constants import DEFAULT_LESSON, RECURRENCE_RULES
from ..core.enums import DayType, LogAction, Recurrence, Role, Seat
from ..core.exceptions import AuthorizationError, ConfirmationRequired, NotFoundError, ValidationError
from ..core.syllabus import lesson_name
from ..users.discipline import DisciplineService
from ..users.model import User
from ..users.repository import UserRepository
from .model import SEAT_FIELDS, Slot, TimeWindow
from .repository import SlotRepository


def occurrence_dates(start: date, recurrence: Recurrence) -> list[date]:
    """The first date plus every repeat produced by the recurrence mode."""
    dates = [start]
    if recurrence != Recurrence.NONE:
        repeats, interval = RECURRENCE_RULES[recurrence.value]
        dates.extend(start + timedelta(days=interval * n) for n in range(1, repeats + 1))
    return dates


class SlotLifecycleService:
    """Use cases around a slot's three seats (lead, second, trainee).

    Every guard failure raises before anything is written. Multi-step actions
    (seat change then log entry) are not atomic.
    """

    def __init__(
        self,
        slots: SlotRepository,
        users: UserRepository,
        logs: LogRepository,
        discipline: DisciplineService,
    ):
        self._slots = slots
        self._users = users
        self._logs = logs
        self._discipline = discipline

    # ------------------------------------------------------------------
    # lookups
    # ------------------------------------------------------------------

    def get(self, slot_id: str) -> Slot:
        slot = self._slots.get_by_id(slot_id)
        if not slot:
            raise NotFoundError("המשבצת לא נמצאה")
        return slot

    def _actor(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("המשתמש לא נמצא")
        return user

    def _save(self, slot_id: str, changes: dict) -> Slot:
        updated = self._slots.update(slot_id, changes)
        if not updated:
            raise NotFoundError("המשבצת לא נמצאה")
        return updated

    def slots_on(self, day: date) -> Sequence[Slot]:
        return self._slots.list_by_date(day)

    def slots_in_month(self, year: int, month: int) -> Sequence[Slot]:
        if not 1 <= int(month) <= 12:
            raise ValidationError("חודש לא תקין")
        return self._slots.list_by_month(int(year), int(month))

    def slots_for_user(self, user_id: str) -> Sequence[Slot]:
        """Every slot the user holds a seat on, oldest first."""
        return [s for s in self._slots.list_all() if s.involves(user_id)]

    def open_slots_for_trainees(self, today: date) -> Sequence[Slot]:
        """Upcoming slots with a lead instructor and a free trainee seat."""
        return [
            s
            for s in self._slots.list_all()
            if s.date >= today.isoformat()
            and s.lead_instructor_id
            and not s.trainee_id
            and s.day_type != DayType.INSTRUCTOR_TRAINING
        ]

    # ------------------------------------------------------------------
    # registration
    # ------------------------------------------------------------------

    @staticmethod
    def _require_not_frozen(user: User) -> None:
        if user.is_frozen:
            raise ValidationError("החשבון שלך מוקפא. פנה לאדמין.")

    def register_as_lead(self, slot_id: str, *, actor_id: str) -> Slot:
        actor = self._actor(actor_id)
        slot = self.get(slot_id)
        self._require_not_frozen(actor)

        if not actor.role.is_instructor:
            raise AuthorizationError("רק מדריכים יכולים להירשם כמדריך")
        if slot.lead_instructor_id:
            raise ValidationError("כבר רשום מדריך מוביל למשבצת")
        if slot.second_instructor_id == actor.id:
            raise ValidationError("אתה כבר רשום כמדריך משני במשבצת זו")

        return self._save(slot.id, {"lead_instructor_id": actor.id})

    def register_as_second(self, slot_id: str, *, actor_id: str) -> Slot:
        actor = self._actor(actor_id)
        slot = self.get(slot_id)
        self._require_not_frozen(actor)

        if not actor.role.is_instructor:
            raise AuthorizationError("רק מדריכים יכולים להירשם כמדריך")
        if not slot.lead_instructor_id:
            raise ValidationError("אין מדריך מוביל למשבצת")
        if slot.second_instructor_id:
            raise ValidationError("כבר רשום מדריך משני למשבצת")
        if slot.lead_instructor_id == actor.id:
            raise ValidationError("אתה כבר רשום כמדריך מוביל במשבצת זו")

        return self._save(slot.id, {"second_instructor_id": actor.id})

    @staticmethod
    def _check_trainee_seat(slot: Slot, trainee: User) -> None:
        if trainee.role != Role.TRAINEE:
            raise AuthorizationError("רק מתאמנים יכולים להירשם לשיעור")
        if trainee.is_frozen:
            raise ValidationError("החשבון שלך מוקפא. פנה לאדמין.")
        if slot.day_type == DayType.INSTRUCTOR_TRAINING:
            raise ValidationError("משבצת הכשרת מדריכים אינה פתוחה למתאמנים")
        if not slot.lead_instructor_id:
            raise ValidationError("אין מדריך מוביל למשבצת")
        if slot.trainee_id:
            raise ValidationError("כבר רשום מתאמן למשבצת")
        if slot.day_type == DayType.INDEPENDENT and not trainee.status.can_train_independently:
            raise ValidationError("אימון עצמאי זמין רק לבעלי סטטוס סולו/בוגר")

    def register_as_trainee(self, slot_id: str, *, actor_id: str) -> Slot:
        actor = self._actor(actor_id)
        slot = self.get(slot_id)
        self._check_trainee_seat(slot, actor)

        return self._save(
            slot.id,
            {"trainee_id": actor.id, "lesson_number": actor.current_lesson or DEFAULT_LESSON},
        )

    def fast_track_register(self, slot_id: str, *, trainee_id: str, actor_id: str) -> Slot:
        """Admin/staff places a trainee directly into an open slot."""
        actor = self._actor(actor_id)
        if not actor.role.is_staff:
            raise AuthorizationError("אין לך הרשאה")

        trainee = self._actor(trainee_id)
        slot = self.get(slot_id)
        self._check_trainee_seat(slot, trainee)

        return self._save(
            slot.id,
            {"trainee_id": trainee.id, "lesson_number": trainee.current_lesson or DEFAULT_LESSON},
        )

    def cancel_registration(self, slot_id: str, seat: Seat, *, actor_id: str, confirmed: bool) -> Slot:
        if not confirmed:
            raise ConfirmationRequired("האם אתה בטוח שברצונך לבטל את הרישום?")

        slot = self.get(slot_id)
        if slot.occupant(seat) != actor_id:
            raise ValidationError("אינך רשום בתפקיד זה במשבצת")

        updated = self._save(slot.id, {SEAT_FIELDS[seat]: None})
        self._logs.append(
            user_id=actor_id,
            action=LogAction.REGISTRATION_CANCELLED,
            details=f"ביטול רישום ({seat.value}) למשבצת {slot.id}",
        )
        return updated

    # ------------------------------------------------------------------
    # admin: training days
    # ------------------------------------------------------------------

    def _require_admin(self, actor_id: str) -> User:
        actor = self._actor(actor_id)
        if actor.role != Role.ADMIN:
            raise AuthorizationError("אין לך הרשאה")
        return actor

    @staticmethod
    def _clean_windows(windows: Iterable[TimeWindow]) -> list[TimeWindow]:
        cleaned: list[TimeWindow] = []
        for w in windows:
            start = require_time(w.start, "שעת התחלה")
            end = require_time(w.end, "שעת סיום")
            if end <= start:
                raise ValidationError("שעת הסיום חייבת להיות אחרי שעת ההתחלה")
            cleaned.append(TimeWindow(start=start, end=end))
        if not cleaned:
            raise ValidationError("יש להוסיף לפחות משבצת זמן אחת")
        return cleaned

    def create_training_day(
        self,
        day: date,
        day_type: DayType,
        windows: Iterable[TimeWindow],
        recurrence: Recurrence = Recurrence.NONE,
        *,
        actor_id: str,
    ) -> list[Slot]:
        """Create one slot per window on `day` and on every recurring date.

        Each occurrence is an independent record; there is no series id.
        """

        self._require_admin(actor_id)
        cleaned = self._clean_windows(windows)

        created: list[Slot] = []
        for occurrence in occurrence_dates(day, recurrence):
            for w in cleaned:
                created.append(
                    self._slots.create(day=occurrence, time_start=w.start, time_end=w.end, day_type=day_type)
                )
        return created

    def delete_slot(self, slot_id: str, *, actor_id: str, confirmed: bool) -> None:
        self._require_admin(actor_id)
        if not confirmed:
            raise ConfirmationRequired("האם למחוק את המשבצת?")

        slot = self.get(slot_id)
        if not self._slots.delete(slot.id):
            raise NotFoundError("המשבצת לא נמצאה")
        self._logs.append(
            user_id=actor_id,
            action=LogAction.SLOT_CANCELLED,
            details=f"בוטלה משבצת בתאריך {slot.date} בשעה {slot.time_start}",
        )

    # ------------------------------------------------------------------
    # after the lesson
    # ------------------------------------------------------------------

    def _require_staff_or_slot_instructor(self, actor: User, slot: Slot) -> None:
        if actor.role == Role.ADMIN:
            return
        if actor.role.is_instructor and actor.id in (slot.lead_instructor_id, slot.second_instructor_id):
            return
        raise AuthorizationError("אין לך הרשאה")

    def mark_attendance(self, slot_id: str, *, actor_id: str, attended: bool) -> Slot:
        """Close out a lesson: completed when the trainee came, a strike when not."""
        actor = self._actor(actor_id)
        slot = self.get(slot_id)
        self._require_staff_or_slot_instructor(actor, slot)

        if not slot.trainee_id:
            raise ValidationError("אין מתאמן רשום במשבצת")
        if slot.attendance_marked:
            raise ValidationError("הנוכחות כבר סומנה למשבצת זו")

        if not attended:
            updated = self._save(slot.id, {"attendance_marked": True})
            self._discipline.increment_no_show(slot.trainee_id)
            return updated

        updated = self._save(slot.id, {"attendance_marked": True, "completed": True})
        self._logs.append(
            user_id=slot.trainee_id,
            action=LogAction.LESSON_COMPLETED,
            details=f"{lesson_name(slot.lesson_number or DEFAULT_LESSON)} ({slot.date} {slot.time_start})",
        )
        return updated

    def save_notes(self, slot_id: str, notes: Optional[str], *, actor_id: str) -> Slot:
        actor = self._actor(actor_id)
        slot = self.get(slot_id)
        self._require_staff_or_slot_instructor(actor, slot)
        return self._save(slot.id, {"notes": (notes or "").strip() or None})
