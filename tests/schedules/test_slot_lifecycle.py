from __future__ import annotations

from datetime import date

import pytest

from src.flight_club.flight_club.activity.table_log_repository import TableLogRepository
from src.flight_club.flight_club.core.enums import DayType, LogAction, Recurrence, Role, Seat, SlotOccupancy, UserStatus
from src.flight_club.flight_club.core.exceptions import AuthorizationError, ConfirmationRequired, ValidationError
from src.flight_club.flight_club.schedules.model import TimeWindow
from src.flight_club.flight_club.schedules.service import SlotLifecycleService, occurrence_dates
from src.flight_club.flight_club.schedules.table_slot_repository import TableSlotRepository
from src.flight_club.flight_club.storage.local_backend import LocalMirrorBackend, MemoryKeyValueStore
from src.flight_club.flight_club.users.discipline import DisciplineService
from src.flight_club.flight_club.users.table_user_repository import TableUserRepository


class Club:
    """Services wired over an in-memory local mirror."""

    def __init__(self):
        backend = LocalMirrorBackend(MemoryKeyValueStore())
        self.users = TableUserRepository(backend)
        self.slots = TableSlotRepository(backend)
        self.logs = TableLogRepository(backend)
        self.service = SlotLifecycleService(self.slots, self.users, self.logs, DisciplineService(self.users, self.logs))

    def member(self, name: str, role: Role, **changes):
        user = self.users.create(name=name, email=f"{name.lower()}@club.test", password_hash="x", role=role)
        if changes:
            user = self.users.update(user.id, changes)
        return user

    def slot(self, day_type: DayType = DayType.NORMAL, day: date = date(2030, 5, 1)):
        return self.slots.create(day=day, time_start="18:00", time_end="19:00", day_type=day_type)


@pytest.fixture
def club():
    return Club()


def test_lead_then_second_then_lead_cannot_take_second(club):
    a = club.member("Avi", Role.INSTRUCTOR_SENIOR)
    b = club.member("Bina", Role.INSTRUCTOR_JUNIOR)
    slot = club.slot()

    slot = club.service.register_as_lead(slot.id, actor_id=a.id)
    assert slot.lead_instructor_id == a.id

    slot = club.service.register_as_second(slot.id, actor_id=b.id)
    assert slot.second_instructor_id == b.id

    with pytest.raises(ValidationError):
        club.service.register_as_second(slot.id, actor_id=a.id)


def test_lead_is_rejected_as_second_while_second_is_vacant(club):
    a = club.member("Avi", Role.INSTRUCTOR_SENIOR)
    slot = club.service.register_as_lead(club.slot().id, actor_id=a.id)

    with pytest.raises(ValidationError, match="מוביל"):
        club.service.register_as_second(slot.id, actor_id=a.id)
    assert club.slots.get_by_id(slot.id).second_instructor_id is None


def test_second_requires_a_lead(club):
    b = club.member("Bina", Role.INSTRUCTOR_JUNIOR)
    slot = club.slot()
    with pytest.raises(ValidationError):
        club.service.register_as_second(slot.id, actor_id=b.id)


def test_only_instructors_can_lead(club):
    t = club.member("Tal", Role.TRAINEE)
    with pytest.raises(AuthorizationError):
        club.service.register_as_lead(club.slot().id, actor_id=t.id)


def test_lead_seat_taken(club):
    a = club.member("Avi", Role.INSTRUCTOR_SENIOR)
    b = club.member("Bina", Role.INSTRUCTOR_JUNIOR)
    slot = club.service.register_as_lead(club.slot().id, actor_id=a.id)
    with pytest.raises(ValidationError):
        club.service.register_as_lead(slot.id, actor_id=b.id)
    assert club.slots.get_by_id(slot.id).lead_instructor_id == a.id


def test_trainee_registration_copies_current_lesson(club):
    a = club.member("Avi", Role.INSTRUCTOR_SENIOR)
    t = club.member("Tal", Role.TRAINEE, current_lesson=3)
    slot = club.service.register_as_lead(club.slot().id, actor_id=a.id)

    slot = club.service.register_as_trainee(slot.id, actor_id=t.id)

    assert slot.trainee_id == t.id
    assert slot.lesson_number == 3
    assert slot.occupancy == SlotOccupancy.FULL


def test_trainee_needs_lead_instructor(club):
    t = club.member("Tal", Role.TRAINEE)
    slot = club.slot()
    with pytest.raises(ValidationError):
        club.service.register_as_trainee(slot.id, actor_id=t.id)
    assert club.slots.get_by_id(slot.id).trainee_id is None


def test_instructor_training_slot_never_takes_a_trainee(club):
    a = club.member("Avi", Role.INSTRUCTOR_SENIOR)
    t = club.member("Tal", Role.TRAINEE)
    slot = club.service.register_as_lead(club.slot(DayType.INSTRUCTOR_TRAINING).id, actor_id=a.id)

    with pytest.raises(ValidationError):
        club.service.register_as_trainee(slot.id, actor_id=t.id)
    assert club.slots.get_by_id(slot.id).trainee_id is None


@pytest.mark.parametrize("status", [UserStatus.ACTIVE, UserStatus.IN_TRAINING])
def test_independent_slot_rejects_non_solo_trainees(club, status):
    a = club.member("Avi", Role.INSTRUCTOR_SENIOR)
    t = club.member("Tal", Role.TRAINEE, status=status)
    slot = club.service.register_as_lead(club.slot(DayType.INDEPENDENT).id, actor_id=a.id)

    with pytest.raises(ValidationError):
        club.service.register_as_trainee(slot.id, actor_id=t.id)


@pytest.mark.parametrize("status", [UserStatus.SOLO, UserStatus.GRADUATE])
def test_independent_slot_accepts_solo_and_graduates(club, status):
    a = club.member("Avi", Role.INSTRUCTOR_SENIOR)
    t = club.member("Tal", Role.TRAINEE, status=status)
    slot = club.service.register_as_lead(club.slot(DayType.INDEPENDENT).id, actor_id=a.id)

    assert club.service.register_as_trainee(slot.id, actor_id=t.id).trainee_id == t.id


def test_frozen_trainee_cannot_register(club):
    a = club.member("Avi", Role.INSTRUCTOR_SENIOR)
    t = club.member("Tal", Role.TRAINEE, status=UserStatus.FROZEN, no_show_count=3)
    slot = club.service.register_as_lead(club.slot().id, actor_id=a.id)
    with pytest.raises(ValidationError):
        club.service.register_as_trainee(slot.id, actor_id=t.id)


def test_cancel_requires_confirmation(club):
    a = club.member("Avi", Role.INSTRUCTOR_SENIOR)
    slot = club.service.register_as_lead(club.slot().id, actor_id=a.id)
    with pytest.raises(ConfirmationRequired):
        club.service.cancel_registration(slot.id, Seat.LEAD, actor_id=a.id, confirmed=False)
    assert club.slots.get_by_id(slot.id).lead_instructor_id == a.id


def test_cancel_seat_not_held_is_rejected_without_change(club):
    a = club.member("Avi", Role.INSTRUCTOR_SENIOR)
    b = club.member("Bina", Role.INSTRUCTOR_JUNIOR)
    slot = club.service.register_as_lead(club.slot().id, actor_id=a.id)

    with pytest.raises(ValidationError):
        club.service.cancel_registration(slot.id, Seat.LEAD, actor_id=b.id, confirmed=True)

    assert club.slots.get_by_id(slot.id).lead_instructor_id == a.id
    assert club.logs.list_all() == []


def test_cancel_vacates_seat_and_logs(club):
    a = club.member("Avi", Role.INSTRUCTOR_SENIOR)
    slot = club.service.register_as_lead(club.slot().id, actor_id=a.id)

    slot = club.service.cancel_registration(slot.id, Seat.LEAD, actor_id=a.id, confirmed=True)

    assert slot.lead_instructor_id is None
    [entry] = club.logs.list_all()
    assert entry.action == LogAction.REGISTRATION_CANCELLED
    assert entry.user_id == a.id
    assert entry.details == f"ביטול רישום (lead) למשבצת {slot.id}"


def test_occurrence_dates():
    assert occurrence_dates(date(2024, 1, 1), Recurrence.NONE) == [date(2024, 1, 1)]
    assert occurrence_dates(date(2024, 1, 1), Recurrence.BIWEEKLY) == [
        date(2024, 1, 1),
        date(2024, 1, 15),
        date(2024, 1, 29),
    ]


def test_weekly_training_day_with_two_windows_creates_ten_slots(club):
    admin = club.member("Admin", Role.ADMIN)

    created = club.service.create_training_day(
        date(2024, 1, 1),
        DayType.NORMAL,
        [TimeWindow("18:00", "19:00"), TimeWindow("19:00", "20:00")],
        Recurrence.WEEKLY,
        actor_id=admin.id,
    )

    assert len(created) == 10
    assert len(club.slots.list_all()) == 10
    assert sorted({s.date for s in created}) == ["2024-01-01", "2024-01-08", "2024-01-15", "2024-01-22", "2024-01-29"]
    assert len({s.id for s in created}) == 10


def test_training_day_is_admin_only(club):
    staff = club.member("Sara", Role.STAFF)
    with pytest.raises(AuthorizationError):
        club.service.create_training_day(
            date(2024, 1, 1), DayType.NORMAL, [TimeWindow("18:00", "19:00")], actor_id=staff.id
        )
    assert club.slots.list_all() == []


def test_training_day_rejects_bad_windows(club):
    admin = club.member("Admin", Role.ADMIN)
    with pytest.raises(ValidationError):
        club.service.create_training_day(date(2024, 1, 1), DayType.NORMAL, [], actor_id=admin.id)
    with pytest.raises(ValidationError):
        club.service.create_training_day(
            date(2024, 1, 1), DayType.NORMAL, [TimeWindow("19:00", "18:00")], actor_id=admin.id
        )
    assert club.slots.list_all() == []


def test_deleting_one_occurrence_keeps_the_others(club):
    admin = club.member("Admin", Role.ADMIN)
    created = club.service.create_training_day(
        date(2024, 1, 1), DayType.NORMAL, [TimeWindow("18:00", "19:00")], Recurrence.BIWEEKLY, actor_id=admin.id
    )

    club.service.delete_slot(created[0].id, actor_id=admin.id, confirmed=True)

    assert [s.date for s in club.slots.list_all()] == ["2024-01-15", "2024-01-29"]
    [entry] = club.logs.list_all()
    assert entry.action == LogAction.SLOT_CANCELLED
    assert entry.details == "בוטלה משבצת בתאריך 2024-01-01 בשעה 18:00"


def test_delete_requires_confirmation(club):
    admin = club.member("Admin", Role.ADMIN)
    slot = club.slot()
    with pytest.raises(ConfirmationRequired):
        club.service.delete_slot(slot.id, actor_id=admin.id, confirmed=False)
    assert club.slots.get_by_id(slot.id) is not None


def test_fast_track_by_staff(club):
    staff = club.member("Sara", Role.STAFF)
    a = club.member("Avi", Role.INSTRUCTOR_SENIOR)
    t = club.member("Tal", Role.TRAINEE, current_lesson=5)
    slot = club.service.register_as_lead(club.slot().id, actor_id=a.id)

    slot = club.service.fast_track_register(slot.id, trainee_id=t.id, actor_id=staff.id)
    assert (slot.trainee_id, slot.lesson_number) == (t.id, 5)


def test_fast_track_rejected_for_instructors(club):
    a = club.member("Avi", Role.INSTRUCTOR_SENIOR)
    t = club.member("Tal", Role.TRAINEE)
    slot = club.service.register_as_lead(club.slot().id, actor_id=a.id)
    with pytest.raises(AuthorizationError):
        club.service.fast_track_register(slot.id, trainee_id=t.id, actor_id=a.id)


def test_open_slots_for_trainees(club):
    a = club.member("Avi", Role.INSTRUCTOR_SENIOR)
    open_slot = club.service.register_as_lead(club.slot(day=date(2030, 5, 2)).id, actor_id=a.id)
    club.slot(day=date(2030, 5, 3))
    club.service.register_as_lead(club.slot(day=date(2020, 1, 1)).id, actor_id=a.id)
    club.service.register_as_lead(club.slot(DayType.INSTRUCTOR_TRAINING, day=date(2030, 5, 4)).id, actor_id=a.id)

    assert [s.id for s in club.service.open_slots_for_trainees(date(2030, 5, 1))] == [open_slot.id]


def test_calendar_queries(club):
    club.slot(day=date(2030, 5, 1))
    club.slot(day=date(2030, 5, 20))
    club.slot(day=date(2030, 6, 1))

    assert len(club.service.slots_on(date(2030, 5, 1))) == 1
    assert [s.date for s in club.service.slots_in_month(2030, 5)] == ["2030-05-01", "2030-05-20"]
    with pytest.raises(ValidationError):
        club.service.slots_in_month(2030, 13)


def test_attendance_completes_lesson(club):
    a = club.member("Avi", Role.INSTRUCTOR_SENIOR)
    t = club.member("Tal", Role.TRAINEE, current_lesson=2)
    slot = club.service.register_as_lead(club.slot().id, actor_id=a.id)
    club.service.register_as_trainee(slot.id, actor_id=t.id)

    slot = club.service.mark_attendance(slot.id, actor_id=a.id, attended=True)

    assert slot.completed and slot.attendance_marked
    [entry] = club.logs.list_all()
    assert entry.action == LogAction.LESSON_COMPLETED
    assert entry.user_id == t.id
    assert entry.details.startswith("שיעור 2:")


def test_absence_records_a_strike(club):
    a = club.member("Avi", Role.INSTRUCTOR_SENIOR)
    t = club.member("Tal", Role.TRAINEE)
    slot = club.service.register_as_lead(club.slot().id, actor_id=a.id)
    club.service.register_as_trainee(slot.id, actor_id=t.id)

    slot = club.service.mark_attendance(slot.id, actor_id=a.id, attended=False)

    assert slot.attendance_marked and not slot.completed
    assert club.users.get_by_id(t.id).no_show_count == 1
    with pytest.raises(ValidationError):
        club.service.mark_attendance(slot.id, actor_id=a.id, attended=False)


def test_attendance_only_by_slot_instructors_or_admin(club):
    a = club.member("Avi", Role.INSTRUCTOR_SENIOR)
    other = club.member("Omer", Role.INSTRUCTOR_JUNIOR)
    t = club.member("Tal", Role.TRAINEE)
    slot = club.service.register_as_lead(club.slot().id, actor_id=a.id)
    club.service.register_as_trainee(slot.id, actor_id=t.id)

    with pytest.raises(AuthorizationError):
        club.service.mark_attendance(slot.id, actor_id=other.id, attended=True)


def test_save_notes(club):
    a = club.member("Avi", Role.INSTRUCTOR_SENIOR)
    slot = club.service.register_as_lead(club.slot().id, actor_id=a.id)

    assert club.service.save_notes(slot.id, "  נחיתה טובה ", actor_id=a.id).notes == "נחיתה טובה"
    assert club.service.save_notes(slot.id, "", actor_id=a.id).notes is None


def test_slots_for_user(club):
    a = club.member("Avi", Role.INSTRUCTOR_SENIOR)
    mine = club.service.register_as_lead(club.slot(day=date(2030, 5, 2)).id, actor_id=a.id)
    club.slot(day=date(2030, 5, 3))

    assert [s.id for s in club.service.slots_for_user(a.id)] == [mine.id]


def test_second_instructor_cannot_also_take_vacated_lead(club):
    a = club.member("Avi", Role.INSTRUCTOR_SENIOR)
    b = club.member("Bina", Role.INSTRUCTOR_JUNIOR)
    slot = club.service.register_as_lead(club.slot().id, actor_id=a.id)
    club.service.register_as_second(slot.id, actor_id=b.id)
    club.service.cancel_registration(slot.id, Seat.LEAD, actor_id=a.id, confirmed=True)

    with pytest.raises(ValidationError):
        club.service.register_as_lead(slot.id, actor_id=b.id)

    stored = club.slots.get_by_id(slot.id)
    assert (stored.lead_instructor_id, stored.second_instructor_id) == (None, b.id)
