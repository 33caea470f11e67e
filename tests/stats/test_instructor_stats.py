from __future__ import annotations

from datetime import date

import pytest

from src.flight_club.flight_club.core.enums import DayType, Role
from src.flight_club.flight_club.core.exceptions import NotFoundError, ValidationError
from src.flight_club.flight_club.schedules.table_slot_repository import TableSlotRepository
from src.flight_club.flight_club.stats.service import InstructorStatsService
from src.flight_club.flight_club.stats.table_stat_repository import TableInstructorStatRepository
from src.flight_club.flight_club.storage.local_backend import LocalMirrorBackend, MemoryKeyValueStore
from src.flight_club.flight_club.users.table_user_repository import TableUserRepository

TODAY = date(2024, 3, 31)


@pytest.fixture
def env():
    backend = LocalMirrorBackend(MemoryKeyValueStore())
    users = TableUserRepository(backend)
    slots = TableSlotRepository(backend)
    svc = InstructorStatsService(TableInstructorStatRepository(backend), users, slots)
    return svc, users, slots


def _instructor(users, name, role=Role.INSTRUCTOR_SENIOR):
    return users.create(name=name, email=f"{name.lower()}@club.test", password_hash="x", role=role)


def _taught(slots, day, lead_id, *, lesson=None, completed=False):
    slot = slots.create(day=day, time_start="18:00", time_end="19:00", day_type=DayType.NORMAL)
    return slots.update(slot.id, {"lead_instructor_id": lead_id, "lesson_number": lesson, "completed": completed})


def test_update_creates_then_accumulates(env):
    svc, users, _ = env
    avi = _instructor(users, "Avi")

    first = svc.update_instructor_stats(avi.id, "simulator", 1.5)
    second = svc.update_instructor_stats(avi.id, "simulator", 2)
    svc.update_instructor_stats(avi.id, "ground", 1)

    assert second.id == first.id
    assert second.hours == 3.5
    assert sorted((s.lesson_type, s.hours) for s in svc.stats_for(avi.id)) == [("ground", 1.0), ("simulator", 3.5)]
    assert users.get_by_id(avi.id).total_hours == 4.5


@pytest.mark.parametrize("hours", [0, -1, "abc", None])
def test_invalid_hours_rejected(env, hours):
    svc, users, _ = env
    avi = _instructor(users, "Avi")
    with pytest.raises(ValidationError):
        svc.update_instructor_stats(avi.id, "simulator", hours)
    assert svc.stats_for(avi.id) == []


def test_completed_slots_do_not_add_hours(env):
    svc, users, slots = env
    avi = _instructor(users, "Avi")
    _taught(slots, date(2024, 3, 30), avi.id, lesson=1, completed=True)

    assert svc.summary_for(avi.id, TODAY).total_hours == 0.0


def test_overview_activity_and_lesson_counts(env):
    svc, users, slots = env
    avi = _instructor(users, "Avi")
    bina = _instructor(users, "Bina", Role.INSTRUCTOR_JUNIOR)
    gil = _instructor(users, "Gil", Role.INSTRUCTOR_JUNIOR)
    users.create(name="Tal", email="tal@club.test", password_hash="x", role=Role.TRAINEE)

    _taught(slots, date(2024, 3, 25), avi.id, lesson=2, completed=True)
    _taught(slots, date(2024, 3, 28), avi.id, lesson=2, completed=True)
    _taught(slots, date(2024, 4, 10), avi.id, lesson=3)
    _taught(slots, date(2024, 3, 1), bina.id, lesson=1, completed=True)

    overview = {s.name: s for s in svc.overview(TODAY)}

    assert set(overview) == {"Avi", "Bina", "Gil"}
    assert overview["Avi"].last_activity == "2024-03-28"
    assert not overview["Avi"].inactive
    assert overview["Avi"].lessons_by_number[2] == 2
    assert overview["Avi"].lessons_by_number[3] == 0
    assert overview["Bina"].inactive
    assert overview["Gil"].last_activity is None

    assert sorted(s.name for s in svc.inactive_juniors(TODAY)) == ["Bina", "Gil"]


def test_summary_for_unknown_instructor(env):
    svc, users, _ = env
    trainee = users.create(name="Tal", email="tal@club.test", password_hash="x", role=Role.TRAINEE)
    with pytest.raises(NotFoundError):
        svc.summary_for(trainee.id, TODAY)


def test_hours_for_unknown_or_non_instructor_write_nothing(env):
    svc, users, _ = env
    trainee = users.create(name="Tal", email="tal@club.test", password_hash="x", role=Role.TRAINEE)

    with pytest.raises(NotFoundError):
        svc.update_instructor_stats("no-such-user", "simulator", 2)
    with pytest.raises(NotFoundError):
        svc.update_instructor_stats(trainee.id, "simulator", 2)

    assert svc.stats_for("no-such-user") == []
    assert svc.stats_for(trainee.id) == []
    assert users.get_by_id(trainee.id).total_hours == 0.0
