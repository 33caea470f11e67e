from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for permission checks."""

    ADMIN = "admin"
    STAFF = "staff"
    INSTRUCTOR_SENIOR = "instructor_senior"
    INSTRUCTOR_JUNIOR = "instructor_junior"
    TRAINEE = "trainee"

    @property
    def is_instructor(self) -> bool:
        return self in (Role.INSTRUCTOR_SENIOR, Role.INSTRUCTOR_JUNIOR)

    @property
    def is_staff(self) -> bool:
        return self in (Role.ADMIN, Role.STAFF)


class UserStatus(str, Enum):
    ACTIVE = "active"
    IN_TRAINING = "in_training"
    SOLO = "solo"
    GRADUATE = "graduate"
    FROZEN = "frozen"

    @property
    def can_train_independently(self) -> bool:
        return self in (UserStatus.SOLO, UserStatus.GRADUATE)


class DayType(str, Enum):
    NORMAL = "normal"
    INDEPENDENT = "independent"
    INSTRUCTOR_TRAINING = "instructor_training"


class Seat(str, Enum):
    """The three occupant positions on a slot."""

    LEAD = "lead"
    SECOND = "second"
    TRAINEE = "trainee"


class Recurrence(str, Enum):
    NONE = "none"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"


class LogAction(str, Enum):
    NO_SHOW = "no_show"
    NOSHOW_REMOVED = "noshow_removed"
    SLOT_CANCELLED = "slot_cancelled"
    REGISTRATION_CANCELLED = "registration_cancelled"
    LESSON_COMPLETED = "lesson_completed"
    ACCOUNT_FROZEN = "account_frozen"


class SlotOccupancy(str, Enum):
    """Calendar colouring of a slot."""

    EMPTY = "empty"
    PARTIAL = "partial"
    FULL = "full"
    INDEPENDENT = "independent"


class JoinRequestStatus(str, Enum):
    PENDING = "pending"
