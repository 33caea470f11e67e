from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class InstructorStat:
    """Accumulated hours of one instructor for one lesson type."""

    id: str
    instructor_id: str
    lesson_type: str
    hours: float


@dataclass(frozen=True)
class InstructorSummary:
    instructor_id: str
    name: str
    role: Role
    total_hours: float
    last_activity: Optional[str]
    inactive: bool
    lessons_by_number: dict[int, int] = field(default_factory=dict)
