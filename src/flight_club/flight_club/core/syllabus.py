"""Course syllabus: the ten simulator lessons of the training program."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .constants import MAX_LESSON


@dataclass(frozen=True)
class Lesson:
    number: int
    name: str
    name_en: str


SYLLABUS: tuple[Lesson, ...] = (
    Lesson(1, "היכרות עם הסימולטור והטסה בסיסית", "Simulator Introduction & Basic Flight"),
    Lesson(2, "מצבי טיסה בסיסיים חלק א'", "Basic Flight Conditions Part A"),
    Lesson(3, "מצבי טיסה בסיסיים חלק ב'", "Basic Flight Conditions Part B"),
    Lesson(4, "המראה ונחיתה חלק א'", "Takeoff & Landing Part A"),
    Lesson(5, "המראה ונחיתה חלק ב'", "Takeoff & Landing Part B"),
    Lesson(6, "המראה ונחיתה על המים", "Water Landing"),
    Lesson(7, 'בד"ח, Glass Cockpit, והפעלה עצמית (סולו)', "Pre-Flight Check, Glass Cockpit & Solo Operation"),
    Lesson(8, "EFB וניווט בסיסי", "EFB & Basic Navigation"),
    Lesson(9, "ניווטים מתקדמים", "Advanced Navigation"),
    Lesson(10, "גלגל זנב, טיסת לילה והשלמות", "Taildragger, Night Flight & Completion"),
)


def get_lesson(number: int) -> Optional[Lesson]:
    for lesson in SYLLABUS:
        if lesson.number == number:
            return lesson
    return None


def lesson_name(number: int) -> str:
    lesson = get_lesson(number)
    return f"שיעור {number}: {lesson.name}" if lesson else f"שיעור {number}"


def lesson_name_en(number: int) -> str:
    lesson = get_lesson(number)
    return f"Lesson {number}: {lesson.name_en}" if lesson else f"Lesson {number}"


def next_lesson(current: int) -> Optional[Lesson]:
    """Lesson following `current`, or None once the course is complete."""
    if current >= MAX_LESSON:
        return None
    return get_lesson(current + 1)
