"""Table definitions shared by every backend.

Column names are the domain (snake_case) field names; the local mirror
translates them at its own boundary.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TableSpec:
    name: str
    columns: tuple[str, ...]
    id_prefix: str

    def check_column(self, column: str) -> str:
        if column not in self.columns:
            raise KeyError(f"Unknown column {column!r} for table {self.name!r}")
        return column


USERS = TableSpec(
    name="users",
    columns=(
        "id",
        "name",
        "email",
        "phone",
        "age",
        "role",
        "status",
        "background",
        "password_hash",
        "no_show_count",
        "total_hours",
        "current_lesson",
        "created_at",
    ),
    id_prefix="user",
)

SCHEDULE = TableSpec(
    name="schedule",
    columns=(
        "id",
        "date",
        "time_start",
        "time_end",
        "day_type",
        "lead_instructor_id",
        "second_instructor_id",
        "trainee_id",
        "lesson_number",
        "notes",
        "completed",
        "attendance_marked",
        "created_at",
    ),
    id_prefix="slot",
)

NOTICES = TableSpec(
    name="notices",
    columns=("id", "content", "created_by", "created_at"),
    id_prefix="notice",
)

LOGS = TableSpec(
    name="logs",
    columns=("id", "user_id", "action", "details", "timestamp"),
    id_prefix="log",
)

INSTRUCTOR_STATS = TableSpec(
    name="instructor_stats",
    columns=("id", "instructor_id", "lesson_type", "hours"),
    id_prefix="stat",
)

JOIN_REQUESTS = TableSpec(
    name="join_requests",
    columns=("id", "name", "email", "phone", "message", "status", "created_at"),
    id_prefix="request",
)

ALL_TABLES: dict[str, TableSpec] = {
    spec.name: spec for spec in (USERS, SCHEDULE, NOTICES, LOGS, INSTRUCTOR_STATS, JOIN_REQUESTS)
}


def get_table(name: str) -> TableSpec:
    try:
        return ALL_TABLES[name]
    except KeyError:
        raise KeyError(f"Unknown table {name!r}") from None
