"""Full data export as a single CSV (users, schedule, activity log).

Encode with EXPORT_ENCODING (UTF-8 with a byte-order mark) so Excel keeps
the Hebrew intact. Each section has one fixed header row.
"""

from __future__ import annotations

import csv
import io
from datetime import date
from typing import Sequence

from ..activity.model import LogEntry
from ..schedules.model import Slot
from ..users.model import User

USERS_SECTION = "=== משתמשים ==="
USERS_HEADER = ["שם", "אימייל", "טלפון", "תפקיד", "סטטוס", "פסילות", "שעות"]

SCHEDULE_SECTION = "=== לוח שיבוצים ==="
SCHEDULE_HEADER = ["תאריך", "שעת התחלה", "שעת סיום", "סוג", "מדריך מוביל", "מדריך משני", "מתאמן", "שיעור"]

LOGS_SECTION = "=== לוג פעילות ==="
LOGS_HEADER = ["תאריך", "משתמש", "פעולה", "פרטים"]

UNKNOWN_USER = "לא ידוע"
EXPORT_ENCODING = "utf-8-sig"


def export_filename(today: date) -> str:
    return f"beit_halohem_export_{today.isoformat()}.csv"


def build_export_csv(users: Sequence[User], slots: Sequence[Slot], logs: Sequence[LogEntry]) -> str:
    names = {u.id: u.name for u in users}

    def name_of(user_id) -> str:
        return names.get(user_id, "") if user_id else ""

    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")

    writer.writerow([USERS_SECTION])
    writer.writerow(USERS_HEADER)
    for u in users:
        writer.writerow([u.name, u.email, u.phone or "", u.role.value, u.status.value, u.no_show_count, u.total_hours])

    writer.writerow([])
    writer.writerow([SCHEDULE_SECTION])
    writer.writerow(SCHEDULE_HEADER)
    for s in slots:
        writer.writerow(
            [
                s.date,
                s.time_start,
                s.time_end,
                s.day_type.value,
                name_of(s.lead_instructor_id),
                name_of(s.second_instructor_id),
                name_of(s.trainee_id),
                s.lesson_number if s.lesson_number is not None else "",
            ]
        )

    writer.writerow([])
    writer.writerow([LOGS_SECTION])
    writer.writerow(LOGS_HEADER)
    for entry in logs:
        writer.writerow([entry.timestamp, names.get(entry.user_id, UNKNOWN_USER), entry.action.value, entry.details])

    return out.getvalue()
