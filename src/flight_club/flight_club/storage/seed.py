"""Initial content for an empty local mirror."""

from __future__ import annotations

from ..common.datetime_utils import now_iso
from ..core.constants import DEFAULT_LESSON
from ..core.enums import Role, UserStatus
from .tables import ALL_TABLES

ADMIN_ID = "admin-1"
WELCOME_NOTICE = "ברוכים הבאים למערכת ניהול הסימולטור!"


def default_mirror_rows(*, admin_email: str, admin_password_hash: str) -> dict[str, list[dict]]:
    created_at = now_iso()
    rows: dict[str, list[dict]] = {name: [] for name in ALL_TABLES}
    rows["users"] = [
        {
            "id": ADMIN_ID,
            "name": "אדמין ראשי",
            "email": admin_email.strip().lower(),
            "phone": None,
            "age": None,
            "role": Role.ADMIN.value,
            "status": UserStatus.ACTIVE.value,
            "background": "מנהל מערכת",
            "password_hash": admin_password_hash,
            "no_show_count": 0,
            "total_hours": 0,
            "current_lesson": DEFAULT_LESSON,
            "created_at": created_at,
        }
    ]
    rows["notices"] = [
        {"id": "notice-1", "content": WELCOME_NOTICE, "created_by": ADMIN_ID, "created_at": created_at}
    ]
    return rows
