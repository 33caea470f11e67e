from __future__ import annotations

from ..activity.repository import LogRepository
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..schedules.repository import SlotRepository
from ..users.repository import UserRepository
from .csv_export import EXPORT_ENCODING, build_export_csv


class ExportService:
    def __init__(self, users: UserRepository, slots: SlotRepository, logs: LogRepository):
        self._users = users
        self._slots = slots
        self._logs = logs

    def export_csv(self, *, current_role: Role) -> bytes:
        if not current_role.is_staff:
            raise AuthorizationError("אין לך הרשאה")
        text = build_export_csv(self._users.list_all(), self._slots.list_all(), self._logs.list_all())
        return text.encode(EXPORT_ENCODING)
