from __future__ import annotations

from typing import Sequence

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ConfirmationRequired, NotFoundError
from .model import Notice
from .repository import NoticeRepository


class NoticeService:
    """Notice board: everyone reads, only the admin posts and deletes."""

    def __init__(self, notices: NoticeRepository):
        self._notices = notices

    def list(self) -> Sequence[Notice]:
        return self._notices.list_all()

    def post(self, content: str, *, current_role: Role, author_id: str) -> Notice:
        if current_role != Role.ADMIN:
            raise AuthorizationError("אין לך הרשאה")
        content = require_non_empty(content, "תוכן ההודעה")
        return self._notices.create(content=content, created_by=author_id)

    def delete(self, notice_id: str, *, current_role: Role, confirmed: bool) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("אין לך הרשאה")
        if not confirmed:
            raise ConfirmationRequired("האם למחוק את ההודעה?")
        if not self._notices.delete(notice_id):
            raise NotFoundError("ההודעה לא נמצאה")
