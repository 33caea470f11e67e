"""No-show strikes and account freezing."""

from __future__ import annotations

from typing import Optional

from ..activity.repository import LogRepository
from ..core.constants import FREEZE_THRESHOLD
from ..core.enums import LogAction, Role, UserStatus
from ..core.exceptions import AuthorizationError, ConfirmationRequired, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository


def _require_confirmed(confirmed: bool) -> None:
    if not confirmed:
        raise ConfirmationRequired("נדרש אישור לביצוע הפעולה")


class DisciplineService:
    def __init__(self, users: UserRepository, logs: LogRepository):
        self._users = users
        self._logs = logs

    def _get(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("המשתמש לא נמצא")
        return user

    def _apply(self, user_id: str, changes: dict) -> User:
        updated = self._users.update(user_id, changes)
        if not updated:
            raise NotFoundError("המשתמש לא נמצא")
        return updated

    def increment_no_show(self, user_id: str) -> User:
        """Record one strike; the third strike freezes the account."""
        user = self._get(user_id)
        new_count = user.no_show_count + 1
        changes: dict[str, object] = {"no_show_count": new_count}
        frozen = new_count >= FREEZE_THRESHOLD
        if frozen:
            changes["status"] = UserStatus.FROZEN

        updated = self._apply(user_id, changes)
        self._logs.append(
            user_id=user_id,
            action=LogAction.NO_SHOW,
            details=f"פסילה מספר {new_count}{' - החשבון הוקפא' if frozen else ''}",
        )
        return updated

    def remove_no_show_strike(
        self,
        user_id: str,
        reason: str,
        notes: Optional[str] = None,
        *,
        current_role: Role,
        confirmed: bool,
    ) -> Optional[User]:
        """Take one strike back. Returns None (and changes nothing) when there is none."""
        if not current_role.is_staff:
            raise AuthorizationError("אין לך הרשאה")
        _require_confirmed(confirmed)

        user = self._get(user_id)
        if user.no_show_count <= 0:
            return None
        new_count = user.no_show_count - 1
        changes: dict[str, object] = {"no_show_count": new_count}
        if user.is_frozen and new_count < FREEZE_THRESHOLD:
            changes["status"] = UserStatus.ACTIVE

        updated = self._apply(user_id, changes)
        self._logs.append(
            user_id=user_id,
            action=LogAction.NOSHOW_REMOVED,
            details=f"הוסרה פסילה. סיבה: {reason}. {notes or ''}",
        )
        return updated

    def unfreeze(self, user_id: str, *, current_role: Role, confirmed: bool) -> User:
        """Admin override: active again with a clean strike count."""
        if current_role != Role.ADMIN:
            raise AuthorizationError("אין לך הרשאה")
        _require_confirmed(confirmed)

        self._get(user_id)
        return self._apply(user_id, {"status": UserStatus.ACTIVE, "no_show_count": 0})

    def freeze(self, user_id: str, *, current_role: Role, actor_id: str, reason: str = "", confirmed: bool) -> User:
        """Manual freeze by an admin, independent of the strike count."""
        if current_role != Role.ADMIN:
            raise AuthorizationError("אין לך הרשאה")
        _require_confirmed(confirmed)

        user = self._get(user_id)
        if user.role == Role.ADMIN:
            raise ValidationError("לא ניתן להקפיא חשבון אדמין")
        if user.is_frozen:
            return user

        updated = self._apply(user_id, {"status": UserStatus.FROZEN})
        reason = (reason or "").strip()
        self._logs.append(
            user_id=user_id,
            action=LogAction.ACCOUNT_FROZEN,
            details=f"החשבון הוקפא ידנית{f'. סיבה: {reason}' if reason else ''} (על ידי {actor_id})",
        )
        return updated
