from __future__ import annotations

from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import MAX_LESSON
from ..core.enums import Role, UserStatus
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..session import SessionHolder
from .model import User
from .repository import UserRepository

SIGNUP_ROLES = frozenset({Role.TRAINEE, Role.INSTRUCTOR_SENIOR, Role.INSTRUCTOR_JUNIOR, Role.STAFF})


class AuthService:
    """Use case: login / signup / logout."""

    def __init__(self, users: UserRepository):
        self._users = users

    def login(self, email: str, password: str, *, session: SessionHolder) -> User:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user:
            raise AuthenticationError("משתמש לא נמצא")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except (TypeError, ValueError):
            # e.g. empty or corrupted hashes
            ok = False
        if not ok:
            raise AuthenticationError("סיסמה שגויה")

        if user.is_frozen:
            raise AuthenticationError("החשבון שלך מוקפא. פנה לאדמין.")

        session.start(user)
        return user

    def signup(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: Role,
        session: SessionHolder,
        phone: Optional[str] = None,
        age: Optional[int] = None,
        background: Optional[str] = None,
    ) -> User:
        name = require_non_empty(name, "שם")
        email = require_email(email)
        require_min_length(password, "סיסמה", 6)

        if role not in SIGNUP_ROLES:
            raise ValidationError("לא ניתן להירשם עם תפקיד זה")

        if self._users.get_by_email(email):
            raise ValidationError("כתובת האימייל כבר קיימת במערכת")

        user = self._users.create(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            phone=(phone or "").strip() or None,
            age=age,
            background=(background or "").strip() or None,
        )
        session.start(user)
        return user

    @staticmethod
    def logout(*, session: SessionHolder) -> None:
        session.clear()


class UserService:
    """Use case: profile edits and member management (admin/staff)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def list_instructors(self) -> Sequence[User]:
        return [u for u in self._users.list_all() if u.role.is_instructor]

    def get(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("המשתמש לא נמצא")
        return user

    def update_profile(
        self,
        user_id: str,
        *,
        session: SessionHolder,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        background: Optional[str] = None,
    ) -> User:
        changes: dict[str, object] = {}
        if name is not None:
            changes["name"] = require_non_empty(name, "שם")
        if email is not None:
            email = require_email(email)
            other = self._users.get_by_email(email)
            if other and other.id != user_id:
                raise ValidationError("כתובת האימייל כבר קיימת במערכת")
            changes["email"] = email
        if phone is not None:
            changes["phone"] = phone.strip() or None
        if background is not None:
            changes["background"] = background.strip() or None

        if not changes:
            return self.get(user_id)

        updated = self._users.update(user_id, changes)
        if not updated:
            raise NotFoundError("המשתמש לא נמצא")
        session.refresh(updated)
        return updated

    def update_training_progress(
        self,
        user_id: str,
        *,
        current_role: Role,
        status: Optional[UserStatus] = None,
        current_lesson: Optional[int] = None,
    ) -> User:
        """Move a trainee along the course (lesson number, solo/graduate status).

        Freezing goes through DisciplineService, never through here.
        """

        if not current_role.is_staff:
            raise AuthorizationError("אין לך הרשאה")

        user = self.get(user_id)
        changes: dict[str, object] = {}
        if status is not None:
            if status == UserStatus.FROZEN or user.is_frozen:
                raise ValidationError("שינוי הקפאה מתבצע דרך ניהול פסילות")
            changes["status"] = status
        if current_lesson is not None:
            if not 1 <= int(current_lesson) <= MAX_LESSON:
                raise ValidationError(f"מספר שיעור חייב להיות בין 1 ל-{MAX_LESSON}")
            changes["current_lesson"] = int(current_lesson)

        if not changes:
            return user
        updated = self._users.update(user_id, changes)
        if not updated:
            raise NotFoundError("המשתמש לא נמצא")
        return updated
