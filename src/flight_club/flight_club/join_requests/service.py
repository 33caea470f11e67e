from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import require_email, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from .model import JoinRequest
from .repository import JoinRequestRepository


class JoinRequestService:
    def __init__(self, requests: JoinRequestRepository):
        self._requests = requests

    def submit(self, *, name: str, email: str, phone: Optional[str] = None, message: Optional[str] = None) -> JoinRequest:
        return self._requests.create(
            name=require_non_empty(name, "שם"),
            email=require_email(email),
            phone=(phone or "").strip() or None,
            message=(message or "").strip() or None,
        )

    def list(self, *, current_role: Role) -> Sequence[JoinRequest]:
        if not current_role.is_staff:
            raise AuthorizationError("אין לך הרשאה")
        return self._requests.list_all()
