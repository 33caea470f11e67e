from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import JoinRequest


class JoinRequestRepository(Protocol):
    def list_all(self) -> Sequence[JoinRequest]:
        raise NotImplementedError

    def create(self, *, name: str, email: str, phone: Optional[str], message: Optional[str]) -> JoinRequest:
        raise NotImplementedError
