from __future__ import annotations

from typing import Protocol, Sequence

from .model import Notice


class NoticeRepository(Protocol):
    def list_all(self) -> Sequence[Notice]:
        """All notices, newest first."""

        raise NotImplementedError

    def create(self, *, content: str, created_by: str) -> Notice:
        raise NotImplementedError

    def delete(self, notice_id: str) -> bool:
        raise NotImplementedError
