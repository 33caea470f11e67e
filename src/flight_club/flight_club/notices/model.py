from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Notice:
    id: str
    content: str
    created_by: Optional[str]
    created_at: str
