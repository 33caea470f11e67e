from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} אינו תקין")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} חייב להכיל לפחות {min_len} תווים")
    return value


def require_email(value: Optional[str]) -> str:
    email = require_non_empty(value, "אימייל").lower()
    local, _, domain = email.partition("@")
    if not local or "." not in domain:
        raise ValidationError("כתובת אימייל לא תקינה")
    return email


def require_time(value: Optional[str], field_name: str) -> str:
    """Accept HH:MM (or HH:MM:SS) and normalize to HH:MM."""
    v = require_non_empty(value, field_name)
    parts = v.split(":")
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except (IndexError, ValueError):
        raise ValidationError(f"{field_name} אינו תקין (HH:MM)")
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValidationError(f"{field_name} אינו תקין (HH:MM)")
    return f"{hours:02d}:{minutes:02d}"


def optional_int(value, field_name: str) -> Optional[int]:
    """Whole number from form/JSON input; blank means not given."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{field_name} חייב להיות מספר שלם")
    try:
        return int(str(value).strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} חייב להיות מספר שלם")
