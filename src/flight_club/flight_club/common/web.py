"""Flask helpers shared by the feature controllers."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from enum import Enum
from functools import wraps
from typing import Any

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..session import SessionHolder
from ..users.model import User
from ..users.repository import UserRepository


def current_session() -> SessionHolder:
    return SessionHolder(session)


def unauthorized():
    return jsonify({"success": False, "message": "יש להתחבר כדי להמשיך"}), 401


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not current_session().is_authenticated:
            return unauthorized()
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    """Allow only the given roles, judged by the session snapshot."""

    allowed = {Role(r) for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = current_session().current_user
            if user is None:
                return unauthorized()
            if user.role not in allowed:
                return jsonify({"success": False, "message": "אין לך הרשאה"}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator


def load_actor(users: UserRepository) -> User:
    """The logged-in user as currently stored, not the session copy."""
    holder = current_session()
    user = users.get_by_id(holder.user_id) if holder.user_id else None
    if user is None:
        holder.clear()
        raise AuthorizationError("יש להתחבר כדי להמשיך")
    return user


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def is_confirmed(data: dict[str, Any]) -> bool:
    value = data.get("confirmed", request.args.get("confirmed"))
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes"}
    return bool(value)


def enum_arg(enum_cls, value, label: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"{label} אינו תקין")


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def dump(obj: Any) -> Any:
    """Dataclass (or a list of them) to JSON-ready dicts. Password hashes never leave."""
    if isinstance(obj, (list, tuple)):
        return [dump(o) for o in obj]
    if is_dataclass(obj):
        data = _plain(asdict(obj))
        data.pop("password_hash", None)
        return data
    return _plain(obj)


def ok(status: int = 200, **payload: Any):
    return jsonify({"success": True, **{k: dump(v) for k, v in payload.items()}}), status
