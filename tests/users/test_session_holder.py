from __future__ import annotations

from src.flight_club.flight_club.core.enums import Role, UserStatus
from src.flight_club.flight_club.session import SESSION_KEY, SessionHolder
from src.flight_club.flight_club.users.model import User


def _user(**overrides):
    data = dict(id="user-1", name="Tal", email="tal@club.test", role=Role.TRAINEE, status=UserStatus.IN_TRAINING, password_hash="hash")
    data.update(overrides)
    return User(**data)


def test_snapshot_is_plain_and_has_no_password():
    storage = {}
    SessionHolder(storage).start(_user())

    assert storage[SESSION_KEY]["role"] == "trainee"
    assert "password_hash" not in storage[SESSION_KEY]


def test_refresh_ignores_other_users():
    holder = SessionHolder({})
    holder.start(_user())

    holder.refresh(_user(id="user-2", name="Other"))
    assert holder.current_user.name == "Tal"

    holder.refresh(_user(name="Tal Cohen"))
    assert holder.current_user.name == "Tal Cohen"
    assert holder.current_user.role == Role.TRAINEE

