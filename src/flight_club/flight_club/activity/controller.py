from __future__ import annotations

from flask import Flask, request

from ..common.web import load_actor, login_required, ok, roles_required
from ..container import Container
from ..core.constants import DEFAULT_LOG_LIMIT
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/api/logs", methods=["GET"], endpoint="list_logs")
    @roles_required(Role.ADMIN, Role.STAFF)
    def list_logs():
        limit = request.args.get("limit", default=DEFAULT_LOG_LIMIT, type=int)
        user_id = request.args.get("user_id") or None
        return ok(logs=container.activity_service.list(limit=limit, user_id=user_id))

    @app.route("/api/me/logs", methods=["GET"], endpoint="my_logs")
    @login_required
    def my_logs():
        """A member's own strikes and completed lessons."""
        actor = load_actor(container.users_repo)
        return ok(logs=container.activity_service.list(user_id=actor.id))
