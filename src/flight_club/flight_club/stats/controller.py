from __future__ import annotations

from flask import Flask, current_app

from ..common.datetime_utils import today
from ..common.web import json_body, load_actor, login_required, ok, roles_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/stats/instructors", methods=["GET"], endpoint="instructor_overview")
    @roles_required(Role.ADMIN, Role.STAFF)
    def instructor_overview():
        now = today()
        return ok(
            instructors=container.stats_service.overview(now),
            inactive_juniors=container.stats_service.inactive_juniors(now),
        )

    @app.route("/api/stats/instructors/<instructor_id>", methods=["GET"], endpoint="instructor_summary")
    @login_required
    def instructor_summary(instructor_id: str):
        actor = load_actor(container.users_repo)
        if actor.id != instructor_id and not actor.role.is_staff:
            raise AuthorizationError("אין לך הרשאה")
        return ok(
            summary=container.stats_service.summary_for(instructor_id, today()),
            stats=container.stats_service.stats_for(instructor_id),
        )

    @app.route("/api/stats/instructors/<instructor_id>", methods=["POST"], endpoint="add_instructor_hours")
    @roles_required(Role.ADMIN)
    def add_instructor_hours(instructor_id: str):
        data = json_body()
        stat = container.stats_service.update_instructor_stats(
            instructor_id, str(data.get("lesson_type", "")), data.get("hours")
        )
        current_app.logger.info("hours added instructor=%s type=%s", instructor_id, stat.lesson_type)
        return ok(stat=stat)
