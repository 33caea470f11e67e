from __future__ import annotations

from flask import Flask

from ..common.web import is_confirmed, json_body, load_actor, login_required, ok, roles_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/api/notices", methods=["GET"], endpoint="list_notices")
    @login_required
    def list_notices():
        return ok(notices=container.notice_service.list())

    @app.route("/api/notices", methods=["POST"], endpoint="post_notice")
    @roles_required(Role.ADMIN)
    def post_notice():
        actor = load_actor(container.users_repo)
        notice = container.notice_service.post(json_body().get("content", ""), current_role=actor.role, author_id=actor.id)
        return ok(201, notice=notice)

    @app.route("/api/notices/<notice_id>", methods=["DELETE"], endpoint="delete_notice")
    @roles_required(Role.ADMIN)
    def delete_notice(notice_id: str):
        actor = load_actor(container.users_repo)
        container.notice_service.delete(notice_id, current_role=actor.role, confirmed=is_confirmed(json_body()))
        return ok()
