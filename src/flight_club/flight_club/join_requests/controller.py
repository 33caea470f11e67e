from __future__ import annotations

from flask import Flask

from ..common.web import json_body, load_actor, ok, roles_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/api/join-requests", methods=["POST"], endpoint="submit_join_request")
    def submit_join_request():
        data = json_body()
        req = container.join_request_service.submit(
            name=data.get("name", ""),
            email=data.get("email", ""),
            phone=data.get("phone"),
            message=data.get("message"),
        )
        return ok(201, request=req)

    @app.route("/api/join-requests", methods=["GET"], endpoint="list_join_requests")
    @roles_required(Role.ADMIN, Role.STAFF)
    def list_join_requests():
        actor = load_actor(container.users_repo)
        return ok(requests=container.join_request_service.list(current_role=actor.role))
