from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import today
from ..common.web import load_actor, roles_required
from ..container import Container
from ..core.enums import Role
from .csv_export import export_filename


def register(app: Flask, container: Container) -> None:
    @app.route("/api/export.csv", methods=["GET"], endpoint="export_csv")
    @roles_required(Role.ADMIN, Role.STAFF)
    def export_csv():
        actor = load_actor(container.users_repo)
        csv_bytes = container.export_service.export_csv(current_role=actor.role)
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={export_filename(today())}"},
        )
