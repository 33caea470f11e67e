from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

import mysql.connector
from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfirmationRequired,
    DomainError,
    NotFoundError,
)
from .database.bootstrap import apply_schema, ensure_admin_user, list_tables
from .storage.local_backend import JsonFileKeyValueStore

from .container import Container, build_container
from .activity.controller import register as register_activity
from .join_requests.controller import register as register_join_requests
from .notices.controller import register as register_notices
from .reports.controller import register as register_reports
from .schedules.controller import register as register_schedules
from .stats.controller import register as register_stats
from .users.controller import register as register_users

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def _register_error_handlers(app: Flask) -> None:
    def _fail(message: str, status: int, **extra):
        return jsonify({"success": False, "message": message, **extra}), status

    @app.errorhandler(ConfirmationRequired)
    def confirmation_required(e: ConfirmationRequired):
        return _fail(str(e), 400, confirmation_required=True)

    @app.errorhandler(AuthenticationError)
    def authentication_failed(e: AuthenticationError):
        return _fail(str(e), 401)

    @app.errorhandler(AuthorizationError)
    def forbidden(e: AuthorizationError):
        return _fail(str(e), 403)

    @app.errorhandler(NotFoundError)
    def not_found(e: NotFoundError):
        return _fail(str(e), 404)

    @app.errorhandler(DomainError)
    def domain_error(e: DomainError):
        return _fail(str(e), 400)

    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        return _fail(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def unexpected(e: Exception):
        app.logger.exception("unhandled error")
        return _fail(str(e) if app.config["DEBUG"] else "שגיאת מערכת", 500)


def _bootstrap_database(app: Flask, settings, db_config: dict) -> None:
    """Prepare the remote store. An unreachable server leaves the app on the local mirror."""
    try:
        _apply_bootstrap(app, settings, db_config)
    except mysql.connector.Error as exc:
        app.logger.warning("remote database bootstrap skipped, serving from the local mirror: %s", exc)


def _apply_bootstrap(app: Flask, settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        app.logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        ensure_admin_user(
            db_config,
            email=getattr(settings, "ADMIN_EMAIL"),
            password=getattr(settings, "ADMIN_PASSWORD"),
        )
        app.logger.info("admin account ready")


def create_app(container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.ensure_ascii = False

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        remote_enabled = bool(getattr(settings, "REMOTE_BACKEND_ENABLED", False))
        db_config = getattr(settings, "DB_CONFIG") if remote_enabled else None
        app.logger.info(
            "settings=%s remote=%s mirror=%s",
            settings_module,
            f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
            if db_config
            else "disabled",
            getattr(settings, "LOCAL_MIRROR_DIR"),
        )
        if db_config:
            _bootstrap_database(app, settings, db_config)

        container = build_container(
            db_config=db_config,
            mirror_store=JsonFileKeyValueStore(getattr(settings, "LOCAL_MIRROR_DIR")),
            admin_email=getattr(settings, "ADMIN_EMAIL"),
            admin_password=getattr(settings, "ADMIN_PASSWORD"),
        )

    app.extensions["flight_club"] = container
    _register_error_handlers(app)

    register_users(app, container)
    register_schedules(app, container)
    register_notices(app, container)
    register_activity(app, container)
    register_stats(app, container)
    register_join_requests(app, container)
    register_reports(app, container)

    return app
