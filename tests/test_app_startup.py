from __future__ import annotations

import logging
import sys
import types

from src.flight_club.flight_club.main import create_app


def _settings(mirror_dir):
    settings = types.ModuleType("unreachable_db_settings")
    settings.SECRET_KEY = "test-secret"
    settings.DEBUG = False
    settings.TESTING = True
    settings.LOG_LEVEL = "WARNING"
    settings.REMOTE_BACKEND_ENABLED = True
    settings.DB_CONFIG = {"host": "127.0.0.1", "port": 1, "user": "root", "password": "", "database": "beit_halohem"}
    settings.LOCAL_MIRROR_DIR = str(mirror_dir)
    settings.ADMIN_EMAIL = "admin@beithalohem.org"
    settings.ADMIN_PASSWORD = "admin123"
    settings.AUTO_INIT_DB = True
    settings.AUTO_SEED_DB = True
    return settings


def test_unreachable_database_starts_on_local_mirror(tmp_path, monkeypatch, caplog):
    monkeypatch.setitem(sys.modules, "unreachable_db_settings", _settings(tmp_path))

    with caplog.at_level(logging.WARNING):
        app = create_app(settings_module="unreachable_db_settings")

    assert "local mirror" in caplog.text

    resp = app.test_client().post("/api/auth/login", json={"email": "admin@beithalohem.org", "password": "admin123"})
    assert resp.status_code == 200
    assert (tmp_path / "beit_halohem_users.json").exists()
