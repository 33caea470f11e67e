"""Write the full club export (users, schedule, activity log) to a CSV file.

Usage: python scripts/export_csv.py [output_dir]
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.flight_club.flight_club.common.datetime_utils import today
from src.flight_club.flight_club.container import build_container
from src.flight_club.flight_club.core.enums import Role
from src.flight_club.flight_club.reports.csv_export import export_filename
from src.flight_club.flight_club.storage.local_backend import JsonFileKeyValueStore


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=dict(settings.DB_CONFIG) if settings.REMOTE_BACKEND_ENABLED else None,
        mirror_store=JsonFileKeyValueStore(settings.LOCAL_MIRROR_DIR),
        admin_email=settings.ADMIN_EMAIL,
        admin_password=settings.ADMIN_PASSWORD,
    )

    out_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.cwd()
    out_dir.mkdir(parents=True, exist_ok=True)
    target = out_dir / export_filename(today())
    target.write_bytes(container.export_service.export_csv(current_role=Role.ADMIN))
    print(f"OK: exported -> {target}")


if __name__ == "__main__":
    main()
