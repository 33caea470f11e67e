from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import generate_password_hash

from .activity.service import ActivityLogService
from .activity.table_log_repository import TableLogRepository
from .database.connection import DBConfig, DatabaseConnection
from .join_requests.service import JoinRequestService
from .join_requests.table_join_request_repository import TableJoinRequestRepository
from .notices.service import NoticeService
from .notices.table_notice_repository import TableNoticeRepository
from .reports.service import ExportService
from .schedules.service import SlotLifecycleService
from .schedules.table_slot_repository import TableSlotRepository
from .stats.service import InstructorStatsService
from .stats.table_stat_repository import TableInstructorStatRepository
from .storage.fallback import FallbackTableBackend
from .storage.local_backend import KeyValueStore, LocalMirrorBackend
from .storage.mysql_backend import MySQLTableBackend
from .storage.seed import default_mirror_rows
from .users.discipline import DisciplineService
from .users.service import AuthService, UserService
from .users.table_user_repository import TableUserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    backend: FallbackTableBackend

    users_repo: TableUserRepository
    slots_repo: TableSlotRepository
    notices_repo: TableNoticeRepository
    logs_repo: TableLogRepository
    stats_repo: TableInstructorStatRepository
    join_requests_repo: TableJoinRequestRepository

    auth_service: AuthService
    user_service: UserService
    discipline_service: DisciplineService
    slot_service: SlotLifecycleService
    notice_service: NoticeService
    activity_service: ActivityLogService
    stats_service: InstructorStatsService
    join_request_service: JoinRequestService
    export_service: ExportService


def build_container(
    *,
    mirror_store: KeyValueStore,
    db_config: Optional[dict] = None,
    admin_email: str = "admin@beithalohem.org",
    admin_password: str = "admin123",
) -> Container:
    """Wire repositories and services.

    The remote store is used only when `db_config` is given; the local mirror
    is always present and seeded with an admin account on first use.
    """

    primary = None
    if db_config:
        primary = MySQLTableBackend(DatabaseConnection.get_instance(DBConfig.from_mapping(db_config)))
    else:
        logger.warning("remote table store not configured, using the local mirror only")

    mirror = LocalMirrorBackend(mirror_store)
    mirror.initialize(
        default_mirror_rows(admin_email=admin_email, admin_password_hash=generate_password_hash(admin_password))
    )
    backend = FallbackTableBackend(primary, mirror)

    users_repo = TableUserRepository(backend)
    slots_repo = TableSlotRepository(backend)
    notices_repo = TableNoticeRepository(backend)
    logs_repo = TableLogRepository(backend)
    stats_repo = TableInstructorStatRepository(backend)
    join_requests_repo = TableJoinRequestRepository(backend)

    discipline_service = DisciplineService(users_repo, logs_repo)

    return Container(
        backend=backend,
        users_repo=users_repo,
        slots_repo=slots_repo,
        notices_repo=notices_repo,
        logs_repo=logs_repo,
        stats_repo=stats_repo,
        join_requests_repo=join_requests_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        discipline_service=discipline_service,
        slot_service=SlotLifecycleService(slots_repo, users_repo, logs_repo, discipline_service),
        notice_service=NoticeService(notices_repo),
        activity_service=ActivityLogService(logs_repo),
        stats_service=InstructorStatsService(stats_repo, users_repo, slots_repo),
        join_request_service=JoinRequestService(join_requests_repo),
        export_service=ExportService(users_repo, slots_repo, logs_repo),
    )
