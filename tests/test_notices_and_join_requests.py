from __future__ import annotations

import pytest

from src.flight_club.flight_club.core.enums import JoinRequestStatus, Role
from src.flight_club.flight_club.core.exceptions import AuthorizationError, ConfirmationRequired, NotFoundError, ValidationError
from src.flight_club.flight_club.join_requests.service import JoinRequestService
from src.flight_club.flight_club.join_requests.table_join_request_repository import TableJoinRequestRepository
from src.flight_club.flight_club.notices.service import NoticeService
from src.flight_club.flight_club.notices.table_notice_repository import TableNoticeRepository
from src.flight_club.flight_club.storage.local_backend import LocalMirrorBackend, MemoryKeyValueStore


@pytest.fixture
def backend():
    return LocalMirrorBackend(MemoryKeyValueStore())


def test_admin_posts_and_deletes_notices(backend):
    svc = NoticeService(TableNoticeRepository(backend))

    notice = svc.post("  אין אימונים בחג  ", current_role=Role.ADMIN, author_id="admin-1")
    assert notice.content == "אין אימונים בחג"
    assert [n.id for n in svc.list()] == [notice.id]

    with pytest.raises(ConfirmationRequired):
        svc.delete(notice.id, current_role=Role.ADMIN, confirmed=False)
    svc.delete(notice.id, current_role=Role.ADMIN, confirmed=True)
    assert svc.list() == []
    with pytest.raises(NotFoundError):
        svc.delete(notice.id, current_role=Role.ADMIN, confirmed=True)


def test_notice_guards(backend):
    svc = NoticeService(TableNoticeRepository(backend))
    with pytest.raises(AuthorizationError):
        svc.post("x", current_role=Role.STAFF, author_id="u")
    with pytest.raises(ValidationError):
        svc.post("   ", current_role=Role.ADMIN, author_id="admin-1")


def test_join_requests(backend):
    svc = JoinRequestService(TableJoinRequestRepository(backend))

    req = svc.submit(name="דנה", email="Dana@Mail.Test", phone="050", message="רוצה להצטרף")
    assert (req.email, req.status) == ("dana@mail.test", JoinRequestStatus.PENDING)

    assert [r.id for r in svc.list(current_role=Role.STAFF)] == [req.id]
    with pytest.raises(AuthorizationError):
        svc.list(current_role=Role.INSTRUCTOR_JUNIOR)
    with pytest.raises(ValidationError):
        svc.submit(name="", email="x@y.z")
