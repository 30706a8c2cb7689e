import threading
import time
import uuid
from datetime import date, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError

from workfriar.database import Base
from workfriar.models.timesheet import RejectionNote
from workfriar.schemas.timesheet import ManageAllTimesheetRequest
from workfriar.services import approvals
from workfriar.services.week_locks import active_locks, week_lock


@pytest.fixture
def engine(tmp_path):
    # file-backed so each thread gets its own connection
    eng = create_engine(
        f"sqlite:///{tmp_path / 'workfriar.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


def _request(ts, status, notes=""):
    return ManageAllTimesheetRequest(timesheetid=str(ts.id), status=status, userid=str(ts.user_id), notes=notes)


# ---------- lock registry ----------

def test_week_lock_serialises_the_same_week():
    user_id = uuid.uuid4()
    week = (date(2024, 12, 1), date(2024, 12, 7))
    entered, release = threading.Event(), threading.Event()
    order = []

    def first():
        with week_lock(user_id, *week):
            entered.set()
            release.wait(5)
            order.append("first")

    def second():
        entered.wait(5)
        with week_lock(user_id, *week):
            order.append("second")

    threads = [threading.Thread(target=first), threading.Thread(target=second)]
    for t in threads:
        t.start()
    entered.wait(5)
    time.sleep(0.1)
    assert order == []

    release.set()
    for t in threads:
        t.join(5)
    assert order == ["first", "second"]
    assert active_locks() == 0


def test_other_weeks_are_not_blocked():
    user_id = uuid.uuid4()
    with week_lock(user_id, date(2024, 12, 1), date(2024, 12, 7)):
        with week_lock(user_id, date(2024, 12, 8), date(2024, 12, 14)):
            assert active_locks() == 2
    assert active_locks() == 0


def test_registry_is_empty_after_many_weeks(db, make_user, make_project, make_timesheet):
    reviewer = make_user("Rita", "Team Lead")
    owner = make_user("Ann")
    project = make_project()
    start = date(2024, 1, 7)

    for week in range(10):
        week_start = start + timedelta(weeks=week)
        ts = make_timesheet(owner, project, week_start, week_start + timedelta(days=6), status="submitted", hours=())
        approvals.manage_all_timesheet(db, reviewer, _request(ts, "approved"))

    assert active_locks() == 0


# ---------- concurrency ----------

def test_concurrent_rejections_leave_one_note(session_factory, make_user, make_project, make_timesheet):
    reviewer = make_user("Rita", "Team Lead")
    ts = make_timesheet(make_user("Ann"), make_project(), status="submitted")
    barrier = threading.Barrier(2)
    messages, errors = [], []

    def decide(notes):
        session = session_factory()
        try:
            barrier.wait(5)
            messages.append(approvals.manage_all_timesheet(session, reviewer, _request(ts, "rejected", notes)))
        except Exception as exc:
            errors.append(exc)
        finally:
            session.close()

    threads = [threading.Thread(target=decide, args=(n,)) for n in ("missing hours", "wrong project")]
    for t in threads:
        t.start()
    for t in threads:
        t.join(30)

    assert errors == []
    assert sorted(messages) == [approvals.MSG_NOTES_UPDATED, approvals.MSG_STATUS_UPDATED]

    check = session_factory()
    try:
        notes = check.query(RejectionNote).all()
        assert len(notes) == 1
        assert notes[0].notes in ("missing hours", "wrong project")
    finally:
        check.close()


def test_integrity_error_is_retried_once(db, make_user, make_project, make_timesheet, monkeypatch):
    reviewer = make_user("Rita", "Team Lead")
    ts = make_timesheet(make_user("Ann"), make_project(), status="submitted")
    real = approvals._reconcile
    calls = []

    def flaky(*args, **kwargs):
        calls.append(1)
        if len(calls) == 1:
            raise IntegrityError("INSERT INTO rejection_notes", {}, Exception("UNIQUE constraint failed"))
        return real(*args, **kwargs)

    monkeypatch.setattr(approvals, "_reconcile", flaky)

    message = approvals.manage_all_timesheet(db, reviewer, _request(ts, "rejected", "incomplete"))

    assert len(calls) == 2
    assert message == approvals.MSG_STATUS_UPDATED
    assert db.query(RejectionNote).count() == 1
    assert active_locks() == 0


def test_second_integrity_error_propagates(db, make_user, make_project, make_timesheet, monkeypatch):
    reviewer = make_user("Rita", "Team Lead")
    ts = make_timesheet(make_user("Ann"), make_project(), status="submitted")

    def always_conflicts(*args, **kwargs):
        raise IntegrityError("INSERT INTO rejection_notes", {}, Exception("UNIQUE constraint failed"))

    monkeypatch.setattr(approvals, "_reconcile", always_conflicts)

    with pytest.raises(IntegrityError):
        approvals.manage_all_timesheet(db, reviewer, _request(ts, "rejected", "incomplete"))
    assert active_locks() == 0


# ---------- idempotent approval ----------

def test_repeated_approval_after_rejection(db, make_user, make_project, make_timesheet):
    reviewer = make_user("Rita", "Team Lead")
    ts = make_timesheet(make_user("Ann"), make_project(), status="submitted")

    approvals.manage_all_timesheet(db, reviewer, _request(ts, "rejected", "incomplete"))
    first = approvals.manage_all_timesheet(db, reviewer, _request(ts, "approved"))
    second = approvals.manage_all_timesheet(db, reviewer, _request(ts, "approved"))

    assert first == approvals.MSG_APPROVED
    assert second == approvals.MSG_STATUS_UPDATED
    assert db.query(RejectionNote).count() == 0
    db.expire_all()
    assert ts.status == "approved"
