import uuid
from datetime import date

import pytest

from workfriar.models.timesheet import TimesheetStatus, can_review, can_transition
from workfriar.services.timesheets import get_week_window, update_all_timesheet_status, update_timesheet_status


@pytest.mark.parametrize(
    "current,new,allowed",
    [
        ("in_progress", "submitted", True),
        ("in_progress", "approved", False),
        ("in_progress", "rejected", False),
        ("submitted", "approved", True),
        ("submitted", "rejected", True),
        ("submitted", "in_progress", True),
        ("rejected", "approved", True),
        ("rejected", "submitted", True),
        ("approved", "rejected", True),
        ("approved", "in_progress", False),
        ("approved", "submitted", False),
        ("approved", "approved", True),
    ],
)
def test_transition_table(current, new, allowed):
    assert can_transition(current, new) is allowed


def test_update_status_unknown_id_returns_none(db):
    ts, ok = update_timesheet_status(db, uuid.uuid4(), TimesheetStatus.approved)
    assert ts is None
    assert ok is False


def test_update_status_success(db, make_user, make_project, make_timesheet):
    user = make_user("Ann")
    ts = make_timesheet(user, make_project(), status="submitted")

    updated, ok = update_timesheet_status(db, ts.id, "approved")

    assert ok is True
    assert updated.status == "approved"


def test_update_status_illegal_leaves_record_untouched(db, make_user, make_project, make_timesheet):
    user = make_user("Ann")
    ts = make_timesheet(user, make_project(), status="approved")

    same, ok = update_timesheet_status(db, ts.id, "in_progress")

    assert ok is False
    assert same.id == ts.id
    db.expire_all()
    assert same.status == "approved"


def test_bulk_update_matches_overlapping_windows(db, make_user, make_project, make_timesheet):
    user = make_user("Ann")
    other = make_user("Bob")
    project = make_project()
    inside = make_timesheet(user, project, date(2024, 12, 2), date(2024, 12, 4), status="submitted")
    starts_before = make_timesheet(user, project, date(2024, 11, 28), date(2024, 12, 2), status="submitted")
    ends_after = make_timesheet(user, project, date(2024, 12, 6), date(2024, 12, 10), status="submitted")
    spans = make_timesheet(user, project, date(2024, 11, 30), date(2024, 12, 8), status="submitted")
    outside = make_timesheet(user, project, date(2024, 11, 20), date(2024, 11, 26), status="submitted")
    someone_else = make_timesheet(other, project, status="submitted")

    count = update_all_timesheet_status(db, date(2024, 12, 1), date(2024, 12, 7), "approved", user.id)

    assert count == 4
    db.expire_all()
    for ts in (inside, starts_before, ends_after, spans):
        assert ts.status == "approved"
    assert outside.status == "submitted"
    assert someone_else.status == "submitted"


def test_week_decision_moves_draft_siblings(db, make_user, make_project, make_timesheet):
    user = make_user("Ann")
    project = make_project()
    draft = make_timesheet(user, project, status="in_progress")
    submitted = make_timesheet(user, project, status="submitted")

    count = update_all_timesheet_status(db, date(2024, 12, 1), date(2024, 12, 7), "rejected", user.id)

    assert count == 2
    db.expire_all()
    assert draft.status == "rejected"
    assert submitted.status == "rejected"


def test_bulk_update_skips_illegal_owner_transitions(db, make_user, make_project, make_timesheet):
    user = make_user("Ann")
    project = make_project()
    approved = make_timesheet(user, project, status="approved")
    rejected = make_timesheet(user, project, status="rejected")

    count = update_all_timesheet_status(db, date(2024, 12, 1), date(2024, 12, 7), "submitted", user.id)

    assert count == 1
    db.expire_all()
    assert approved.status == "approved"
    assert rejected.status == "submitted"


@pytest.mark.parametrize(
    "current,new,allowed",
    [
        ("in_progress", "approved", True),
        ("in_progress", "rejected", True),
        ("approved", "rejected", True),
        ("approved", "submitted", False),
        ("in_progress", "submitted", True),
    ],
)
def test_review_transition_table(current, new, allowed):
    assert can_review(current, new) is allowed


def test_week_window_runs_sunday_to_saturday():
    assert get_week_window(date(2024, 12, 4)) == (date(2024, 12, 1), date(2024, 12, 7))
    assert get_week_window(date(2024, 12, 1)) == (date(2024, 12, 1), date(2024, 12, 7))
    assert get_week_window(date(2024, 12, 7)) == (date(2024, 12, 1), date(2024, 12, 7))
