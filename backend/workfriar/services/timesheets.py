"""
Timesheet record store and status transitions.

Plain functions taking a ``Session``; callers decide when to commit through
the ``commit`` flag so the approval workflow can run several steps in one
transaction.
"""

import logging
import uuid
from datetime import date, timedelta
from typing import Optional

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from workfriar.exceptions import NotFoundError, PermissionDenied, RequestValidationFailure, InvalidTransition
from workfriar.models.category import Category
from workfriar.models.project import Project
from workfriar.models.timesheet import Timesheet, TimesheetStatus, can_review, can_transition
from workfriar.schemas.timesheet import DailyEntry, DailyEntryOut, TimesheetCreate, TimesheetOut, TimesheetUpdate

logger = logging.getLogger(__name__)


# ── Helpers ──


def timesheet_out(ts: Timesheet) -> TimesheetOut:
    return TimesheetOut(
        id=ts.id,
        project_id=ts.project_id,
        project_name=ts.project.project_name if ts.project else None,
        user_id=ts.user_id,
        task_category_id=ts.task_category_id,
        category=ts.category.category if ts.category else None,
        task_detail=ts.task_detail,
        start_date=ts.start_date,
        end_date=ts.end_date,
        data_sheet=[
            DailyEntryOut(date=e["date"], is_holiday=e.get("isHoliday", False), hours=str(e.get("hours", "0")))
            for e in (ts.data_sheet or [])
        ],
        status=ts.status,
        created_at=ts.created_at,
        updated_at=ts.updated_at,
    )


def total_hours(ts: Timesheet) -> float:
    return sum(float(e.get("hours") or 0) for e in (ts.data_sheet or []))


def get_week_window(day: date) -> tuple[date, date]:
    """Sunday..Saturday week containing ``day``."""
    start = day - timedelta(days=(day.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def _check_entries(entries: list[DailyEntry], start: date, end: date) -> None:
    seen = set()
    for entry in entries:
        if entry.date < start or entry.date > end:
            raise RequestValidationFailure(
                f"Entry date {entry.date.isoformat()} is outside the timesheet window"
            )
        if entry.date in seen:
            raise RequestValidationFailure(f"Duplicate entry for {entry.date.isoformat()}")
        seen.add(entry.date)


def _merge_entries(existing: list[dict], updates: list[DailyEntry]) -> list[dict]:
    by_date = {e["date"]: dict(e) for e in (existing or [])}
    for entry in updates:
        by_date[entry.date.isoformat()] = entry.to_document()
    return [by_date[k] for k in sorted(by_date)]


def get_timesheet(db: Session, timesheet_id) -> Optional[Timesheet]:
    return db.query(Timesheet).filter(Timesheet.id == timesheet_id).first()


def _owned_timesheet(db: Session, user_id, timesheet_id) -> Timesheet:
    ts = get_timesheet(db, timesheet_id)
    if not ts:
        raise NotFoundError("Timesheet not found")
    if ts.user_id != user_id:
        raise PermissionDenied("You can only modify your own timesheets")
    return ts


# ── Owner operations ──


def create_timesheet(db: Session, user_id: uuid.UUID, body: TimesheetCreate) -> Timesheet:
    project = db.query(Project).filter(Project.id == body.project_id).first()
    if not project:
        raise NotFoundError("Project not found")
    if project.open_for_time_entry != "opened":
        raise RequestValidationFailure("Project is closed for time entry")

    if not db.query(Category).filter(Category.id == body.task_category_id).first():
        raise NotFoundError("Category not found")

    _check_entries(body.data_sheet, body.start_date, body.end_date)

    ts = Timesheet(
        project_id=body.project_id,
        user_id=user_id,
        task_category_id=body.task_category_id,
        task_detail=body.task_detail.strip(),
        start_date=body.start_date,
        end_date=body.end_date,
        data_sheet=[e.to_document() for e in sorted(body.data_sheet, key=lambda e: e.date)],
        status=TimesheetStatus.in_progress.value,
    )
    db.add(ts)
    db.commit()
    db.refresh(ts)
    logger.info(f"Timesheet {ts.id} created for user {user_id}")
    return ts


def update_timesheet(db: Session, user_id: uuid.UUID, timesheet_id, body: TimesheetUpdate) -> Timesheet:
    """Merge daily entries by date; optionally move between in_progress and submitted."""
    ts = _owned_timesheet(db, user_id, timesheet_id)
    if ts.status == TimesheetStatus.approved.value:
        raise InvalidTransition("Approved timesheets cannot be modified")

    _check_entries(body.data_sheet, ts.start_date, ts.end_date)
    ts.data_sheet = _merge_entries(ts.data_sheet, body.data_sheet)

    if body.status and body.status != ts.status:
        if not can_transition(ts.status, body.status):
            raise InvalidTransition(f"Cannot move timesheet from {ts.status} to {body.status}")
        ts.status = body.status

    db.commit()
    db.refresh(ts)
    return ts


def submit_timesheet(db: Session, user_id: uuid.UUID, timesheet_id) -> Timesheet:
    ts = _owned_timesheet(db, user_id, timesheet_id)
    if not can_transition(ts.status, TimesheetStatus.submitted):
        raise InvalidTransition(f"Cannot submit a timesheet that is {ts.status}")
    ts.status = TimesheetStatus.submitted.value
    db.commit()
    db.refresh(ts)
    logger.info(f"Timesheet {ts.id} submitted by user {user_id}")
    return ts


def list_user_timesheets(
    db: Session,
    user_id,
    start: Optional[date] = None,
    end: Optional[date] = None,
    status: Optional[str] = None,
) -> list[Timesheet]:
    q = db.query(Timesheet).filter(Timesheet.user_id == user_id)
    if start:
        q = q.filter(Timesheet.end_date >= start)
    if end:
        q = q.filter(Timesheet.start_date <= end)
    if status:
        q = q.filter(Timesheet.status == status)
    return q.order_by(Timesheet.start_date.desc(), Timesheet.created_at.desc()).all()


def weekly_timesheets(db: Session, user_id, start: date, end: date) -> list[Timesheet]:
    return (
        db.query(Timesheet)
        .filter(Timesheet.user_id == user_id, _window_overlap(start, end))
        .order_by(Timesheet.start_date, Timesheet.created_at)
        .all()
    )


def current_day_timesheets(db: Session, user_id, day: date) -> list[Timesheet]:
    """Timesheets whose window contains ``day``."""
    return (
        db.query(Timesheet)
        .filter(
            Timesheet.user_id == user_id,
            Timesheet.start_date <= day,
            Timesheet.end_date >= day,
        )
        .order_by(Timesheet.created_at)
        .all()
    )


# ── Status transitions ──


def _window_overlap(start: date, end: date):
    return or_(
        and_(Timesheet.start_date >= start, Timesheet.start_date <= end),
        and_(Timesheet.end_date >= start, Timesheet.end_date <= end),
        and_(Timesheet.start_date <= start, Timesheet.end_date >= end),
    )


def update_timesheet_status(db: Session, timesheet_id, new_state, commit: bool = True) -> tuple[Optional[Timesheet], bool]:
    """Set one timesheet's status.

    Returns ``(None, False)`` when the id is unknown and ``(timesheet, False)``
    when the transition is not allowed; the record is left untouched in both.
    """
    ts = get_timesheet(db, timesheet_id)
    if not ts:
        return None, False

    new_state = TimesheetStatus(new_state)
    if not can_transition(ts.status, new_state):
        logger.warning(f"Refused transition {ts.status} -> {new_state.value} for timesheet {ts.id}")
        return ts, False

    ts.status = new_state.value
    if commit:
        db.commit()
        db.refresh(ts)
    return ts, True


def update_all_timesheet_status(
    db: Session,
    start: date,
    end: date,
    status,
    user_id,
    commit: bool = True,
) -> int:
    """Apply ``status`` to every timesheet of ``user_id`` touching ``[start, end]``.

    An approve or reject decision covers the whole week, so draft siblings
    move too; other targets follow the owner transition table.
    """
    status = TimesheetStatus(status)
    rows = db.query(Timesheet).filter(Timesheet.user_id == user_id, _window_overlap(start, end)).all()

    updated = 0
    for ts in rows:
        if ts.status == status.value:
            continue
        if not can_review(ts.status, status):
            logger.warning(
                f"Skipping timesheet {ts.id}: {ts.status} -> {status.value} is not allowed"
            )
            continue
        ts.status = status.value
        updated += 1

    if commit:
        db.commit()
    return updated
