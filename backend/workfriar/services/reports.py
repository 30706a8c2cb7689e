"""
Reporting aggregates over timesheets.

Timesheets are selected by ``end_date`` in the requested window and the daily
hours are summed in Python; ``approvedHours`` only counts approved timesheets.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from workfriar.models.timesheet import Timesheet, TimesheetStatus
from workfriar.schemas.reports import (
    DueTimesheetRow,
    EmployeeHours,
    EmployeeProjectHours,
    ProjectDetailHours,
    ProjectHours,
    StatusCount,
    TimeSummaryRow,
)

logger = logging.getLogger(__name__)


def _hours(entry: dict) -> float:
    try:
        return float(entry.get("hours") or 0)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring unparseable hours value: {entry.get('hours')!r}")
        return 0.0


def _window_query(
    db: Session,
    start: date,
    end: date,
    project_ids: Optional[list] = None,
    user_ids: Optional[list] = None,
):
    q = db.query(Timesheet).filter(Timesheet.end_date >= start, Timesheet.end_date <= end)
    if project_ids:
        q = q.filter(Timesheet.project_id.in_(project_ids))
    if user_ids:
        q = q.filter(Timesheet.user_id.in_(user_ids))
    return q


class _Bucket:
    def __init__(self):
        self.logged = 0.0
        self.approved = 0.0
        self.categories: list[str] = []
        self.category_hours: dict[str, float] = defaultdict(float)
        self.daily: dict[str, float] = defaultdict(float)
        self.project_name: Optional[str] = None

    def add(self, ts: Timesheet) -> None:
        if self.project_name is None and ts.project:
            self.project_name = ts.project.project_name
        name = ts.category.category if ts.category else None
        if name and name not in self.categories:
            self.categories.append(name)
        approved = ts.status == TimesheetStatus.approved.value
        for entry in ts.data_sheet or []:
            h = _hours(entry)
            self.logged += h
            if approved:
                self.approved += h
            if name:
                self.category_hours[name] += h
            self.daily[entry["date"]] += h


def _by_project(timesheets: list[Timesheet]) -> dict:
    buckets: dict = {}
    for ts in timesheets:
        buckets.setdefault(ts.project_id, _Bucket()).add(ts)
    return buckets


# ── Project reports ──


def project_summary_report(db: Session, start: date, end: date, project_ids=None) -> list[ProjectHours]:
    buckets = _by_project(_window_query(db, start, end, project_ids).all())
    return [
        ProjectHours(
            project_id=pid,
            projectName=b.project_name,
            loggedHours=b.logged,
            approvedHours=b.approved,
            categories=b.categories,
        )
        for pid, b in sorted(buckets.items(), key=lambda kv: kv[1].project_name or "")
    ]


def project_detail_report(db: Session, start: date, end: date, project_ids=None) -> list[ProjectDetailHours]:
    buckets = _by_project(_window_query(db, start, end, project_ids).all())
    return [
        ProjectDetailHours(
            project_id=pid,
            projectName=b.project_name,
            loggedHours=b.logged,
            approvedHours=b.approved,
            categories=b.categories,
            categoryHours=dict(b.category_hours),
        )
        for pid, b in sorted(buckets.items(), key=lambda kv: kv[1].project_name or "")
    ]


# ── Employee reports ──


def _employee_report(db: Session, start: date, end: date, project_ids, user_ids, with_daily: bool) -> list[EmployeeHours]:
    per_user: dict = defaultdict(dict)
    names: dict = {}
    for ts in _window_query(db, start, end, project_ids, user_ids).all():
        names[ts.user_id] = ts.user.full_name if ts.user else None
        per_user[ts.user_id].setdefault(ts.project_id, _Bucket()).add(ts)

    rows = []
    for user_id, projects in per_user.items():
        items = [
            EmployeeProjectHours(
                project_id=pid,
                projectName=b.project_name,
                loggedHours=b.logged,
                approvedHours=b.approved,
                categories=b.categories,
                dailyHours=dict(sorted(b.daily.items())) if with_daily else None,
            )
            for pid, b in projects.items()
        ]
        rows.append(
            EmployeeHours(
                userId=user_id,
                userName=names.get(user_id),
                projects=items,
                totalLoggedHours=sum(p.loggedHours for p in items),
                totalApprovedHours=sum(p.approvedHours for p in items),
            )
        )
    rows.sort(key=lambda r: r.userName or "")
    return rows


def employee_summary_report(db: Session, start: date, end: date, project_ids=None, user_ids=None) -> list[EmployeeHours]:
    return _employee_report(db, start, end, project_ids, user_ids, with_daily=False)


def employee_detail_report(db: Session, start: date, end: date, project_ids=None, user_ids=None) -> list[EmployeeHours]:
    return _employee_report(db, start, end, project_ids, user_ids, with_daily=True)


def monthly_snapshot(db: Session, user_id, start: date, end: date) -> list[StatusCount]:
    counts: dict[str, int] = defaultdict(int)
    for ts in _window_query(db, start, end, user_ids=[user_id]).all():
        counts[ts.status] += 1
    return [StatusCount(status=s, count=c) for s, c in sorted(counts.items())]


# ── Dashboard summaries ──


def time_summary(db: Session, start: date, end: date, project_id) -> list[TimeSummaryRow]:
    totals: dict = {}
    for ts in _window_query(db, start, end, project_ids=[project_id]).all():
        name = ts.user.full_name if ts.user else str(ts.user_id)
        row = totals.setdefault(ts.user_id, [name, 0.0, 0.0])
        hours = sum(_hours(e) for e in ts.data_sheet or [])
        row[1] += hours
        if ts.status == TimesheetStatus.approved.value:
            row[2] += hours
    return [
        TimeSummaryRow(team_member=name, total_time=total, approved_time=approved)
        for name, total, approved in sorted(totals.values())
    ]


def _due_row(ts: Timesheet) -> DueTimesheetRow:
    return DueTimesheetRow(
        id=ts.id,
        project_name=ts.project.project_name if ts.project else None,
        startDate=ts.start_date,
        endDate=ts.end_date,
        status=ts.status,
        total_hours=sum(_hours(e) for e in ts.data_sheet or []),
    )


def past_due(db: Session, user_id, week_start: date) -> list[DueTimesheetRow]:
    """Unsubmitted timesheets that ended before the current week."""
    rows = (
        db.query(Timesheet)
        .filter(
            Timesheet.user_id == user_id,
            Timesheet.end_date < week_start,
            Timesheet.status.in_([TimesheetStatus.in_progress.value, TimesheetStatus.rejected.value]),
        )
        .order_by(Timesheet.start_date)
        .all()
    )
    return [_due_row(ts) for ts in rows]


def due_timesheets(db: Session, user_id, start: date, end: date) -> list[DueTimesheetRow]:
    rows = (
        _window_query(db, start, end, user_ids=[user_id])
        .filter(Timesheet.status != TimesheetStatus.approved.value)
        .order_by(Timesheet.start_date)
        .all()
    )
    return [_due_row(ts) for ts in rows]
