"""
Reporting router: hour aggregates and dashboard summaries.
"""

import uuid
from datetime import date

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from workfriar.database import get_db
from workfriar.dependencies import get_current_user, require_reviewer
from workfriar.exceptions import PermissionDenied
from workfriar.models.user import User, REVIEWER_ROLES
from workfriar.schemas.common import ApiResponse, envelope
from workfriar.schemas.reports import (
    DueTimesheetRow,
    EmployeeHours,
    ProjectDetailHours,
    ProjectHours,
    ReportRequest,
    SnapshotRequest,
    StatusCount,
    TimeSummaryRequest,
    TimeSummaryRow,
)
from workfriar.services import reports
from workfriar.services.timesheets import get_week_window

router = APIRouter(prefix="/admin", tags=["reports"])


def _target_user(caller: User, requested) -> uuid.UUID:
    """Callers see their own data; reviewers may ask for anyone."""
    if requested is None or requested == caller.id:
        return caller.id
    if caller.role_name not in REVIEWER_ROLES:
        raise PermissionDenied("You can only view your own timesheets")
    return requested


def _no_data() -> JSONResponse:
    return JSONResponse(status_code=400, content=envelope([], "No Data", status=False))


# ── Dashboard ──


@router.post("/timesummary", response_model=ApiResponse[list[TimeSummaryRow]])
def time_summary(body: TimeSummaryRequest, user: User = Depends(require_reviewer), db: Session = Depends(get_db)):
    rows = reports.time_summary(db, body.start_date, body.end_date, body.project_id)
    if not rows:
        return _no_data()
    return envelope(rows, "Time Summary")


@router.post("/pastdue", response_model=ApiResponse[list[DueTimesheetRow]])
def past_due(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    week_start, _ = get_week_window(date.today())
    rows = reports.past_due(db, user.id, week_start)
    if not rows:
        return _no_data()
    return envelope(rows, "Past Due")


@router.post("/getduetimesheet", response_model=ApiResponse[list[DueTimesheetRow]])
def due_timesheets(body: SnapshotRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    target = _target_user(user, body.user_id)
    rows = reports.due_timesheets(db, target, body.start_date, body.end_date)
    return envelope(rows, "Due Time Sheet")


# ── Reports ──


@router.post("/reports/project-summary", response_model=ApiResponse[list[ProjectHours]])
def project_summary(body: ReportRequest, user: User = Depends(require_reviewer), db: Session = Depends(get_db)):
    rows = reports.project_summary_report(db, body.start_date, body.end_date, body.project_ids)
    return envelope(rows, "Project summary report")


@router.post("/reports/project-detail", response_model=ApiResponse[list[ProjectDetailHours]])
def project_detail(body: ReportRequest, user: User = Depends(require_reviewer), db: Session = Depends(get_db)):
    rows = reports.project_detail_report(db, body.start_date, body.end_date, body.project_ids)
    return envelope(rows, "Project detail report")


@router.post("/reports/employee-summary", response_model=ApiResponse[list[EmployeeHours]])
def employee_summary(body: ReportRequest, user: User = Depends(require_reviewer), db: Session = Depends(get_db)):
    rows = reports.employee_summary_report(db, body.start_date, body.end_date, body.project_ids, body.user_ids)
    return envelope(rows, "Employee summary report")


@router.post("/reports/employee-detail", response_model=ApiResponse[list[EmployeeHours]])
def employee_detail(body: ReportRequest, user: User = Depends(require_reviewer), db: Session = Depends(get_db)):
    rows = reports.employee_detail_report(db, body.start_date, body.end_date, body.project_ids, body.user_ids)
    return envelope(rows, "Employee detail report")


@router.post("/reports/monthly-snapshot", response_model=ApiResponse[list[StatusCount]])
def monthly_snapshot(body: SnapshotRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    target = _target_user(user, body.user_id)
    rows = reports.monthly_snapshot(db, target, body.start_date, body.end_date)
    return envelope(rows, "Monthly snapshot")
