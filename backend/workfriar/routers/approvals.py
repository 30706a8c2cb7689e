"""
Approval center: review queue and timesheet decisions.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from workfriar.database import get_db
from workfriar.dependencies import get_current_user, require_reviewer
from workfriar.models.user import User
from workfriar.schemas.common import ApiResponse, PageRequest, envelope
from workfriar.schemas.timesheet import (
    ApprovalCenterRequest,
    ManageAllTimesheetRequest,
    ManageTimesheetRequest,
    MemberTimesheetsOut,
    MemberTimesheetsRequest,
    RejectionNoteOut,
    TimesheetOut,
)
from workfriar.services import approvals
from workfriar.services.timesheets import timesheet_out

router = APIRouter(prefix="/admin", tags=["approvals"])


# ── Queue ──


@router.post("/approvalcenter", response_model=ApiResponse[list])
def approval_center(
    body: Optional[ApprovalCenterRequest] = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    body = body or ApprovalCenterRequest()
    code, message, data = approvals.get_members(db, user, PageRequest(page=body.page, limit=body.limit))
    if code != 200:
        return JSONResponse(status_code=code, content=envelope(data, message, status=True))
    return envelope(data, message)


# ── Decisions ──


@router.post("/managetimesheet", response_model=ApiResponse[TimesheetOut])
def manage_timesheet(
    body: ManageTimesheetRequest,
    reviewer: User = Depends(require_reviewer),
    db: Session = Depends(get_db),
):
    ts, ok = approvals.manage_timesheet(db, reviewer, body.timesheetid, body.state)
    if not ok:
        return JSONResponse(
            status_code=400,
            content=envelope(
                jsonable_encoder(timesheet_out(ts), by_alias=True),
                approvals.MSG_NOT_UPDATED,
                status=False,
            ),
        )
    return envelope(timesheet_out(ts), approvals.MSG_STATUS_UPDATED)


@router.post("/manage-all-timesheet", response_model=ApiResponse[list])
def manage_all_timesheet(
    body: ManageAllTimesheetRequest,
    reviewer: User = Depends(require_reviewer),
    db: Session = Depends(get_db),
):
    message = approvals.manage_all_timesheet(db, reviewer, body)
    return envelope([], message)


@router.post("/member-timesheets", response_model=ApiResponse[MemberTimesheetsOut])
def member_timesheets(
    body: MemberTimesheetsRequest,
    reviewer: User = Depends(require_reviewer),
    db: Session = Depends(get_db),
):
    timesheets, note = approvals.member_week(db, body.userid, body.start_date, body.end_date)
    data = MemberTimesheetsOut(
        timesheets=[timesheet_out(ts) for ts in timesheets],
        rejection_note=RejectionNoteOut.model_validate(note) if note else None,
    )
    return envelope(data, "Timesheets fetched successfully")
