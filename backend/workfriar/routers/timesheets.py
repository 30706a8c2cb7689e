"""Employee timesheets router."""

import uuid
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from workfriar.database import get_db
from workfriar.dependencies import get_current_user_id
from workfriar.schemas.common import ApiResponse, envelope
from workfriar.schemas.timesheet import DateWindow, TimesheetCreate, TimesheetOut, TimesheetSubmit, TimesheetUpdate
from workfriar.services import timesheets as svc

router = APIRouter(prefix="/user/timesheet", tags=["timesheets"])


# ── CRUD ──


@router.post("/add", response_model=ApiResponse[TimesheetOut], status_code=201)
def add_timesheet(
    body: TimesheetCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ts = svc.create_timesheet(db, user_id, body)
    return envelope(svc.timesheet_out(ts), "Timesheet created successfully")


@router.post("/update/{timesheet_id}", response_model=ApiResponse[TimesheetOut])
def update_timesheet(
    timesheet_id: uuid.UUID,
    body: TimesheetUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ts = svc.update_timesheet(db, user_id, timesheet_id, body)
    return envelope(svc.timesheet_out(ts), "Timesheet updated successfully")


# ── Submit ──


@router.post("/submit", response_model=ApiResponse[TimesheetOut])
def submit_timesheet(
    body: TimesheetSubmit,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ts = svc.submit_timesheet(db, user_id, body.timesheetid)
    return envelope(svc.timesheet_out(ts), "Timesheet submitted successfully")


# ── Queries ──


@router.get("/mine", response_model=ApiResponse[list[TimesheetOut]])
def my_timesheets(
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    status: Optional[str] = Query(None),
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    rows = svc.list_user_timesheets(db, user_id, start, end, status)
    return envelope([svc.timesheet_out(ts) for ts in rows], "Timesheets fetched successfully")


@router.post("/weekly", response_model=ApiResponse[list[TimesheetOut]])
def weekly_timesheets(
    body: DateWindow,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    rows = svc.weekly_timesheets(db, user_id, body.start_date, body.end_date)
    return envelope([svc.timesheet_out(ts) for ts in rows], "Weekly timesheets fetched successfully")


@router.get("/today", response_model=ApiResponse[list[TimesheetOut]])
def todays_timesheets(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    rows = svc.current_day_timesheets(db, user_id, date.today())
    return envelope([svc.timesheet_out(ts) for ts in rows], "Timesheets fetched successfully")
