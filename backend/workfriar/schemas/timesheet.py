from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Literal, Optional
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from uuid import UUID

from workfriar.models.timesheet import TimesheetStatus


# --- Daily entries ---

class DailyEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: date
    is_holiday: bool = Field(alias="isHoliday")
    hours: str

    @field_validator("hours", mode="before")
    @classmethod
    def _hours_as_text(cls, v):
        if v is None:
            raise ValueError("hours is required")
        text = str(v).strip()
        try:
            value = Decimal(text)
        except InvalidOperation:
            raise ValueError("hours must be a number")
        if not value.is_finite() or value < 0:
            raise ValueError("hours must be a non-negative number")
        return text

    def to_document(self) -> dict:
        return {"date": self.date.isoformat(), "isHoliday": self.is_holiday, "hours": self.hours}


class DailyEntryOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: date
    is_holiday: bool = Field(alias="isHoliday")
    hours: str


# --- Employee side ---

class TimesheetCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    project_id: UUID
    task_category_id: UUID
    task_detail: str = Field(min_length=1)
    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")
    data_sheet: list[DailyEntry] = []

    @model_validator(mode="after")
    def _window_order(self):
        if self.start_date > self.end_date:
            raise ValueError("startDate must be on or before endDate")
        return self


class TimesheetUpdate(BaseModel):
    data_sheet: list[DailyEntry] = []
    status: Optional[Literal["in_progress", "submitted"]] = None


class TimesheetSubmit(BaseModel):
    timesheetid: UUID


class DateWindow(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")

    @model_validator(mode="after")
    def _window_order(self):
        if self.start_date > self.end_date:
            raise ValueError("startDate must be on or before endDate")
        return self


class TimesheetOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    project_id: UUID
    project_name: Optional[str] = None
    user_id: UUID
    task_category_id: UUID
    category: Optional[str] = None
    task_detail: str
    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")
    data_sheet: list[DailyEntryOut] = []
    status: TimesheetStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- Reviewer side ---

class ApprovalCenterRequest(BaseModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)


class ManageTimesheetRequest(BaseModel):
    timesheetid: UUID
    state: TimesheetStatus


class ManageAllTimesheetRequest(BaseModel):
    """Loosely typed on purpose: checked by ``validate_decision`` so the
    caller gets the specific field message rather than a schema dump."""

    timesheetid: Optional[str] = None
    status: Optional[str] = None
    userid: Optional[str] = None
    notes: Optional[str] = ""


class MemberTimesheetsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    userid: UUID
    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")


class RejectionNoteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    week_start: date
    week_end: date
    notes: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MemberTimesheetsOut(BaseModel):
    timesheets: list[TimesheetOut] = []
    rejection_note: Optional[RejectionNoteOut] = None


class TeamMemberOut(BaseModel):
    id: UUID
    name: str
    email: str
    role: Optional[str] = None


class ProjectSummaryOut(BaseModel):
    id: UUID
    project_name: str


class ProjectTeamQueueItem(BaseModel):
    projectTeam: list[TeamMemberOut] = []
    project: ProjectSummaryOut
