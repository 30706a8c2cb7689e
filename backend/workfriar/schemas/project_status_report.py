from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import date, datetime
from uuid import UUID


class StatusReportCreate(BaseModel):
    project_name: UUID
    project_lead: UUID
    planned_start_date: date
    planned_end_date: date
    actual_start_date: Optional[date] = None
    actual_end_date: Optional[date] = None
    reporting_period: date
    progress: str = Field(min_length=1)
    comments: Optional[str] = None
    accomplishments: str = Field(min_length=1)
    goals: str = Field(min_length=1)
    blockers: Optional[str] = None

    @model_validator(mode="after")
    def _planned_window(self):
        if self.planned_start_date > self.planned_end_date:
            raise ValueError("planned_start_date must be on or before planned_end_date")
        return self


class StatusReportUpdate(BaseModel):
    project_name: Optional[UUID] = None
    project_lead: Optional[UUID] = None
    planned_start_date: Optional[date] = None
    planned_end_date: Optional[date] = None
    actual_start_date: Optional[date] = None
    actual_end_date: Optional[date] = None
    reporting_period: Optional[date] = None
    progress: Optional[str] = None
    comments: Optional[str] = None
    accomplishments: Optional[str] = None
    goals: Optional[str] = None
    blockers: Optional[str] = None


class StatusReportListRequest(BaseModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)


class StatusReportOut(BaseModel):
    id: UUID
    project_name: Optional[str] = None
    project_id: UUID
    project_lead: Optional[str] = None
    planned_start_date: date
    planned_end_date: date
    actual_start_date: Optional[date] = None
    actual_end_date: Optional[date] = None
    reporting_period: date
    progress: str
    comments: Optional[str] = None
    accomplishments: str
    goals: str
    blockers: Optional[str] = None
    created_at: Optional[datetime] = None


class StatusReportList(BaseModel):
    reports: list[StatusReportOut] = []
    totalCount: int


class DropdownItem(BaseModel):
    id: UUID
    name: str


def status_report_out(report) -> StatusReportOut:
    return StatusReportOut(
        id=report.id,
        project_name=report.project.project_name if report.project else None,
        project_id=report.project_id,
        project_lead=report.project_lead.full_name if report.project_lead else None,
        planned_start_date=report.planned_start_date,
        planned_end_date=report.planned_end_date,
        actual_start_date=report.actual_start_date,
        actual_end_date=report.actual_end_date,
        reporting_period=report.reporting_period,
        progress=report.progress,
        comments=report.comments,
        accomplishments=report.accomplishments,
        goals=report.goals,
        blockers=report.blockers,
        created_at=report.created_at,
    )
