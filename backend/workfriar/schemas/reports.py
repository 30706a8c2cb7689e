from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional
from datetime import date
from uuid import UUID


class ReportRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")
    project_ids: list[UUID] = Field(default=[], alias="projectIds")
    user_ids: list[UUID] = Field(default=[], alias="userIds")

    @model_validator(mode="after")
    def _window_order(self):
        if self.start_date > self.end_date:
            raise ValueError("startDate must be on or before endDate")
        return self


class TimeSummaryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")
    project_id: UUID = Field(alias="projectId")


class SnapshotRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[UUID] = Field(default=None, alias="userId")
    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")


class ProjectHours(BaseModel):
    project_id: UUID
    projectName: Optional[str] = None
    loggedHours: float = 0.0
    approvedHours: float = 0.0
    categories: list[str] = []


class ProjectDetailHours(ProjectHours):
    categoryHours: dict[str, float] = {}


class EmployeeProjectHours(ProjectHours):
    dailyHours: Optional[dict[str, float]] = None


class EmployeeHours(BaseModel):
    userId: UUID
    userName: Optional[str] = None
    projects: list[EmployeeProjectHours] = []
    totalLoggedHours: float = 0.0
    totalApprovedHours: float = 0.0


class StatusCount(BaseModel):
    status: str
    count: int


class TimeSummaryRow(BaseModel):
    team_member: str
    total_time: float
    approved_time: float


class DueTimesheetRow(BaseModel):
    id: UUID
    project_name: Optional[str] = None
    startDate: date
    endDate: date
    status: str
    total_hours: float
