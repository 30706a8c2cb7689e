from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Literal, Optional
from datetime import date, datetime
from uuid import UUID

from workfriar.schemas.common import Pagination

ProjectStatus = Literal["Not Started", "In Progress", "On Hold", "Completed", "Cancelled"]


class ProjectCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    project_name: str = Field(alias="projectName", min_length=1, max_length=200)
    client_name: str = Field(alias="clientName", min_length=1, max_length=200)
    description: Optional[str] = None
    planned_start_date: Optional[date] = Field(default=None, alias="plannedStartDate")
    planned_end_date: Optional[date] = Field(default=None, alias="plannedEndDate")
    actual_start_date: Optional[date] = Field(default=None, alias="actualStartDate")
    actual_end_date: Optional[date] = Field(default=None, alias="actualEndDate")
    project_lead_id: Optional[UUID] = Field(default=None, alias="projectLead")
    billing_model: Optional[str] = Field(default=None, alias="billingModel")
    open_for_time_entry: Literal["opened", "closed"] = Field(default="opened", alias="openForTimeEntry")
    status: ProjectStatus = "Not Started"

    @model_validator(mode="after")
    def _planned_window(self):
        if self.planned_start_date and self.planned_end_date and self.planned_start_date > self.planned_end_date:
            raise ValueError("plannedStartDate must be on or before plannedEndDate")
        return self


class ProjectUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    project_name: Optional[str] = Field(default=None, alias="projectName", min_length=1, max_length=200)
    client_name: Optional[str] = Field(default=None, alias="clientName", min_length=1, max_length=200)
    description: Optional[str] = None
    planned_start_date: Optional[date] = Field(default=None, alias="plannedStartDate")
    planned_end_date: Optional[date] = Field(default=None, alias="plannedEndDate")
    actual_start_date: Optional[date] = Field(default=None, alias="actualStartDate")
    actual_end_date: Optional[date] = Field(default=None, alias="actualEndDate")
    project_lead_id: Optional[UUID] = Field(default=None, alias="projectLead")
    billing_model: Optional[str] = Field(default=None, alias="billingModel")
    open_for_time_entry: Optional[Literal["opened", "closed"]] = Field(default=None, alias="openForTimeEntry")
    status: Optional[ProjectStatus] = None


class ProjectListRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    status: Optional[str] = None
    client_name: Optional[str] = Field(default=None, alias="clientName")
    project_name: Optional[str] = Field(default=None, alias="projectName")


class ProjectOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    project_name: str = Field(alias="projectName")
    client_name: str = Field(alias="clientName")
    description: Optional[str] = None
    planned_start_date: Optional[date] = Field(default=None, alias="plannedStartDate")
    planned_end_date: Optional[date] = Field(default=None, alias="plannedEndDate")
    actual_start_date: Optional[date] = Field(default=None, alias="actualStartDate")
    actual_end_date: Optional[date] = Field(default=None, alias="actualEndDate")
    project_lead: Optional[dict] = Field(default=None, alias="projectLead")
    billing_model: Optional[str] = Field(default=None, alias="billingModel")
    project_logo: Optional[str] = Field(default=None, alias="projectLogo")
    open_for_time_entry: str = Field(alias="openForTimeEntry")
    status: str
    created_at: Optional[datetime] = None


class ProjectList(BaseModel):
    projects: list[ProjectOut] = []
    pagination: Pagination


def project_out(project) -> ProjectOut:
    lead = project.project_lead
    return ProjectOut(
        id=project.id,
        project_name=project.project_name,
        client_name=project.client_name,
        description=project.description,
        planned_start_date=project.planned_start_date,
        planned_end_date=project.planned_end_date,
        actual_start_date=project.actual_start_date,
        actual_end_date=project.actual_end_date,
        project_lead={"id": str(lead.id), "name": lead.full_name} if lead else None,
        billing_model=project.billing_model,
        project_logo=project.project_logo,
        open_for_time_entry=project.open_for_time_entry,
        status=project.status,
        created_at=project.created_at,
    )
