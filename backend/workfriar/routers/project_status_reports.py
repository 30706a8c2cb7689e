"""Project status reports router."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from workfriar.database import get_db
from workfriar.dependencies import get_current_user
from workfriar.exceptions import NotFoundError, RequestValidationFailure
from workfriar.models.project import Project
from workfriar.models.project_status_report import ProjectStatusReport
from workfriar.models.user import User
from workfriar.schemas.common import ApiResponse, PageRequest, envelope
from workfriar.schemas.project_status_report import (
    DropdownItem,
    StatusReportCreate,
    StatusReportList,
    StatusReportListRequest,
    StatusReportOut,
    StatusReportUpdate,
    status_report_out,
)

router = APIRouter(prefix="/project-status-report", tags=["project-status-reports"])

# dropdown type -> (model, name column)
DROPDOWNS = {
    "projects": (Project, Project.project_name),
    "leads": (User, User.full_name),
}


def _get(db: Session, report_id) -> ProjectStatusReport:
    report = db.query(ProjectStatusReport).filter(ProjectStatusReport.id == report_id).first()
    if not report:
        raise NotFoundError("Report not found")
    return report


def _check_refs(db: Session, project_id=None, lead_id=None) -> None:
    if project_id and not db.query(Project).filter(Project.id == project_id).first():
        raise NotFoundError("Project not found")
    if lead_id and not db.query(User).filter(User.id == lead_id).first():
        raise NotFoundError("Project lead not found")


@router.post("/add", response_model=ApiResponse[StatusReportOut], status_code=201)
def add_report(body: StatusReportCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    _check_refs(db, body.project_name, body.project_lead)
    data = body.model_dump(exclude={"project_name", "project_lead"})
    report = ProjectStatusReport(project_id=body.project_name, project_lead_id=body.project_lead, **data)
    db.add(report)
    db.commit()
    db.refresh(report)
    return envelope(status_report_out(report), "Report added successfully")


@router.post("/list", response_model=ApiResponse[StatusReportList])
def list_reports(
    body: Optional[StatusReportListRequest] = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    body = body or StatusReportListRequest()
    page = PageRequest(page=body.page, limit=body.limit)
    q = db.query(ProjectStatusReport)
    total = q.count()
    rows = q.order_by(ProjectStatusReport.reporting_period.desc()).offset(page.offset).limit(page.limit).all()
    data = StatusReportList(reports=[status_report_out(r) for r in rows], totalCount=total)
    return envelope(data, "Reports fetched successfully")


@router.get("/dropdown/{type}", response_model=ApiResponse[list[DropdownItem]])
def dropdown(type: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    if type not in DROPDOWNS:
        raise RequestValidationFailure("Invalid dropdown type. Use 'projects' or 'leads'")
    model, name_col = DROPDOWNS[type]
    rows = db.query(model.id, name_col).order_by(name_col).all()
    return envelope([DropdownItem(id=r[0], name=r[1]) for r in rows], f"{type.capitalize()} fetched successfully")


@router.get("/{report_id}", response_model=ApiResponse[StatusReportOut])
def get_report(report_id: uuid.UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return envelope(status_report_out(_get(db, report_id)), "Report fetched successfully")


@router.put("/{report_id}", response_model=ApiResponse[StatusReportOut])
def update_report(
    report_id: uuid.UUID,
    body: StatusReportUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    report = _get(db, report_id)
    changes = body.model_dump(exclude_unset=True)
    project_id = changes.pop("project_name", None)
    lead_id = changes.pop("project_lead", None)
    _check_refs(db, project_id, lead_id)

    if project_id:
        report.project_id = project_id
    if lead_id:
        report.project_lead_id = lead_id
    for field, value in changes.items():
        setattr(report, field, value)

    if report.planned_start_date > report.planned_end_date:
        raise RequestValidationFailure("planned_start_date must be on or before planned_end_date")

    db.commit()
    db.refresh(report)
    return envelope(status_report_out(report), "Report updated successfully")
