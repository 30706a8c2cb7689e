"""
Projects router: CRUD plus logo upload.
"""

import uuid
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy import func
from sqlalchemy.orm import Session

from workfriar.database import get_db
from workfriar.dependencies import get_current_user, require_admin
from workfriar.exceptions import NotFoundError, RequestValidationFailure
from workfriar.models.project import Project
from workfriar.models.user import User
from workfriar.schemas.common import ApiResponse, PageRequest, envelope, paginate
from workfriar.schemas.project import ProjectCreate, ProjectList, ProjectListRequest, ProjectOut, ProjectUpdate, project_out
from workfriar.services import file_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/project", tags=["projects"])


def _get(db: Session, project_id) -> Project:
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        raise NotFoundError("Project not found")
    return project


def _check_lead(db: Session, lead_id) -> None:
    if lead_id and not db.query(User).filter(User.id == lead_id).first():
        raise NotFoundError("Project lead not found")


def _ensure_unique_name(db: Session, name: str, exclude_id=None) -> None:
    q = db.query(Project).filter(func.lower(Project.project_name) == name.strip().lower())
    if exclude_id is not None:
        q = q.filter(Project.id != exclude_id)
    if q.first():
        raise RequestValidationFailure("A project with this name already exists")


# ── CRUD ──


@router.post("/add", response_model=ApiResponse[ProjectOut], status_code=201)
def add_project(body: ProjectCreate, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    _ensure_unique_name(db, body.project_name)
    _check_lead(db, body.project_lead_id)

    project = Project(**body.model_dump())
    project.project_name = project.project_name.strip()
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info(f"Project {project.id} created by {admin.id}")
    return envelope(project_out(project), "Project created successfully")


@router.post("/list", response_model=ApiResponse[ProjectList])
def list_projects(
    body: Optional[ProjectListRequest] = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    body = body or ProjectListRequest()
    page = PageRequest(page=body.page, limit=body.limit)

    q = db.query(Project)
    if body.status:
        q = q.filter(Project.status == body.status)
    if body.client_name:
        q = q.filter(Project.client_name.ilike(f"%{body.client_name}%"))
    if body.project_name:
        q = q.filter(Project.project_name.ilike(f"%{body.project_name}%"))

    total = q.count()
    rows = q.order_by(Project.created_at.desc()).offset(page.offset).limit(page.limit).all()
    data = ProjectList(projects=[project_out(p) for p in rows], pagination=paginate(total, page))
    return envelope(data, "Projects fetched successfully")


@router.get("/{project_id}", response_model=ApiResponse[ProjectOut])
def get_project(project_id: uuid.UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return envelope(project_out(_get(db, project_id)), "Project fetched successfully")


@router.put("/{project_id}", response_model=ApiResponse[ProjectOut])
def update_project(
    project_id: uuid.UUID,
    body: ProjectUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    project = _get(db, project_id)
    changes = body.model_dump(exclude_unset=True)

    if changes.get("project_name"):
        _ensure_unique_name(db, changes["project_name"], exclude_id=project.id)
        changes["project_name"] = changes["project_name"].strip()
    if "project_lead_id" in changes:
        _check_lead(db, changes["project_lead_id"])

    for field, value in changes.items():
        setattr(project, field, value)

    start, end = project.planned_start_date, project.planned_end_date
    if start and end and start > end:
        raise RequestValidationFailure("plannedStartDate must be on or before plannedEndDate")

    db.commit()
    db.refresh(project)
    return envelope(project_out(project), "Project updated successfully")


@router.delete("/{project_id}", response_model=ApiResponse[list])
def delete_project(project_id: uuid.UUID, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    project = _get(db, project_id)
    logo = project.project_logo
    db.delete(project)
    db.commit()
    if logo:
        file_storage.delete_file(logo)
    return envelope([], "Project deleted successfully")


# ── Logo ──


@router.post("/{project_id}/logo", response_model=ApiResponse[ProjectOut])
def upload_logo(
    project_id: uuid.UUID,
    file: UploadFile = File(...),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    project = _get(db, project_id)
    path, _, _ = file_storage.save_upload(file, subfolder="project-logos")

    previous = project.project_logo
    project.project_logo = path
    db.commit()
    db.refresh(project)
    if previous:
        file_storage.delete_file(previous)
    return envelope(project_out(project), "Project logo uploaded successfully")
