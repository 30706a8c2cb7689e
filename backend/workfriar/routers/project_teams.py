"""Project teams (admin)."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from workfriar.database import get_db
from workfriar.dependencies import require_admin
from workfriar.exceptions import NotFoundError, RequestValidationFailure
from workfriar.models.project import Project, ProjectTeam, ProjectTeamMember
from workfriar.models.user import User
from workfriar.schemas.common import ApiResponse, PageRequest, envelope, paginate
from workfriar.schemas.project_team import (
    ProjectTeamCreate,
    ProjectTeamListRequest,
    ProjectTeamOut,
    ProjectTeamUpdate,
    project_team_out,
)

router = APIRouter(prefix="/admin/project-team", tags=["project-teams"])


# ---------- helpers ----------

def _require_project(db: Session, project_id) -> Project:
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        raise NotFoundError("Project not found")
    return project


def _members(db: Session, items) -> list[ProjectTeamMember]:
    user_ids = [m.userid for m in items]
    if len(set(user_ids)) != len(user_ids):
        raise RequestValidationFailure("Team members must be unique")
    found = {u.id for u in db.query(User).filter(User.id.in_(user_ids)).all()}
    missing = [str(uid) for uid in user_ids if uid not in found]
    if missing:
        raise NotFoundError(f"Users not found: {', '.join(missing)}")
    return [
        ProjectTeamMember(user_id=m.userid, dates=[d.model_dump(mode="json") for d in m.dates])
        for m in items
    ]


# ---------- endpoints ----------

@router.post("/add", response_model=ApiResponse[ProjectTeamOut], status_code=201)
def add_project_team(body: ProjectTeamCreate, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    project = _require_project(db, body.project)
    if project.team is not None:
        raise RequestValidationFailure("Project team already exists for this project")

    team = ProjectTeam(project_id=project.id, members=_members(db, body.team_members))
    db.add(team)
    db.commit()
    db.refresh(team)
    return envelope(project_team_out(team), "Project team added successfully")


@router.post("/list", response_model=ApiResponse[dict])
def list_project_teams(
    body: Optional[ProjectTeamListRequest] = None,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    body = body or ProjectTeamListRequest()
    page = PageRequest(page=body.page, limit=body.limit)
    q = db.query(ProjectTeam)
    total = q.count()
    teams = q.order_by(ProjectTeam.created_at.desc()).offset(page.offset).limit(page.limit).all()
    data = {
        "teams": [project_team_out(t).model_dump(mode="json") for t in teams],
        "pagination": paginate(total, page).model_dump(),
    }
    return envelope(data, "Project teams fetched successfully")


@router.post("/update", response_model=ApiResponse[ProjectTeamOut])
def update_project_team(body: ProjectTeamUpdate, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    team = db.query(ProjectTeam).filter(ProjectTeam.id == body.id).first()
    if not team:
        raise NotFoundError("Project team not found")

    if body.project is not None and body.project != team.project_id:
        project = _require_project(db, body.project)
        if project.team is not None:
            raise RequestValidationFailure("Project team already exists for this project")
        team.project_id = project.id

    if body.team_members is not None:
        team.members = _members(db, body.team_members)

    db.commit()
    db.refresh(team)
    return envelope(project_team_out(team), "Project team updated successfully")


@router.get("/{project_id}", response_model=ApiResponse[ProjectTeamOut])
def get_project_team(project_id: uuid.UUID, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    team = db.query(ProjectTeam).filter(ProjectTeam.project_id == project_id).first()
    if not team:
        raise NotFoundError("Project team not found")
    return envelope(project_team_out(team), "Project team fetched successfully")
