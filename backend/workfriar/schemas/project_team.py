from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import date
from uuid import UUID


class MemberDates(BaseModel):
    start_date: date
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def _order(self):
        if self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class TeamMemberIn(BaseModel):
    userid: UUID
    dates: list[MemberDates] = []


class TeamMemberUpdateIn(BaseModel):
    userid: UUID
    dates: list[MemberDates] = Field(min_length=1)


class ProjectTeamCreate(BaseModel):
    project: UUID
    team_members: list[TeamMemberIn] = Field(default=[], min_length=1)


class ProjectTeamUpdate(BaseModel):
    id: UUID
    project: Optional[UUID] = None
    team_members: Optional[list[TeamMemberUpdateIn]] = Field(default=None, min_length=1)


class ProjectTeamListRequest(BaseModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)


class TeamMemberDetail(BaseModel):
    id: UUID
    name: str
    email: str
    role: Optional[str] = None
    dates: list[dict] = []


class ProjectTeamOut(BaseModel):
    id: UUID
    project: dict
    team_members: list[TeamMemberDetail] = []


def project_team_out(team) -> ProjectTeamOut:
    return ProjectTeamOut(
        id=team.id,
        project={"id": str(team.project.id), "name": team.project.project_name},
        team_members=[
            TeamMemberDetail(
                id=m.user.id,
                name=m.user.full_name,
                email=m.user.email,
                role=m.user.role_name,
                dates=m.dates or [],
            )
            for m in team.members
        ],
    )
