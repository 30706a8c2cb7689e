import uuid

from sqlalchemy import Column, String, Text, Date, DateTime, ForeignKey, JSON, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from workfriar.database import Base


PROJECT_STATUSES = ["Not Started", "In Progress", "On Hold", "Completed", "Cancelled"]
TIME_ENTRY_STATES = ["opened", "closed"]


class Project(Base):
    __tablename__ = "projects"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    project_name = Column(String(200), nullable=False, index=True)
    client_name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)

    planned_start_date = Column(Date, nullable=True)
    planned_end_date = Column(Date, nullable=True)
    actual_start_date = Column(Date, nullable=True)
    actual_end_date = Column(Date, nullable=True)

    project_lead_id = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    billing_model = Column(String(100), nullable=True)
    project_logo = Column(String(1000), nullable=True)
    open_for_time_entry = Column(String(20), nullable=False, default="opened")
    status = Column(String(50), nullable=False, default="Not Started")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    project_lead = relationship("User", lazy="joined")
    team = relationship("ProjectTeam", back_populates="project", uselist=False, cascade="all, delete-orphan")


class ProjectTeam(Base):
    __tablename__ = "project_teams"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    project_id = Column(Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, unique=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    project = relationship("Project", back_populates="team")
    members = relationship(
        "ProjectTeamMember",
        back_populates="team",
        cascade="all, delete-orphan",
        order_by="ProjectTeamMember.id",
    )


class ProjectTeamMember(Base):
    __tablename__ = "project_team_members"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    team_id = Column(Uuid, ForeignKey("project_teams.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # [{"start_date": "YYYY-MM-DD", "end_date": "YYYY-MM-DD" | null}]
    dates = Column(JSON, nullable=False, default=list)

    team = relationship("ProjectTeam", back_populates="members")
    user = relationship("User", lazy="joined")
