import uuid

from sqlalchemy import Column, String, Text, Date, DateTime, ForeignKey, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from workfriar.database import Base


class ProjectStatusReport(Base):
    __tablename__ = "project_status_reports"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    project_id = Column(Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    project_lead_id = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    planned_start_date = Column(Date, nullable=False)
    planned_end_date = Column(Date, nullable=False)
    actual_start_date = Column(Date, nullable=True)
    actual_end_date = Column(Date, nullable=True)
    reporting_period = Column(Date, nullable=False)

    progress = Column(String(50), nullable=False)
    comments = Column(Text, nullable=True)
    accomplishments = Column(Text, nullable=False)
    goals = Column(Text, nullable=False)
    blockers = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    project = relationship("Project", lazy="joined")
    project_lead = relationship("User", lazy="joined")
