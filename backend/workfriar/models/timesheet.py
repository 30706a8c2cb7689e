import enum
import uuid

from sqlalchemy import Column, String, Text, Date, DateTime, ForeignKey, JSON, Uuid, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from workfriar.database import Base


class TimesheetStatus(str, enum.Enum):
    in_progress = "in_progress"
    submitted = "submitted"
    approved = "approved"
    rejected = "rejected"


# Same-state writes are always allowed and leave the record untouched.
ALLOWED_TRANSITIONS = {
    TimesheetStatus.in_progress: {TimesheetStatus.submitted},
    TimesheetStatus.submitted: {TimesheetStatus.in_progress, TimesheetStatus.approved, TimesheetStatus.rejected},
    TimesheetStatus.rejected: {TimesheetStatus.in_progress, TimesheetStatus.submitted, TimesheetStatus.approved},
    TimesheetStatus.approved: {TimesheetStatus.rejected},
}


REVIEW_DECISIONS = {TimesheetStatus.approved, TimesheetStatus.rejected}


def can_transition(current, new) -> bool:
    current, new = TimesheetStatus(current), TimesheetStatus(new)
    return current == new or new in ALLOWED_TRANSITIONS[current]


def can_review(current, new) -> bool:
    """Week-level reviewer decisions reach every timesheet in the week, drafts included."""
    return TimesheetStatus(new) in REVIEW_DECISIONS or can_transition(current, new)


class Timesheet(Base):
    __tablename__ = "timesheets"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    project_id = Column(Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    task_category_id = Column(Uuid, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False)
    task_detail = Column(Text, nullable=False)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)
    # [{"date": "YYYY-MM-DD", "isHoliday": bool, "hours": "7.5"}]
    data_sheet = Column(JSON, nullable=False, default=list)
    # Keep VARCHAR (no DB enum); values come from TimesheetStatus
    status = Column(String(20), nullable=False, default=TimesheetStatus.in_progress.value, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    project = relationship("Project", lazy="joined")
    category = relationship("Category", lazy="joined")
    user = relationship("User", lazy="joined")


class RejectionNote(Base):
    __tablename__ = "rejection_notes"
    __table_args__ = (
        UniqueConstraint("user_id", "week_start", "week_end", name="uq_rejection_notes_user_week"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    week_start = Column(Date, nullable=False)
    week_end = Column(Date, nullable=False)
    notes = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
