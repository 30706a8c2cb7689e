"""
Timesheet approval workflow.

Covers single-record decisions, week-level decisions with rejection-note
reconciliation, and the role-dependent approval queue. Everything logged here
also lands in ``approvals.log`` (see ``logging_config``).
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from workfriar.exceptions import NotFoundError, RequestValidationFailure
from workfriar.models.project import Project, ProjectTeamMember
from workfriar.models.timesheet import Timesheet, TimesheetStatus
from workfriar.models.user import User, Role, TEAM_LEAD, PROJECT_MANAGER, TECHNICAL_LEAD
from workfriar.schemas.common import PageRequest
from workfriar.schemas.timesheet import (
    ManageAllTimesheetRequest,
    ProjectSummaryOut,
    ProjectTeamQueueItem,
    TeamMemberOut,
)
from workfriar.services import rejection_notes
from workfriar.services.notifications import create_notification
from workfriar.services.timesheets import (
    get_timesheet,
    update_all_timesheet_status,
    update_timesheet_status,
    weekly_timesheets,
)
from workfriar.services.week_locks import week_lock
from workfriar.validators import require_non_empty, require_one_of

logger = logging.getLogger(__name__)

DECISION_STATES = [TimesheetStatus.approved.value, TimesheetStatus.rejected.value]

MSG_APPROVED = "Timesheet Approved"
MSG_NOTES_UPDATED = "Timesheet Notes updated successfully"
MSG_STATUS_UPDATED = "Timesheet Status updated successfully"
MSG_NOT_UPDATED = "Timesheet Status not updated"
MSG_NO_REVIEW = "No Timesheets for Review"


def decision_message(status: str, reviewer: User) -> str:
    return f"Timesheet has been {status} by {reviewer.full_name}"


# ── Single-record decision ──


def manage_timesheet(db: Session, reviewer: User, timesheet_id, state) -> tuple[Timesheet, bool]:
    """Apply ``state`` to one timesheet and notify its owner on success.

    Raises NotFoundError for an unknown id; an illegal transition comes back
    as ``(timesheet, False)``.
    """
    ts, ok = update_timesheet_status(db, timesheet_id, state, commit=False)
    if ts is None:
        raise NotFoundError("Timesheet not found")
    if not ok:
        logger.info(f"Reviewer {reviewer.id} could not move timesheet {ts.id} from {ts.status} to {state}")
        return ts, False

    create_notification(db, ts.user_id, decision_message(ts.status, reviewer), "info", commit=False)
    db.commit()
    db.refresh(ts)
    logger.info(f"Reviewer {reviewer.id} set timesheet {ts.id} to {ts.status}")
    return ts, True


# ── Week-level decision ──


@dataclass
class Decision:
    timesheet_id: uuid.UUID
    status: TimesheetStatus
    user_id: uuid.UUID
    notes: str


def _as_uuid(value: str, field_name: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise RequestValidationFailure(f"{field_name} must be a valid id")


def validate_decision(body: ManageAllTimesheetRequest) -> Decision:
    timesheet_id = require_non_empty(body.timesheetid, "timesheetid", "Invalid input: timesheetid is required.")
    status = require_one_of(
        body.status, "status", DECISION_STATES,
        "Invalid input: status must be either approved or rejected.",
    )
    user_id = require_non_empty(body.userid, "userid", "Invalid input: userid is required.")
    notes = (body.notes or "").strip()
    if status == TimesheetStatus.rejected.value and not notes:
        raise RequestValidationFailure("Invalid input: notes are required when rejecting a timesheet.")

    return Decision(
        timesheet_id=_as_uuid(timesheet_id, "timesheetid"),
        status=TimesheetStatus(status),
        user_id=_as_uuid(user_id, "userid"),
        notes=notes,
    )


def _reconcile(db: Session, reviewer: User, decision: Decision, week_start: date, week_end: date) -> str:
    note = rejection_notes.find_note(db, decision.user_id, week_start, week_end)

    if decision.status == TimesheetStatus.approved and note:
        rejection_notes.delete_note(db, note)
        update_all_timesheet_status(db, week_start, week_end, decision.status, decision.user_id, commit=False)
        message = MSG_APPROVED
    else:
        update_all_timesheet_status(db, week_start, week_end, decision.status, decision.user_id, commit=False)
        if decision.status == TimesheetStatus.rejected:
            _, created = rejection_notes.upsert_note(db, decision.user_id, week_start, week_end, decision.notes)
            message = MSG_STATUS_UPDATED if created else MSG_NOTES_UPDATED
        else:
            message = MSG_STATUS_UPDATED

    create_notification(
        db, decision.user_id, decision_message(decision.status.value, reviewer), "info", commit=False
    )
    db.commit()
    return message


def manage_all_timesheet(db: Session, reviewer: User, body: ManageAllTimesheetRequest) -> str:
    """Approve or reject a member's whole week and reconcile the rejection note.

    Returns the outcome message.
    """
    decision = validate_decision(body)

    ts = get_timesheet(db, decision.timesheet_id)
    if not ts:
        raise NotFoundError("Timesheet not found")
    if ts.user_id != decision.user_id:
        raise RequestValidationFailure("Invalid input: userid does not own this timesheet.")

    week_start, week_end = ts.start_date, ts.end_date

    with week_lock(decision.user_id, week_start, week_end):
        # A second attempt covers a note inserted concurrently by another process.
        for attempt in range(2):
            try:
                message = _reconcile(db, reviewer, decision, week_start, week_end)
                break
            except IntegrityError:
                db.rollback()
                if attempt:
                    raise
                logger.warning(
                    f"Rejection note for user {decision.user_id} week {week_start}..{week_end} "
                    f"was written concurrently; retrying"
                )
            except Exception:
                db.rollback()
                raise

    logger.info(
        f"Reviewer {reviewer.id} {decision.status.value} week {week_start}..{week_end} "
        f"for user {decision.user_id}: {message}"
    )
    return message


def member_week(db: Session, user_id, start: date, end: date):
    """Timesheets of ``user_id`` in the window plus the week's rejection note, if any."""
    return weekly_timesheets(db, user_id, start, end), rejection_notes.find_note(db, user_id, start, end)


# ── Approval queue ──


def _member_out(user: User) -> TeamMemberOut:
    return TeamMemberOut(id=user.id, name=user.full_name, email=user.email, role=user.role_name)


def _roster_page(db: Session, project: Project, page: PageRequest) -> list[User]:
    """One page of the project team, ordered by member name."""
    if project.team is None:
        return []
    return (
        db.query(User)
        .join(ProjectTeamMember, ProjectTeamMember.user_id == User.id)
        .filter(ProjectTeamMember.team_id == project.team.id)
        .order_by(User.full_name, User.id)
        .offset(page.offset)
        .limit(page.limit)
        .all()
    )


def get_members(db: Session, caller: User, page: PageRequest) -> tuple[int, str, list]:
    """Role-dependent review queue. Returns ``(http_status, message, data)``."""
    role = caller.role_name

    if role == TEAM_LEAD:
        projects = (
            db.query(Project)
            .filter(Project.project_lead_id == caller.id)
            .order_by(Project.project_name)
            .all()
        )
        data = []
        for project in projects:
            roster = [_member_out(u) for u in _roster_page(db, project, page)]
            data.append(
                ProjectTeamQueueItem(
                    projectTeam=roster,
                    project=ProjectSummaryOut(id=project.id, project_name=project.project_name),
                ).model_dump()
            )
        return 200, "Project Team fetched successfully", data

    if role in (PROJECT_MANAGER, TECHNICAL_LEAD):
        leads = (
            db.query(User)
            .join(Role, User.role_id == Role.id)
            .filter(Role.role == TEAM_LEAD, User.is_active.is_(True))
            .order_by(User.full_name)
            .offset(page.offset)
            .limit(page.limit)
            .all()
        )
        return 200, "Team Leads fetched successfully", [_member_out(u).model_dump() for u in leads]

    return 400, MSG_NO_REVIEW, []

