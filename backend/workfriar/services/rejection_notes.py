"""Rejection-note ledger: at most one active note per (user, week)."""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from workfriar.models.timesheet import RejectionNote


def find_note(db: Session, user_id, week_start: date, week_end: date) -> Optional[RejectionNote]:
    return (
        db.query(RejectionNote)
        .filter(
            RejectionNote.user_id == user_id,
            RejectionNote.week_start == week_start,
            RejectionNote.week_end == week_end,
        )
        .first()
    )


def upsert_note(db: Session, user_id, week_start: date, week_end: date, notes: str) -> tuple[RejectionNote, bool]:
    """Update the week's note in place or add a new one. Returns ``(note, created)``.

    Does not commit.
    """
    note = find_note(db, user_id, week_start, week_end)
    if note:
        note.notes = notes
        return note, False

    note = RejectionNote(user_id=user_id, week_start=week_start, week_end=week_end, notes=notes)
    db.add(note)
    db.flush()
    return note, True


def delete_note(db: Session, note: RejectionNote) -> None:
    db.delete(note)
