import logging
import uuid
from typing import Optional

from sqlalchemy.orm import Session

from workfriar.models.notification import Notification, NOTIFICATION_TYPES

logger = logging.getLogger(__name__)


def create_notification(
    db: Session,
    user_id: uuid.UUID,
    message: str,
    type: str = "info",
    commit: bool = True,
) -> Notification:
    """Persist a notification for ``user_id``.

    With ``commit=False`` the row is only added to the session so the caller
    can fold it into a larger transaction.
    """
    if type not in NOTIFICATION_TYPES:
        type = "info"
    notification = Notification(user_id=user_id, message=message, type=type)
    db.add(notification)
    if commit:
        db.commit()
        db.refresh(notification)
    logger.info(f"Notification queued for user {user_id}: {message}")
    return notification


def list_notifications(db: Session, user_id: uuid.UUID, unread_only: bool = False) -> list[Notification]:
    q = db.query(Notification).filter(Notification.user_id == user_id)
    if unread_only:
        q = q.filter(Notification.is_read.is_(False))
    return q.order_by(Notification.created_at.desc()).all()


def mark_read(db: Session, user_id: uuid.UUID, ids: Optional[list[uuid.UUID]] = None) -> int:
    """Mark the caller's notifications read; all of them when ``ids`` is empty."""
    q = db.query(Notification).filter(
        Notification.user_id == user_id,
        Notification.is_read.is_(False),
    )
    if ids:
        q = q.filter(Notification.id.in_(ids))
    rows = q.all()
    for n in rows:
        n.is_read = True
    db.commit()
    return len(rows)
