"""
User self-service: profile, task categories, notifications.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from workfriar.database import get_db
from workfriar.dependencies import get_current_user
from workfriar.models.category import Category
from workfriar.models.user import User
from workfriar.schemas.category import CategoryOut
from workfriar.schemas.common import ApiResponse, envelope
from workfriar.schemas.user import NotificationOut, NotificationRead, UserOut, user_out
from workfriar.services import notifications

router = APIRouter(prefix="/user", tags=["user"])


@router.post("/profile-view", response_model=ApiResponse[UserOut])
def profile_view(user: User = Depends(get_current_user)):
    return envelope(user_out(user), "User data fetched successfully")


@router.post("/getcategories", response_model=ApiResponse[list[CategoryOut]])
def get_categories(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    rows = db.query(Category).order_by(Category.category).all()
    return envelope([CategoryOut.model_validate(c) for c in rows], "Categories fetched successfully")


# ── Notifications ──


@router.post("/notifications", response_model=ApiResponse[list[NotificationOut]])
def list_notifications(
    unread_only: bool = False,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    rows = notifications.list_notifications(db, user.id, unread_only)
    return envelope([NotificationOut.model_validate(n) for n in rows], "Notifications fetched successfully")


@router.post("/notifications/read", response_model=ApiResponse[dict])
def read_notifications(
    body: Optional[NotificationRead] = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    count = notifications.mark_read(db, user.id, body.ids if body else None)
    return envelope({"updated": count}, "Notifications marked as read")
