"""Software subscriptions (admin)."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from workfriar.database import get_db
from workfriar.dependencies import require_admin
from workfriar.exceptions import NotFoundError
from workfriar.models.subscription import Subscription
from workfriar.models.user import User
from workfriar.schemas.common import ApiResponse, PageRequest, envelope, paginate
from workfriar.schemas.subscription import SubscriptionIn, SubscriptionListRequest, SubscriptionOut
from workfriar.services.subscriptions import validate_subscription

router = APIRouter(prefix="/admin/subscription", tags=["subscriptions"])


def _get(db: Session, subscription_id) -> Subscription:
    sub = db.query(Subscription).filter(Subscription.id == subscription_id).first()
    if not sub:
        raise NotFoundError("Subscription not found")
    return sub


@router.post("/add", response_model=ApiResponse[SubscriptionOut], status_code=201)
def add_subscription(body: SubscriptionIn, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    sub = Subscription(**validate_subscription(db, body))
    db.add(sub)
    db.commit()
    db.refresh(sub)
    return envelope(SubscriptionOut.model_validate(sub), "Subscription added successfully")


@router.post("/list", response_model=ApiResponse[dict])
def list_subscriptions(
    body: Optional[SubscriptionListRequest] = None,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    body = body or SubscriptionListRequest()
    page = PageRequest(page=max(body.page, 1), limit=min(max(body.limit, 1), 100))
    q = db.query(Subscription)
    total = q.count()
    rows = q.order_by(Subscription.created_at.desc()).offset(page.offset).limit(page.limit).all()
    data = {
        "subscriptions": [SubscriptionOut.model_validate(s).model_dump() for s in rows],
        "pagination": paginate(total, page).model_dump(),
    }
    return envelope(data, "Subscriptions fetched successfully")


@router.get("/{subscription_id}", response_model=ApiResponse[SubscriptionOut])
def get_subscription(subscription_id: uuid.UUID, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    return envelope(SubscriptionOut.model_validate(_get(db, subscription_id)), "Subscription fetched successfully")


@router.put("/{subscription_id}", response_model=ApiResponse[SubscriptionOut])
def update_subscription(
    subscription_id: uuid.UUID,
    body: SubscriptionIn,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    sub = _get(db, subscription_id)
    for field, value in validate_subscription(db, body, existing=sub).items():
        setattr(sub, field, value)
    db.commit()
    db.refresh(sub)
    return envelope(SubscriptionOut.model_validate(sub), "Subscription updated successfully")


@router.delete("/{subscription_id}", response_model=ApiResponse[list])
def delete_subscription(subscription_id: uuid.UUID, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    db.delete(_get(db, subscription_id))
    db.commit()
    return envelope([], "Subscription deleted successfully")
