from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import date, datetime
from uuid import UUID


class SubscriptionIn(BaseModel):
    """Raw payload; rules are enforced by ``validate_subscription`` so every
    failing field is reported at once."""

    subscription_name: Optional[str] = None
    provider: Optional[str] = None
    license_count: Optional[str] = None
    cost: Optional[str] = None
    billing_cycle: Optional[str] = None
    currency: Optional[str] = None
    payment_method: Optional[str] = None
    status: Optional[str] = None
    description: Optional[str] = None
    next_due_date: Optional[date] = None
    type: Optional[str] = None
    project_name: Optional[str] = None


class SubscriptionListRequest(BaseModel):
    page: int = 1
    limit: int = 10


class SubscriptionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    subscription_name: str
    provider: str
    license_count: str
    cost: str
    billing_cycle: str
    currency: str
    payment_method: str
    status: str
    description: Optional[str] = None
    next_due_date: Optional[date] = None
    type: str
    project_id: Optional[UUID] = None
    created_at: Optional[datetime] = None
