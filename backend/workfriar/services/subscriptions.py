"""Subscription payload rules.

Every failing field is collected so the client can show all messages at once.
"""

import uuid
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from workfriar.exceptions import RequestValidationFailure
from workfriar.models.project import Project
from workfriar.models.subscription import BillingCycle, Subscription, SubscriptionStatus, SubscriptionType
from workfriar.schemas.subscription import SubscriptionIn

REQUIRED_TEXT = {
    "subscription_name": "Please enter the subscription name.",
    "provider": "Please enter the provider.",
    "license_count": "Please enter the license count.",
    "cost": "Please enter the cost.",
    "currency": "Please enter the currency.",
    "payment_method": "Please enter the payment method.",
}


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def validate_subscription(db: Session, body: SubscriptionIn, existing: Optional[Subscription] = None) -> dict:
    """Return column values for a Subscription or raise with a field->message map."""
    errors: dict[str, str] = {}

    for field, message in REQUIRED_TEXT.items():
        if _blank(getattr(body, field)):
            errors[field] = message

    if body.billing_cycle not in [c.value for c in BillingCycle]:
        errors["billing_cycle"] = "Billing cycle must be one of: " + ", ".join(c.value for c in BillingCycle)
    if body.status not in [s.value for s in SubscriptionStatus]:
        errors["status"] = "Status must be one of: " + ", ".join(s.value for s in SubscriptionStatus)

    project_id = None
    if body.type is None:
        errors["type"] = "Please select the subscription type"
    elif body.type not in [t.value for t in SubscriptionType]:
        errors["type"] = "Type must be either 'Common' or 'Project Specific'"
    elif body.type == SubscriptionType.project_specific.value:
        if _blank(body.project_name):
            errors["project_name"] = "Project name is required for Project Specific subscriptions"
        else:
            try:
                project_id = uuid.UUID(body.project_name)
            except ValueError:
                errors["project_name"] = "Invalid project selected"
            else:
                if not db.query(Project).filter(Project.id == project_id).first():
                    errors["project_name"] = "Selected project does not exist"

    if not _blank(body.subscription_name):
        q = db.query(Subscription).filter(
            func.lower(Subscription.subscription_name) == body.subscription_name.strip().lower()
        )
        if existing is not None:
            q = q.filter(Subscription.id != existing.id)
        if q.first():
            errors["subscription_name"] = "A subscription with this name already exists."

    if errors:
        raise RequestValidationFailure(next(iter(errors.values())), errors)

    return {
        "subscription_name": body.subscription_name.strip(),
        "provider": body.provider.strip(),
        "license_count": body.license_count.strip(),
        "cost": body.cost.strip(),
        "billing_cycle": body.billing_cycle,
        "currency": body.currency.strip(),
        "payment_method": body.payment_method.strip(),
        "status": body.status,
        "description": body.description or None,
        "next_due_date": body.next_due_date,
        "type": body.type,
        "project_id": project_id,
    }
