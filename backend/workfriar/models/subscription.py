import enum
import uuid

from sqlalchemy import Column, String, Text, Date, DateTime, ForeignKey, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from workfriar.database import Base


class BillingCycle(str, enum.Enum):
    monthly = "Monthly"
    quarterly = "Quarterly"
    annually = "Annually"
    pay_as_you_go = "Pay As You Go"
    one_time = "One Time Payment"


class SubscriptionStatus(str, enum.Enum):
    active = "Active"
    pending = "Pending"
    expired = "Expired"


class SubscriptionType(str, enum.Enum):
    common = "Common"
    project_specific = "Project Specific"


class Subscription(Base):
    __tablename__ = "subscriptions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    subscription_name = Column(String(200), nullable=False, unique=True, index=True)
    provider = Column(String(200), nullable=False)
    license_count = Column(String(50), nullable=False)
    cost = Column(String(50), nullable=False)
    # Keep VARCHAR (no DB enum)
    billing_cycle = Column(String(50), nullable=False)
    currency = Column(String(20), nullable=False)
    payment_method = Column(String(100), nullable=False)
    status = Column(String(20), nullable=False)
    description = Column(Text, nullable=True)
    next_due_date = Column(Date, nullable=True)
    type = Column(String(30), nullable=False)
    project_id = Column(Uuid, ForeignKey("projects.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    project = relationship("Project", lazy="joined")
