import uuid

from sqlalchemy import Column, String, DateTime, Uuid
from sqlalchemy.sql import func

from workfriar.database import Base


TIME_ENTRY_TYPES = ["Open Entry", "Close Entry"]


class Category(Base):
    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    category = Column(String(50), nullable=False)
    time_entry = Column(String(20), nullable=False, default="Open Entry")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
