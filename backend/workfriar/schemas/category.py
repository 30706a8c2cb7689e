from pydantic import BaseModel, ConfigDict
from typing import Optional
from uuid import UUID


class CategoryCreate(BaseModel):
    category: Optional[str] = None
    time_entry: Optional[str] = None


class CategoryUpdate(BaseModel):
    id: UUID
    category: Optional[str] = None
    timeentry: Optional[str] = None


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    category: str
    time_entry: str
