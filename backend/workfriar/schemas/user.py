from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime
from uuid import UUID


class LoginRequest(BaseModel):
    email: str
    password: str


class UserOut(BaseModel):
    id: UUID
    name: str
    email: str
    location: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    reporting_manager: Optional[str] = None
    profile_pic_path: Optional[str] = None


class LoginData(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class NotificationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    message: str
    type: str
    is_read: bool
    created_at: Optional[datetime] = None


class NotificationRead(BaseModel):
    ids: list[UUID] = []


def capitalize_words(value: Optional[str]) -> str:
    return " ".join(w[:1].upper() + w[1:] for w in (value or "").split())


def user_out(user) -> UserOut:
    return UserOut(
        id=user.id,
        name=capitalize_words(user.full_name),
        email=user.email,
        location=user.location,
        phone=user.phone,
        role=user.role_name,
        reporting_manager=user.reporting_manager.full_name if user.reporting_manager else None,
        profile_pic_path=user.profile_pic,
    )
