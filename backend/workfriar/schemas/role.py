from pydantic import BaseModel, ConfigDict, Field
from typing import Literal, Optional
from datetime import datetime
from uuid import UUID


class PermissionIn(BaseModel):
    category: str = Field(min_length=1)
    actions: list[str] = []


class PermissionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    category: str
    actions: list[str] = []


class RoleCreate(BaseModel):
    role: str = Field(min_length=2, max_length=100)
    department: str = Field(min_length=1)
    permissions: list[PermissionIn] = []
    status: Literal["active", "inactive"] = "active"


class RoleUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    role_id: UUID = Field(alias="roleId")
    role: Optional[str] = Field(default=None, min_length=2, max_length=100)
    department: Optional[str] = None
    permissions: Optional[list[PermissionIn]] = None
    status: Optional[Literal["active", "inactive"]] = None


class RoleDelete(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    role_id: UUID = Field(alias="roleId")


class RoleMapUsers(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    role_id: UUID = Field(alias="roleId")
    user_ids: list[UUID] = Field(alias="userIds", min_length=1)


class RoleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    role: str
    department: Optional[str] = None
    status: str
    permissions: list[PermissionOut] = []
    user_count: int = 0
    created_at: Optional[datetime] = None
