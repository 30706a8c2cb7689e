import uuid

from sqlalchemy import Column, String, Boolean, DateTime, Table, ForeignKey, JSON, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from workfriar.database import Base


# ---------------------------------------------------
# Role names that drive routing and access checks
# ---------------------------------------------------

TEAM_LEAD = "Team Lead"
PROJECT_MANAGER = "Project Manager"
TECHNICAL_LEAD = "Technical Lead"
ADMIN = "Admin"
SUPER_ADMIN = "Super Admin"

ADMIN_ROLES = {ADMIN, SUPER_ADMIN}
REVIEWER_ROLES = {TEAM_LEAD, PROJECT_MANAGER, TECHNICAL_LEAD} | ADMIN_ROLES


role_permissions = Table(
    "role_permissions",
    Base.metadata,
    Column("role_id", Uuid, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
    Column("permission_id", Uuid, ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True),
)


# ---------------------------------------------------
# Permission
# ---------------------------------------------------

class Permission(Base):
    __tablename__ = "permissions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    category = Column(String(100), nullable=False, index=True)
    actions = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


# ---------------------------------------------------
# Role
# ---------------------------------------------------

class Role(Base):
    __tablename__ = "roles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    role = Column(String(100), nullable=False, index=True)
    department = Column(String(100), nullable=True)
    # keep String to avoid enum migration issues
    status = Column(String(20), nullable=False, default="active")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    permissions = relationship("Permission", secondary=role_permissions, lazy="selectin")
    users = relationship("User", back_populates="role")


# ---------------------------------------------------
# User
# ---------------------------------------------------

class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)

    full_name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    location = Column(String(200), nullable=True)
    phone = Column(String(50), nullable=True)
    profile_pic = Column(String(1000), nullable=True)

    # Optional self-referencing FK for the reporting manager
    reporting_manager_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    role_id = Column(
        Uuid,
        ForeignKey("roles.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    role = relationship("Role", back_populates="users", lazy="joined")
    reporting_manager = relationship("User", remote_side=[id])

    @property
    def role_name(self) -> str | None:
        return self.role.role if self.role else None
