"""
Roles & permissions router. All endpoints require Admin or Super Admin.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from workfriar.database import get_db
from workfriar.dependencies import require_admin
from workfriar.exceptions import NotFoundError, RequestValidationFailure
from workfriar.models.user import Permission, Role, User, role_permissions
from workfriar.schemas.common import ApiResponse, envelope
from workfriar.schemas.role import PermissionIn, RoleCreate, RoleDelete, RoleMapUsers, RoleOut, RoleUpdate

router = APIRouter(prefix="/admin/role", tags=["roles"])


# ---------- helpers ----------

def _role_out(db: Session, role: Role) -> RoleOut:
    count = db.query(func.count(User.id)).filter(User.role_id == role.id).scalar() or 0
    out = RoleOut.model_validate(role)
    out.user_count = count
    return out


def _get_role(db: Session, role_id) -> Role:
    role = db.query(Role).filter(Role.id == role_id).first()
    if not role:
        raise NotFoundError("Role not found")
    return role


def _ensure_unique_name(db: Session, name: str, exclude_id=None) -> None:
    q = db.query(Role).filter(func.lower(Role.role) == name.strip().lower())
    if exclude_id is not None:
        q = q.filter(Role.id != exclude_id)
    if q.first():
        raise RequestValidationFailure("Role already exists")


def _build_permissions(items: list[PermissionIn]) -> list[Permission]:
    return [Permission(category=p.category.strip(), actions=sorted(set(p.actions))) for p in items]


def _drop_orphan_permissions(db: Session, permissions: list[Permission]) -> None:
    for perm in permissions:
        still_used = db.query(role_permissions).filter(role_permissions.c.permission_id == perm.id).first()
        if not still_used:
            db.delete(perm)


# ---------- endpoints ----------

@router.post("/create", response_model=ApiResponse[RoleOut], status_code=201)
def create_role(body: RoleCreate, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    _ensure_unique_name(db, body.role)
    role = Role(
        role=body.role.strip(),
        department=body.department.strip(),
        status=body.status,
        permissions=_build_permissions(body.permissions),
    )
    db.add(role)
    db.commit()
    db.refresh(role)
    return envelope(_role_out(db, role), "Role created successfully")


@router.post("/map", response_model=ApiResponse[RoleOut])
def map_role(body: RoleMapUsers, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    role = _get_role(db, body.role_id)
    users = db.query(User).filter(User.id.in_(body.user_ids)).all()
    if len(users) != len(set(body.user_ids)):
        raise NotFoundError("One or more users not found")
    for u in users:
        u.role_id = role.id
    db.commit()
    db.refresh(role)
    return envelope(_role_out(db, role), "Role mapped successfully")


@router.get("/all", response_model=ApiResponse[list[RoleOut]])
def all_roles(admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    roles = db.query(Role).order_by(Role.role).all()
    return envelope([_role_out(db, r) for r in roles], "Roles fetched successfully")


@router.post("/delete", response_model=ApiResponse[list])
def delete_role(body: RoleDelete, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    role = _get_role(db, body.role_id)
    if db.query(User).filter(User.role_id == role.id).first():
        raise RequestValidationFailure("Role is assigned to users and cannot be deleted")

    permissions = list(role.permissions)
    db.delete(role)
    db.flush()
    _drop_orphan_permissions(db, permissions)
    db.commit()
    return envelope([], "Role deleted successfully")


@router.post("/update", response_model=ApiResponse[RoleOut])
def update_role(body: RoleUpdate, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    role = _get_role(db, body.role_id)

    if body.role is not None:
        _ensure_unique_name(db, body.role, exclude_id=role.id)
        role.role = body.role.strip()
    if body.department is not None:
        role.department = body.department.strip()
    if body.status is not None:
        role.status = body.status

    if body.permissions is not None:
        previous = list(role.permissions)
        role.permissions = _build_permissions(body.permissions)
        db.flush()
        _drop_orphan_permissions(db, previous)

    db.commit()
    db.refresh(role)
    return envelope(_role_out(db, role), "Role updated successfully")
