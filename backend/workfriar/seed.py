"""Seed roles, default task categories and a first admin account.

Run with ``python -m workfriar.seed`` from ``backend/``. Existing rows are
left alone, so it is safe to run repeatedly.
"""

import os
import logging

from sqlalchemy.orm import Session

from workfriar.database import SessionLocal
from workfriar.models.category import Category
from workfriar.models.user import (
    ADMIN,
    PROJECT_MANAGER,
    SUPER_ADMIN,
    TEAM_LEAD,
    TECHNICAL_LEAD,
    Permission,
    Role,
    User,
)
from workfriar.services.auth import hash_password

logger = logging.getLogger(__name__)

SEED_ROLES = [
    {"role": SUPER_ADMIN, "department": "Management", "permissions": [
        {"category": "Timesheets", "actions": ["view", "review"]},
        {"category": "Projects", "actions": ["view", "edit", "delete"]},
        {"category": "Users", "actions": ["view", "edit", "delete"]},
    ]},
    {"role": ADMIN, "department": "Management", "permissions": [
        {"category": "Timesheets", "actions": ["view", "review"]},
        {"category": "Projects", "actions": ["view", "edit"]},
    ]},
    {"role": PROJECT_MANAGER, "department": "Delivery", "permissions": [
        {"category": "Timesheets", "actions": ["view", "review"]},
    ]},
    {"role": TECHNICAL_LEAD, "department": "Technical", "permissions": [
        {"category": "Timesheets", "actions": ["view", "review"]},
    ]},
    {"role": TEAM_LEAD, "department": "Technical", "permissions": [
        {"category": "Timesheets", "actions": ["view", "review"]},
    ]},
    {"role": "Employee", "department": "Technical", "permissions": [
        {"category": "Timesheets", "actions": ["view"]},
    ]},
]

SEED_CATEGORIES = [
    ("Development", "Open Entry"),
    ("Meeting", "Open Entry"),
    ("Testing", "Open Entry"),
    ("Design", "Open Entry"),
    ("Leave", "Close Entry"),
]


def seed_roles(db: Session) -> list[str]:
    created = []
    for blueprint in SEED_ROLES:
        if db.query(Role).filter(Role.role == blueprint["role"]).first():
            continue
        role = Role(
            role=blueprint["role"],
            department=blueprint["department"],
            permissions=[Permission(**p) for p in blueprint["permissions"]],
        )
        db.add(role)
        created.append(blueprint["role"])
    db.commit()
    return created


def seed_categories(db: Session) -> list[str]:
    created = []
    for name, time_entry in SEED_CATEGORIES:
        if db.query(Category).filter(Category.category == name).first():
            continue
        db.add(Category(category=name, time_entry=time_entry))
        created.append(name)
    db.commit()
    return created


def seed_admin(db: Session) -> User | None:
    email = os.getenv("SEED_ADMIN_EMAIL", "admin@workfriar.local").strip().lower()
    if db.query(User).filter(User.email == email).first():
        return None

    role = db.query(Role).filter(Role.role == SUPER_ADMIN).first()
    admin = User(
        full_name="Workfriar Admin",
        email=email,
        password_hash=hash_password(os.getenv("SEED_ADMIN_PASSWORD", "change-me")),
        role_id=role.id if role else None,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


def run(db: Session) -> dict:
    roles = seed_roles(db)
    categories = seed_categories(db)
    admin = seed_admin(db)
    summary = {"roles": roles, "categories": categories, "admin": admin.email if admin else None}
    logger.info(f"Seed complete: {summary}")
    return summary


if __name__ == "__main__":
    from workfriar.logging_config import setup_logging

    setup_logging()
    with SessionLocal() as session:
        run(session)
