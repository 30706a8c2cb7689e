from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from workfriar.exceptions import RequestValidationFailure
from workfriar.models.category import Category, TIME_ENTRY_TYPES
from workfriar.validators import require_length, require_non_empty, require_one_of


def _ensure_unique(db: Session, name: str, exclude_id=None) -> None:
    q = db.query(Category).filter(func.lower(Category.category) == name.lower())
    if exclude_id is not None:
        q = q.filter(Category.id != exclude_id)
    if q.first():
        raise RequestValidationFailure("Category already exists")


def validate_category(db: Session, category: Optional[str], time_entry: Optional[str]) -> tuple[str, str]:
    name = require_non_empty(category, "Category", "Category is required")
    require_length(name, "Category", 3, 50)
    time_entry = require_non_empty(time_entry, "Time Entry", "Time Entry is required")
    require_one_of(time_entry, "Time Entry", TIME_ENTRY_TYPES)
    _ensure_unique(db, name)
    return name, time_entry


def validate_category_update(db: Session, category_id, category: Optional[str], time_entry: Optional[str]) -> dict:
    """At least one of ``category`` / ``time_entry`` must be given."""
    changes = {}
    if category:
        name = require_length(category.strip(), "Category", 3, 50)
        _ensure_unique(db, name, exclude_id=category_id)
        changes["category"] = name
    if time_entry:
        changes["time_entry"] = require_one_of(time_entry, "Time Entry", TIME_ENTRY_TYPES)
    if not changes:
        raise RequestValidationFailure("Provide a category or a time entry to update")
    return changes
