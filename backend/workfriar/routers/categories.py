"""Task categories (admin)."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from workfriar.database import get_db
from workfriar.dependencies import require_admin
from workfriar.exceptions import NotFoundError
from workfriar.models.category import Category
from workfriar.models.user import User
from workfriar.schemas.category import CategoryCreate, CategoryOut, CategoryUpdate
from workfriar.schemas.common import ApiResponse, envelope
from workfriar.services.categories import validate_category, validate_category_update

router = APIRouter(prefix="/admin/category", tags=["categories"])


@router.post("/add", response_model=ApiResponse[CategoryOut], status_code=201)
def add_category(body: CategoryCreate, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    name, time_entry = validate_category(db, body.category, body.time_entry)
    category = Category(category=name, time_entry=time_entry)
    db.add(category)
    db.commit()
    db.refresh(category)
    return envelope(CategoryOut.model_validate(category), "Category added successfully")


@router.get("/list", response_model=ApiResponse[list[CategoryOut]])
def list_categories(admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    rows = db.query(Category).order_by(Category.category).all()
    return envelope([CategoryOut.model_validate(c) for c in rows], "Categories fetched successfully")


@router.post("/update", response_model=ApiResponse[CategoryOut])
def update_category(body: CategoryUpdate, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    category = db.query(Category).filter(Category.id == body.id).first()
    if not category:
        raise NotFoundError("Category not found")

    for field, value in validate_category_update(db, category.id, body.category, body.timeentry).items():
        setattr(category, field, value)
    db.commit()
    db.refresh(category)
    return envelope(CategoryOut.model_validate(category), "Category updated successfully")
