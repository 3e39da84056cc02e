# pos_api/routers/sellable_categories.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from pos_api.database import get_db, transaction
from pos_api.models.sellables import SellableCategory
from pos_api.schemas.sellable import (
    SellableCategoryCreate,
    SellableCategoryResponse,
    SellableCategoryUpdate,
)
from pos_api.services.sellables import bulk_create_sellable_categories, update_sellable_category

router = APIRouter(prefix="/sellable-categories", tags=["Menu"])


@router.get("", response_model=list[SellableCategoryResponse])
def list_sellable_categories(db: Session = Depends(get_db)):
    return db.query(SellableCategory).order_by(SellableCategory.importance, SellableCategory.id).all()


@router.post("", response_model=list[SellableCategoryResponse], status_code=status.HTTP_201_CREATED)
def create_sellable_categories(
    categories_data: list[SellableCategoryCreate],
    db: Session = Depends(get_db),
):
    with transaction(db):
        categories = bulk_create_sellable_categories(db, [c.model_dump() for c in categories_data])
    return categories


@router.put("/{category_id}", response_model=SellableCategoryResponse)
def edit_sellable_category(
    category_id: int,
    category_data: SellableCategoryUpdate,
    db: Session = Depends(get_db),
):
    with transaction(db):
        category = update_sellable_category(db, category_id, category_data.model_dump(exclude_unset=True))
    return category
