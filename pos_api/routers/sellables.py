# pos_api/routers/sellables.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, selectinload

from pos_api.database import get_db, transaction
from pos_api.models.sellables import Sellable
from pos_api.schemas.sellable import SellableCreate, SellableResponse, SellableUpdate
from pos_api.services.sellables import bulk_create_sellables, delete_sellable, update_sellable

router = APIRouter(prefix="/sellables", tags=["Menu"])


@router.get("", response_model=list[SellableResponse])
def list_sellables(db: Session = Depends(get_db)):
    return (
        db.query(Sellable)
        .options(
            selectinload(Sellable.sellable_categories),
            selectinload(Sellable.sellable_components),
        )
        .filter(Sellable.live())
        .order_by(Sellable.id)
        .all()
    )


@router.post("", response_model=list[SellableResponse], status_code=status.HTTP_201_CREATED)
def create_sellables(
    sellables_data: list[SellableCreate],
    db: Session = Depends(get_db),
):
    with transaction(db):
        sellables = bulk_create_sellables(db, [s.model_dump() for s in sellables_data])
    return sellables


@router.put("/{sellable_id}", response_model=SellableResponse)
def edit_sellable(
    sellable_id: int,
    sellable_data: SellableUpdate,
    db: Session = Depends(get_db),
):
    with transaction(db):
        sellable = update_sellable(db, sellable_id, sellable_data.model_dump(exclude_unset=True))
    return sellable


@router.delete("/{sellable_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_sellable(sellable_id: int, db: Session = Depends(get_db)):
    with transaction(db):
        delete_sellable(db, sellable_id)
