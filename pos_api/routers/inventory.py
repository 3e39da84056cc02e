# pos_api/routers/inventory.py

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from pos_api.database import get_db, transaction
from pos_api.models.inventory import InventoryItem
from pos_api.schemas.inventory import InventoryItemResponse, InventoryItemUpdate
from pos_api.services.inventory import (
    delete_inventory_item,
    low_stock_items,
    update_inventory_item,
)

router = APIRouter(prefix="/inventory-items", tags=["Inventory"])


@router.get("", response_model=list[InventoryItemResponse])
def list_inventory(
    low_stock: bool = Query(False, description="Only items at or below their minimum stock"),
    db: Session = Depends(get_db),
):
    if low_stock:
        return low_stock_items(db)

    return (
        db.query(InventoryItem)
        .filter(InventoryItem.live())
        .order_by(InventoryItem.name)
        .all()
    )


@router.put("/{inventory_item_id}", response_model=InventoryItemResponse)
def edit_inventory_item(
    inventory_item_id: int,
    inventory_data: InventoryItemUpdate,
    db: Session = Depends(get_db),
):
    with transaction(db):
        inventory_item = update_inventory_item(
            db, inventory_item_id, inventory_data.model_dump(exclude_unset=True)
        )
    return inventory_item


@router.delete("/{inventory_item_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_inventory_item(inventory_item_id: int, db: Session = Depends(get_db)):
    with transaction(db):
        delete_inventory_item(db, inventory_item_id)
