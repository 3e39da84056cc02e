# pos_api/services/inventory.py

from sqlalchemy.orm import Session

from pos_api.models.inventory import InventoryHistory, InventoryItem
from pos_api.services.lookup import apply_changes, get_live

INVENTORY_FIELDS = (
    "name",
    "servings_per_stock",
    "current_stock",
    "min_stock",
    "max_stock",
    "thumbnail_id",
)


def apply_inventory_changes(db: Session, inventory_item: InventoryItem, changes: dict) -> InventoryItem:
    new_stock = changes.get("current_stock")

    # every stock change leaves a history row
    if new_stock is not None and new_stock != inventory_item.current_stock:
        db.add(InventoryHistory(inventory_item_id=inventory_item.id, stock_amount=new_stock))

    apply_changes(inventory_item, changes, *INVENTORY_FIELDS)
    db.flush()
    return inventory_item


def update_inventory_item(db: Session, inventory_item_id: int, changes: dict) -> InventoryItem:
    inventory_item = get_live(db, InventoryItem, inventory_item_id)
    return apply_inventory_changes(db, inventory_item, changes)


def delete_inventory_item(db: Session, inventory_item_id: int):
    get_live(db, InventoryItem, inventory_item_id).soft_delete()
    db.flush()


def low_stock_items(db: Session) -> list[InventoryItem]:
    return (
        db.query(InventoryItem)
        .filter(InventoryItem.live(), InventoryItem.current_stock <= InventoryItem.min_stock)
        .order_by(InventoryItem.name)
        .all()
    )
