# pos_api/routers/items.py

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, selectinload

from pos_api.database import get_db, transaction
from pos_api.models.items import Item
from pos_api.schemas.item import ItemCreate, ItemResponse, ItemUpdate
from pos_api.services.items import (
    bulk_create_items,
    closest_item,
    delete_item,
    filter_items,
    list_items,
    update_item,
)

router = APIRouter(prefix="/items", tags=["Items"])


def _feature_keys(raw: str | None) -> list[int | str]:
    """Parse "1,Spicy, 4" into [1, "Spicy", 4]."""
    if not raw:
        return []
    keys = []
    for token in raw.split(","):
        token = token.strip()
        if token:
            keys.append(int(token) if token.isdigit() else token)
    return keys


# =========================================================
# LIST ITEMS (optional feature filtering)
# =========================================================
@router.get("", response_model=list[ItemResponse])
def get_items(
    include_features: str | None = Query(None, description="Comma separated feature ids or names"),
    exclude_features: str | None = Query(None, description="Comma separated feature ids or names"),
    db: Session = Depends(get_db),
):
    return filter_items(
        list_items(db),
        _feature_keys(include_features),
        _feature_keys(exclude_features),
    )


@router.get("/closest", response_model=ItemResponse)
def get_closest_item(
    name: str | None = Query(None),
    db: Session = Depends(get_db),
):
    if not name:
        raise HTTPException(status_code=400, detail="Missing required 'name' parameter")
    return closest_item(db, name)


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(item_id: int, db: Session = Depends(get_db)):
    item = (
        db.query(Item)
        .options(selectinload(Item.item_features))
        .filter(Item.id == item_id, Item.live())
        .first()
    )
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")
    return item


@router.post("", response_model=list[ItemResponse], status_code=status.HTTP_201_CREATED)
def create_items(
    items_data: list[ItemCreate],
    db: Session = Depends(get_db),
):
    with transaction(db):
        items = bulk_create_items(db, [i.model_dump() for i in items_data])
    return items


@router.put("/{item_id}", response_model=ItemResponse)
def edit_item(
    item_id: int,
    item_data: ItemUpdate,
    db: Session = Depends(get_db),
):
    with transaction(db):
        item = update_item(db, item_id, item_data.model_dump(exclude_unset=True))
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_item(item_id: int, db: Session = Depends(get_db)):
    with transaction(db):
        delete_item(db, item_id)
