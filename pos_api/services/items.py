# pos_api/services/items.py

import logging
from typing import Iterable, Optional, Union

from rapidfuzz import fuzz
from sqlalchemy import insert
from sqlalchemy.orm import Session, selectinload

from pos_api.core.errors import NotFoundError
from pos_api.models.inventory import InventoryItem
from pos_api.models.items import Item, ItemFeature, item_feature_links
from pos_api.services.inventory import INVENTORY_FIELDS, apply_inventory_changes
from pos_api.services.lookup import (
    LookupCache,
    apply_changes,
    columns,
    create_thumbnails,
    get_live,
    place,
    resolve_many,
)

logger = logging.getLogger("app")

FeatureKey = Union[int, str]


def _create_inventory_items(db: Session, values: list[dict]) -> list[Optional[int]]:
    mask = []
    for value in values:
        if value.get("inventory_item_id") is not None:
            mask.append(False)
        elif value.get("inventory_item") is not None:
            mask.append(True)
        else:
            logger.warning(f"Item {value.get('name')!r} has no inventory item")
            mask.append(False)

    inventory_items = [
        # inline inventory items are named after their item unless told otherwise
        InventoryItem(
            **{"name": value.get("name"), **columns(value["inventory_item"], *INVENTORY_FIELDS)}
        )
        for value, flag in zip(values, mask)
        if flag
    ]
    if inventory_items:
        db.add_all(inventory_items)
        db.flush()

    created = place(mask, [inventory_item.id for inventory_item in inventory_items])
    return [
        value.get("inventory_item_id") if value.get("inventory_item_id") is not None else inventory_item_id
        for value, inventory_item_id in zip(values, created)
    ]


def bulk_create_items(db: Session, values: list[dict]) -> list[Item]:
    """Create items with their inventory items, thumbnails and feature links."""
    cache = LookupCache(db)

    feature_ids = [
        resolve_many(cache, ItemFeature, value, "item_feature_ids", "item_features")
        for value in values
    ]
    inventory_item_ids = _create_inventory_items(db, values)
    thumbnail_ids = create_thumbnails(db, values)

    items = [
        Item(
            **columns(value, "name", "additional_price", "calories", "seasonal_start", "seasonal_end"),
            inventory_item_id=inventory_item_id,
            thumbnail_id=thumbnail_id,
        )
        for value, inventory_item_id, thumbnail_id in zip(values, inventory_item_ids, thumbnail_ids)
    ]
    db.add_all(items)
    db.flush()

    links = [
        {"item_id": item.id, "item_feature_id": feature_id}
        for item, ids in zip(items, feature_ids)
        for feature_id in ids
    ]
    if links:
        db.execute(insert(item_feature_links), links)

    return items


def update_item(db: Session, item_id: int, changes: dict) -> Item:
    item = get_live(db, Item, item_id)

    if changes.get("item_feature_ids") is not None or changes.get("item_features") is not None:
        ids = resolve_many(LookupCache(db), ItemFeature, changes, "item_feature_ids", "item_features")
        item.item_features = db.query(ItemFeature).filter(ItemFeature.id.in_(ids)).all()

    if changes.get("inventory_item") is not None:
        if item.inventory_item is None:
            item.inventory_item = InventoryItem(
                **{"name": item.name, **columns(changes["inventory_item"], *INVENTORY_FIELDS)}
            )
        else:
            apply_inventory_changes(db, item.inventory_item, changes["inventory_item"])

    apply_changes(
        item,
        changes,
        "name",
        "additional_price",
        "calories",
        "seasonal_start",
        "seasonal_end",
        "inventory_item_id",
        "thumbnail_id",
    )
    db.flush()
    return item


def delete_item(db: Session, item_id: int):
    get_live(db, Item, item_id).soft_delete()
    db.flush()


def list_items(db: Session) -> list[Item]:
    return (
        db.query(Item)
        .options(selectinload(Item.item_features))
        .filter(Item.live())
        .order_by(Item.id)
        .all()
    )


def _matches(feature: ItemFeature, key: FeatureKey) -> bool:
    if isinstance(key, int):
        return feature.id == key
    return feature.name.lower() == key.lower()


def filter_items(
    items: Iterable[Item],
    include_features: Iterable[FeatureKey] = (),
    exclude_features: Iterable[FeatureKey] = (),
) -> list[Item]:
    """Keep items that have every included feature and none of the excluded ones.

    Features are matched by id or, case-insensitively, by name.
    """
    include_features = list(include_features)
    exclude_features = list(exclude_features)

    def keep(item: Item) -> bool:
        features = item.item_features
        has = lambda key: any(_matches(feature, key) for feature in features)
        return all(has(key) for key in include_features) and not any(has(key) for key in exclude_features)

    return [item for item in items if keep(item)]


def closest_item(db: Session, name: str) -> Item:
    items = db.query(Item).filter(Item.live()).order_by(Item.id).all()
    if not items:
        raise NotFoundError("No items found in the database")

    target = name.strip().lower()
    # first best wins ties
    return max(items, key=lambda item: fuzz.ratio(target, item.name.lower()))
