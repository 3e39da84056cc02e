# pos_api/services/sellables.py

from sqlalchemy import insert
from sqlalchemy.orm import Session

from pos_api.models.items import ItemFeature
from pos_api.models.sellables import (
    Sellable,
    SellableCategory,
    SellableComponent,
    sellable_category_links,
)
from pos_api.services.lookup import (
    LookupCache,
    apply_changes,
    columns,
    create_thumbnails,
    get_live,
    resolve_many,
    resolve_reference,
)


def _resolve_components(cache: LookupCache, value: dict) -> list[tuple[int, int]]:
    return [
        (
            resolve_reference(cache, ItemFeature, component, "item_feature_id", "item_feature", required=True),
            component.get("amount") or 1,
        )
        for component in value.get("sellable_components") or []
    ]


def bulk_create_sellables(db: Session, values: list[dict]) -> list[Sellable]:
    """Create sellables, then their category links and feature slots."""
    cache = LookupCache(db)

    category_ids = [
        resolve_many(cache, SellableCategory, value, "sellable_category_ids", "sellable_categories")
        for value in values
    ]
    components = [_resolve_components(cache, value) for value in values]
    thumbnail_ids = create_thumbnails(db, values)

    sellables = [
        Sellable(**columns(value, "name", "price"), thumbnail_id=thumbnail_id)
        for value, thumbnail_id in zip(values, thumbnail_ids)
    ]
    db.add_all(sellables)
    db.flush()

    links = [
        {"sellable_id": sellable.id, "sellable_category_id": category_id}
        for sellable, ids in zip(sellables, category_ids)
        for category_id in ids
    ]
    if links:
        db.execute(insert(sellable_category_links), links)

    db.add_all(
        SellableComponent(sellable_id=sellable.id, item_feature_id=feature_id, amount=amount)
        for sellable, slots in zip(sellables, components)
        for feature_id, amount in slots
    )
    db.flush()
    return sellables


def bulk_create_sellable_categories(db: Session, values: list[dict]) -> list[SellableCategory]:
    thumbnail_ids = create_thumbnails(db, values)

    categories = [
        SellableCategory(**columns(value, "name", "importance"), thumbnail_id=thumbnail_id)
        for value, thumbnail_id in zip(values, thumbnail_ids)
    ]
    db.add_all(categories)
    db.flush()
    return categories


def update_sellable(db: Session, sellable_id: int, changes: dict) -> Sellable:
    sellable = get_live(db, Sellable, sellable_id)
    cache = LookupCache(db)

    if changes.get("sellable_category_ids") is not None or changes.get("sellable_categories") is not None:
        ids = resolve_many(cache, SellableCategory, changes, "sellable_category_ids", "sellable_categories")
        sellable.sellable_categories = (
            db.query(SellableCategory).filter(SellableCategory.id.in_(ids)).all()
        )

    if changes.get("sellable_components") is not None:
        # delete-orphan drops the previous slots
        sellable.sellable_components = [
            SellableComponent(item_feature_id=feature_id, amount=amount)
            for feature_id, amount in _resolve_components(cache, changes)
        ]

    apply_changes(sellable, changes, "name", "price", "thumbnail_id")
    db.flush()
    return sellable


def delete_sellable(db: Session, sellable_id: int):
    get_live(db, Sellable, sellable_id).soft_delete()
    db.flush()


def update_sellable_category(db: Session, category_id: int, changes: dict) -> SellableCategory:
    category = get_live(db, SellableCategory, category_id)
    apply_changes(category, changes, "name", "importance", "thumbnail_id")
    db.flush()
    return category
