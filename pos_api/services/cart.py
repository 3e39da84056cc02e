# pos_api/services/cart.py
#
# Cart pricing. A cart entry is one sellable with the items chosen for it:
#
#   {"sellable": {"name": "Plate"},
#    "sold_items": [{"item": {"name": "Chow Mein"}, "amount": 2}, {"item_id": 4}]}

from decimal import Decimal

from sqlalchemy.orm import Session

from pos_api.core.errors import NotFoundError
from pos_api.models.items import Item
from pos_api.models.sellables import Sellable
from pos_api.services.lookup import LookupCache, resolve_reference


def resolve_entries(cache: LookupCache, entries: list[dict]) -> list[tuple]:
    """Resolve each entry to ``(sellable_id, [(item_id, amount), ...])``."""
    resolved = []
    for entry in entries:
        sellable_id = resolve_reference(cache, Sellable, entry, "sellable_id", "sellable", required=True)
        items = [
            (
                resolve_reference(cache, Item, sold_item, "item_id", "item", required=True),
                sold_item.get("amount") or 1,
            )
            for sold_item in entry.get("sold_items") or []
        ]
        resolved.append((sellable_id, items))
    return resolved


def _load(db: Session, model, ids: set) -> dict:
    rows = db.query(model).filter(model.id.in_(ids), model.live()).all() if ids else []
    found = {row.id: row for row in rows}

    missing = sorted(ids - found.keys())
    if missing:
        raise NotFoundError(f"Couldn't find {model.__name__} with ids {missing}")
    return found


def price_lines(db: Session, resolved: list[tuple]) -> list[dict]:
    sellables = _load(db, Sellable, {sellable_id for sellable_id, _ in resolved})
    items = _load(db, Item, {item_id for _, slots in resolved for item_id, _ in slots})

    lines = []
    for sellable_id, slots in resolved:
        sellable = sellables[sellable_id]
        price = Decimal(sellable.price)
        for item_id, amount in slots:
            price += Decimal(items[item_id].additional_price) * amount

        lines.append(
            {
                "sellable_id": sellable.id,
                "sellable_name": sellable.name,
                "items": [
                    {"item_id": item_id, "item_name": items[item_id].name, "amount": amount}
                    for item_id, amount in slots
                ],
                "price": price,
            }
        )
    return lines


def quote_cart(db: Session, entries: list[dict]) -> dict:
    lines = price_lines(db, resolve_entries(LookupCache(db), entries))
    return {
        "lines": lines,
        "total": sum((line["price"] for line in lines), Decimal("0.00")),
    }
