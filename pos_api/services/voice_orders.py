# pos_api/services/voice_orders.py

import logging
from collections import Counter

from sqlalchemy.orm import Session

from pos_api.core.errors import UpstreamServiceError
from pos_api.core.transcription import extract_order, parse_order, transcribe_audio
from pos_api.database import transaction
from pos_api.services.items import closest_item
from pos_api.services.orders import bulk_create_orders

logger = logging.getLogger("app")

DEFAULT_CUSTOMER = "Kiosk Customer"


def order_from_model_reply(db: Session, parsed: dict) -> dict:
    """Turn the model's order into order-creation values, matching items by closest name."""
    sold_sellables = []

    for entry in parsed["sold_sellables"]:
        if not isinstance(entry, dict):
            raise UpstreamServiceError("Invalid parsed order structure: sold_sellables entry is not an object")

        sellable = entry.get("sellable")
        sellable_name = sellable.get("name") if isinstance(sellable, dict) else None
        if not sellable_name:
            raise UpstreamServiceError("Invalid parsed order structure: sellable without a name")

        items = entry.get("items") or []
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            raise UpstreamServiceError("Invalid parsed order structure: items must be objects")

        names = [item["name"] for item in items if isinstance(item.get("name"), str) and item["name"].strip()]
        amounts = Counter(closest_item(db, name).id for name in names)
        sold_sellables.append(
            {
                "sellable": {"name": {"Op.iLike": sellable_name}},
                "sold_items": [{"item_id": item_id, "amount": amount} for item_id, amount in amounts.items()],
            }
        )

    if not sold_sellables:
        raise UpstreamServiceError("No sellables were recognised in the order")

    return {
        "customer_name": parsed.get("customer_name") or DEFAULT_CUSTOMER,
        "sold_sellables": sold_sellables,
    }


def place_voice_order(db: Session, audio: bytes, filename: str, content_type: str) -> dict:
    transcription = transcribe_audio(audio, filename, content_type)
    reply = extract_order(transcription)
    parsed = parse_order(reply)

    with transaction(db):
        values = order_from_model_reply(db, parsed)
        order = bulk_create_orders(db, [values])[0]
        order_id, total_price = order.id, order.total_price

    logger.info(f"Voice order {order_id} placed for {total_price}")

    return {
        "transcription": transcription,
        "order_id": order_id,
        "total_price": total_price,
        "order": parsed,
    }
