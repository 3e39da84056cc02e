# schemas/cart.py

from decimal import Decimal

from pydantic import BaseModel

from pos_api.schemas.order import SoldSellableCreate


class CartQuoteRequest(BaseModel):
    entries: list[SoldSellableCreate]


class CartLineItem(BaseModel):
    item_id: int
    item_name: str
    amount: int


class CartLine(BaseModel):
    sellable_id: int
    sellable_name: str
    items: list[CartLineItem]
    price: Decimal


class CartQuoteResponse(BaseModel):
    lines: list[CartLine]
    total: Decimal
