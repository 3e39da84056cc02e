# schemas/order.py

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from pos_api.models.orders import OrderStatus
from pos_api.schemas.shared import Lookup


class SoldItemCreate(BaseModel):
    item_id: int | None = None
    item: Lookup | None = None
    amount: int = Field(1, gt=0)


class SoldSellableCreate(BaseModel):
    sellable_id: int | None = None
    sellable: Lookup | None = None
    sold_items: list[SoldItemCreate] = []


class OrderCreate(BaseModel):
    customer_name: str = Field(..., min_length=1)
    # priced from sold_sellables when left out
    total_price: Decimal | None = Field(None, gt=0, lt=100_000_000)
    order_date: datetime | None = None

    employee_id: int | None = None
    employee: Lookup | None = None

    order_status: OrderStatus | None = None
    sold_sellables: list[SoldSellableCreate] = []


class OrderUpdate(BaseModel):
    customer_name: str | None = Field(None, min_length=1)
    total_price: Decimal | None = Field(None, gt=0, lt=100_000_000)
    order_date: datetime | None = None
    employee_id: int | None = None
    employee: Lookup | None = None


class OrderStatusUpdate(BaseModel):
    order_status: OrderStatus


class SoldItemResponse(BaseModel):
    id: int
    item_id: int | None
    amount: int

    class Config:
        from_attributes = True


class SoldSellableResponse(BaseModel):
    id: int
    sellable_id: int | None
    sold_items: list[SoldItemResponse] = []

    class Config:
        from_attributes = True


class RecentOrderResponse(BaseModel):
    id: int
    order_id: int
    order_status: OrderStatus
    updated_at: datetime

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    id: int
    customer_name: str
    total_price: Decimal
    order_date: datetime
    employee_id: int | None
    recent_order: RecentOrderResponse | None = None
    sold_sellables: list[SoldSellableResponse] = []

    class Config:
        from_attributes = True
