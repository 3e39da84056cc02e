# schemas/item.py

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from pos_api.schemas.inventory import InventoryItemCreate, InventoryItemUpdate
from pos_api.schemas.item_feature import ItemFeatureResponse
from pos_api.schemas.shared import Lookup, ThumbnailCreate


class ItemCreate(BaseModel):
    name: str = Field(..., min_length=1)
    additional_price: Decimal = Field(Decimal("0.00"), ge=0, lt=100_000_000)
    calories: int = Field(..., ge=0)

    # both or neither
    seasonal_start: date | None = None
    seasonal_end: date | None = None

    inventory_item_id: int | None = None
    inventory_item: InventoryItemCreate | None = None

    item_feature_ids: list[int] | None = None
    item_features: list[Lookup] | None = None

    thumbnail_id: int | None = None
    thumbnail: ThumbnailCreate | None = None


class ItemUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    additional_price: Decimal | None = Field(None, ge=0, lt=100_000_000)
    calories: int | None = Field(None, ge=0)
    seasonal_start: date | None = None
    seasonal_end: date | None = None

    inventory_item_id: int | None = None
    inventory_item: InventoryItemUpdate | None = None

    item_feature_ids: list[int] | None = None
    item_features: list[Lookup] | None = None

    thumbnail_id: int | None = None


class ItemResponse(BaseModel):
    id: int
    name: str
    additional_price: Decimal
    calories: int
    seasonal_start: date | None
    seasonal_end: date | None
    inventory_item_id: int | None
    thumbnail_id: int | None
    item_features: list[ItemFeatureResponse] = []

    class Config:
        from_attributes = True
