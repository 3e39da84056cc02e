# schemas/sellable.py

from decimal import Decimal

from pydantic import BaseModel, Field

from pos_api.schemas.shared import Lookup, ThumbnailCreate


class SellableCategoryCreate(BaseModel):
    name: str = Field(..., min_length=1)
    importance: int

    thumbnail_id: int | None = None
    thumbnail: ThumbnailCreate | None = None


class SellableCategoryUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    importance: int | None = None
    thumbnail_id: int | None = None


class SellableCategoryResponse(BaseModel):
    id: int
    name: str
    importance: int
    thumbnail_id: int | None

    class Config:
        from_attributes = True


class SellableComponentCreate(BaseModel):
    item_feature_id: int | None = None
    item_feature: Lookup | None = None
    amount: int = Field(1, gt=0)


class SellableComponentResponse(BaseModel):
    id: int
    item_feature_id: int
    amount: int

    class Config:
        from_attributes = True


class SellableCreate(BaseModel):
    name: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0, lt=100_000_000)

    sellable_category_ids: list[int] | None = None
    sellable_categories: list[Lookup] | None = None
    sellable_components: list[SellableComponentCreate] = []

    thumbnail_id: int | None = None
    thumbnail: ThumbnailCreate | None = None


class SellableUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    price: Decimal | None = Field(None, ge=0, lt=100_000_000)
    sellable_category_ids: list[int] | None = None
    sellable_categories: list[Lookup] | None = None
    sellable_components: list[SellableComponentCreate] | None = None
    thumbnail_id: int | None = None


class SellableResponse(BaseModel):
    id: int
    name: str
    price: Decimal
    thumbnail_id: int | None
    sellable_categories: list[SellableCategoryResponse] = []
    sellable_components: list[SellableComponentResponse] = []

    class Config:
        from_attributes = True
