# schemas/item_feature.py

from pydantic import BaseModel, Field

from pos_api.schemas.shared import ThumbnailCreate


class ItemFeatureCreate(BaseModel):
    name: str = Field(..., min_length=1)
    importance: int
    is_primary: bool = False

    thumbnail_id: int | None = None
    thumbnail: ThumbnailCreate | None = None


class ItemFeatureResponse(BaseModel):
    id: int
    name: str
    importance: int
    is_primary: bool | None
    thumbnail_id: int | None

    class Config:
        from_attributes = True
