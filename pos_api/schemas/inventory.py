from pydantic import BaseModel, Field


class InventoryItemCreate(BaseModel):
    # defaults to the owning item's name when created inline
    name: str | None = None
    servings_per_stock: int = Field(..., ge=0)
    current_stock: int = Field(..., ge=0)
    min_stock: int = Field(..., ge=0)
    max_stock: int = Field(..., ge=0)

class InventoryItemUpdate(BaseModel):
    name: str | None = None
    servings_per_stock: int | None = Field(None, ge=0)
    current_stock: int | None = Field(None, ge=0)
    min_stock: int | None = Field(None, ge=0)
    max_stock: int | None = Field(None, ge=0)
    thumbnail_id: int | None = None

class InventoryItemResponse(BaseModel):
    id: int
    name: str
    servings_per_stock: int
    current_stock: int
    min_stock: int
    max_stock: int
    thumbnail_id: int | None

    class Config:
        from_attributes = True
