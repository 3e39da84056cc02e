# schemas/shared.py

from typing import Any

from pydantic import BaseModel, Field

# A where-clause that must match exactly one existing row,
# e.g. {"name": "Manager"} or {"email": {"Op.iLike": "sam@%"}}
Lookup = dict[str, Any]


class ThumbnailCreate(BaseModel):
    src: str = Field(..., min_length=1)
    alt: str = Field(..., min_length=1)


class ThumbnailResponse(BaseModel):
    id: int
    src: str
    alt: str

    class Config:
        from_attributes = True
