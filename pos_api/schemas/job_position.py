# schemas/job_position.py

from pydantic import BaseModel, Field


class JobPositionCreate(BaseModel):
    name: str = Field(..., min_length=1)
    access: int = Field(0, ge=0, le=0xFF, description="AccessFlag bitmask")


class JobPositionResponse(BaseModel):
    id: int
    name: str
    access: int
    permissions: list[str]

    class Config:
        from_attributes = True
