# schemas/employee.py

from datetime import datetime

from pydantic import BaseModel, Field

from pos_api.schemas.shared import Lookup, ThumbnailCreate


class EmployeeCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: str | None = None
    start_date: datetime | None = None

    job_position_id: int | None = None
    job_position: Lookup | None = None

    thumbnail_id: int | None = None
    thumbnail: ThumbnailCreate | None = None


class EmployeeUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    email: str | None = None
    start_date: datetime | None = None
    job_position_id: int | None = None
    job_position: Lookup | None = None
    thumbnail_id: int | None = None


class EmployeeResponse(BaseModel):
    id: int
    name: str
    email: str | None
    start_date: datetime
    job_position_id: int | None
    thumbnail_id: int | None

    class Config:
        from_attributes = True


class EmployeeSummary(BaseModel):
    id: int
    name: str
    email: str | None
    job_position_id: int | None
    permissions: list[str] = []


class EmployeeCheckResponse(BaseModel):
    exists: bool
    employee: EmployeeSummary | None = None
    message: str | None = None
