# schemas/report.py

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


class XReportRow(BaseModel):
    hour: datetime
    order_count: int
    total: Decimal


class ZReportResponse(BaseModel):
    order_count: int
    total: Decimal


class SalesReportRow(BaseModel):
    item_name: str
    total_sold: int
    total_revenue: Decimal
    time_period: datetime
