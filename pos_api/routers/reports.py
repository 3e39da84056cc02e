# =========================================================
# REPORTS ROUTER
#
# X report: completed orders since the last close-out, by hour
# Z report: close-out; totals completed orders then clears them
# Sales:    sellables sold per day / week / month
# =========================================================

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from pos_api.database import get_db, transaction
from pos_api.schemas.report import SalesReportRow, XReportRow, ZReportResponse
from pos_api.services.reports import sales_report, x_report, z_report

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/x", response_model=list[XReportRow])
def get_x_report(db: Session = Depends(get_db)):
    return x_report(db)


@router.post("/z", response_model=ZReportResponse)
def run_z_report(db: Session = Depends(get_db)):
    with transaction(db):
        report = z_report(db)
    return report


@router.get("/sales", response_model=list[SalesReportRow])
def get_sales_report(
    period: str = Query("daily", description="daily, weekly or monthly"),
    db: Session = Depends(get_db),
):
    return sales_report(db, period)
