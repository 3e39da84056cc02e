# pos_api/services/reports.py

import logging
from decimal import Decimal

from sqlalchemy import DateTime, delete, func, select
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import Session
from sqlalchemy.sql.expression import FunctionElement

from pos_api.core.errors import MalformedRequestError
from pos_api.models.orders import Order, OrderStatus, RecentOrder
from pos_api.models.sellables import Sellable
from pos_api.models.sold_items import SoldSellable

logger = logging.getLogger("app")

PERIODS = {
    "daily": "day",
    "weekly": "week",
    "monthly": "month",
}


class date_bucket(FunctionElement):
    """Truncate a timestamp to the start of its hour, day, week or month."""

    type = DateTime()
    # unit lives outside the clause list, so compiled forms can't be shared
    inherit_cache = False
    name = "date_bucket"

    def __init__(self, unit: str, column):
        self.unit = unit
        super().__init__(column)


@compiles(date_bucket)
def _date_trunc(element, compiler, **kw):
    return f"date_trunc('{element.unit}', {compiler.process(element.clauses, **kw)})"


SQLITE_BUCKETS = {
    "hour": "strftime('%Y-%m-%d %H:00:00', {})",
    "day": "strftime('%Y-%m-%d 00:00:00', {})",
    # back to the Monday on or before the date
    "week": "strftime('%Y-%m-%d 00:00:00', {}, '-6 days', 'weekday 1')",
    "month": "strftime('%Y-%m-01 00:00:00', {})",
}


@compiles(date_bucket, "sqlite")
def _sqlite_strftime(element, compiler, **kw):
    return SQLITE_BUCKETS[element.unit].format(compiler.process(element.clauses, **kw))


def _money(value) -> Decimal:
    return Decimal(str(value or 0))


def _completed():
    return RecentOrder.order_status == int(OrderStatus.COMPLETED)


def x_report(db: Session) -> list[dict]:
    """Completed orders still on the books, grouped by hour."""
    hour = date_bucket("hour", Order.order_date).label("hour")

    rows = db.execute(
        select(hour, func.count(RecentOrder.id), func.sum(Order.total_price))
        .join(RecentOrder, RecentOrder.order_id == Order.id)
        .where(_completed())
        .group_by(hour)
        .order_by(hour)
    ).all()

    return [
        {"hour": bucket, "order_count": order_count or 0, "total": _money(total)}
        for bucket, order_count, total in rows
    ]


def completed_recent_orders(db: Session) -> list[tuple]:
    """(recent order id, order total) for every completed order on the books."""
    return db.execute(
        select(RecentOrder.id, Order.total_price)
        .join(Order, RecentOrder.order_id == Order.id)
        .where(_completed())
        .with_for_update(of=RecentOrder)
    ).all()


def z_report(db: Session) -> dict:
    """Close out the completed orders: total them, then clear them from the recent orders.

    Runs inside the caller's transaction. Only the rows that were totalled are
    deleted, so an order completed meanwhile waits for the next close-out.
    """
    closed = completed_recent_orders(db)

    if closed:
        ids = [recent_order_id for recent_order_id, _ in closed]
        db.execute(delete(RecentOrder).where(RecentOrder.id.in_(ids)))

    total = sum((_money(price) for _, price in closed), Decimal("0.00"))
    report = {"order_count": len(closed), "total": total}
    logger.info(f"Z report closed {report['order_count']} orders totalling {report['total']}")
    return report


def sales_report(db: Session, period: str) -> list[dict]:
    """Sellables sold and revenue per day, week or month."""
    if period not in PERIODS:
        raise MalformedRequestError(f"Invalid time range: {period}")

    time_period = date_bucket(PERIODS[period], Order.order_date).label("time_period")
    total_sold = func.count(SoldSellable.id).label("total_sold")

    rows = db.execute(
        select(
            Sellable.name,
            total_sold,
            func.coalesce(func.sum(Sellable.price), 0),
            time_period,
        )
        .select_from(SoldSellable)
        .join(Sellable, SoldSellable.sellable_id == Sellable.id)
        .join(Order, SoldSellable.order_id == Order.id)
        .where(Sellable.live())
        .group_by(time_period, Sellable.id, Sellable.name)
        .order_by(time_period, total_sold.desc(), Sellable.name)
    ).all()

    return [
        {
            "item_name": name,
            "total_sold": sold or 0,
            "total_revenue": _money(revenue),
            "time_period": bucket,
        }
        for name, sold, revenue, bucket in rows
    ]
