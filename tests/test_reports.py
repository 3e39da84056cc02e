import logging
from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import update

from pos_api.core.errors import MalformedRequestError
from pos_api.database import transaction
from pos_api.models.orders import OrderStatus, RecentOrder
from pos_api.models.sellables import Sellable
from pos_api.services import reports
from pos_api.services.orders import bulk_create_orders
from pos_api.services.reports import sales_report, x_report, z_report


def _order(when, total, status=OrderStatus.COMPLETED, sellables=("Bowl",)):
    return {
        "customer_name": "Alex",
        "order_date": when,
        "total_price": Decimal(total),
        "order_status": status,
        "sold_sellables": [{"sellable": {"name": name}} for name in sellables],
    }


@pytest.fixture
def day_of_orders(db, menu):
    with transaction(db):
        bulk_create_orders(
            db,
            [
                _order(datetime(2026, 1, 5, 10, 15), "5.00"),
                _order(datetime(2026, 1, 5, 10, 45), "7.50", sellables=("Bowl", "Drink")),
                _order(datetime(2026, 1, 5, 11, 5), "3.00", sellables=("Drink",)),
                _order(datetime(2026, 1, 5, 10, 30), "9.99", status=OrderStatus.PENDING),
                _order(datetime(2026, 1, 7, 18, 0), "8.30", status=OrderStatus.CANCELLED),
                _order(datetime(2026, 2, 2, 12, 0), "9.80", sellables=("Plate",)),
            ],
        )


def test_x_report_groups_completed_orders_by_hour(db, day_of_orders):
    assert x_report(db) == [
        {"hour": datetime(2026, 1, 5, 10), "order_count": 2, "total": Decimal("12.50")},
        {"hour": datetime(2026, 1, 5, 11), "order_count": 1, "total": Decimal("3.00")},
        {"hour": datetime(2026, 2, 2, 12), "order_count": 1, "total": Decimal("9.80")},
    ]


def test_z_report_closes_out_completed_orders(db, day_of_orders, caplog):
    with caplog.at_level(logging.INFO, logger="app"):
        with transaction(db):
            report = z_report(db)

    assert report == {"order_count": 4, "total": Decimal("25.30")}
    assert "Z report closed 4 orders totalling 25.30" in caplog.text

    remaining = sorted(OrderStatus(r.order_status) for r in db.query(RecentOrder).all())
    assert remaining == [OrderStatus.PENDING, OrderStatus.CANCELLED]
    assert x_report(db) == []

    with transaction(db):
        assert z_report(db) == {"order_count": 0, "total": Decimal("0")}


def test_z_report_only_clears_the_orders_it_totalled(db, day_of_orders, monkeypatch):
    totalled = reports.completed_recent_orders

    def complete_another_order_meanwhile(session):
        rows = totalled(session)
        session.execute(
            update(RecentOrder)
            .where(RecentOrder.order_status == int(OrderStatus.PENDING))
            .values(order_status=int(OrderStatus.COMPLETED))
        )
        return rows

    monkeypatch.setattr(reports, "completed_recent_orders", complete_another_order_meanwhile)
    with transaction(db):
        assert z_report(db) == {"order_count": 4, "total": Decimal("25.30")}

    monkeypatch.undo()
    with transaction(db):
        assert z_report(db) == {"order_count": 1, "total": Decimal("9.99")}


def test_z_report_route(client, db, day_of_orders):
    response = client.post("/reports/z")
    assert response.status_code == 200
    assert response.json()["order_count"] == 4
    assert Decimal(response.json()["total"]) == Decimal("25.30")

    response = client.post("/reports/z")
    assert response.json()["order_count"] == 0


def test_sales_report_daily(db, day_of_orders):
    rows = sales_report(db, "daily")

    assert [(r["time_period"], r["item_name"], r["total_sold"], r["total_revenue"]) for r in rows] == [
        (datetime(2026, 1, 5), "Bowl", 3, Decimal("24.90")),
        (datetime(2026, 1, 5), "Drink", 2, Decimal("4.20")),
        (datetime(2026, 1, 7), "Bowl", 1, Decimal("8.30")),
        (datetime(2026, 2, 2), "Plate", 1, Decimal("9.80")),
    ]


def test_sales_report_weekly_and_monthly(db, day_of_orders):
    weekly = sales_report(db, "weekly")
    # Jan 5 and Jan 7 fall in the week starting Monday Jan 5
    assert [(r["time_period"], r["item_name"], r["total_sold"]) for r in weekly] == [
        (datetime(2026, 1, 5), "Bowl", 4),
        (datetime(2026, 1, 5), "Drink", 2),
        (datetime(2026, 2, 2), "Plate", 1),
    ]

    monthly = sales_report(db, "monthly")
    assert [(r["time_period"], r["item_name"], r["total_sold"]) for r in monthly] == [
        (datetime(2026, 1, 1), "Bowl", 4),
        (datetime(2026, 1, 1), "Drink", 2),
        (datetime(2026, 2, 1), "Plate", 1),
    ]


def test_sales_report_skips_deleted_sellables(db, menu, day_of_orders):
    with transaction(db):
        db.get(Sellable, menu["sellables"]["Drink"]).soft_delete()

    assert "Drink" not in {r["item_name"] for r in sales_report(db, "monthly")}


def test_sales_report_rejects_unknown_periods(client, db, menu):
    with pytest.raises(MalformedRequestError):
        sales_report(db, "yearly")

    response = client.get("/reports/sales", params={"period": "yearly"})
    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid time range: yearly"}

    response = client.get("/reports/x")
    assert response.status_code == 200
    assert response.json() == []
