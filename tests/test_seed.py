from pos_api.models.employees import Employee
from pos_api.models.items import Item
from pos_api.models.orders import Order
from pos_api.models.sellables import Sellable
from pos_api.seed import EMPLOYEES, ITEMS, SELLABLES, populate
from pos_api.services.reports import sales_report


def test_populate_builds_a_usable_menu(db):
    populate(db, order_count=25, seed=7)

    assert db.query(Employee).count() == len(EMPLOYEES)
    assert db.query(Item).count() == len(ITEMS)
    assert db.query(Sellable).count() == len(SELLABLES)

    orders = db.query(Order).all()
    assert len(orders) == 25
    assert all(order.total_price > 0 for order in orders)
    assert all(order.recent_order is not None for order in orders)

    beef = db.query(Item).filter(Item.name == "Beijing Beef").one()
    assert beef.inventory_item.current_stock == 50
    assert {f.name for f in beef.item_features} >= {"Entree", "Spicy"}

    assert sum(row["total_sold"] for row in sales_report(db, "monthly")) == 25
