import logging
from decimal import Decimal

import pytest
from sqlalchemy import event

from pos_api.core.errors import MalformedRequestError, NotFoundError, NotUniqueError, ValidationFailure
from pos_api.database import transaction
from pos_api.models.employees import Employee
from pos_api.models.items import Item
from pos_api.models.job_positions import JobPosition
from pos_api.models.orders import Order, OrderStatus
from pos_api.models.sellables import Sellable
from pos_api.services.employees import bulk_create_employees
from pos_api.services.items import bulk_create_items
from pos_api.services.lookup import place
from pos_api.services.orders import bulk_create_orders
from pos_api.services.sellables import bulk_create_sellables


def _count_selects(engine, table):
    statements = []

    @event.listens_for(engine, "before_cursor_execute")
    def record(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith("SELECT") and f"FROM {table}" in statement:
            statements.append(statement)

    return statements, record


def test_place_spreads_values_over_mask():
    assert place([True, False, True, False], [7, 9]) == [7, None, 9, None]
    assert place([], []) == []


def test_explicit_id_wins_over_descriptor(db, menu, caplog):
    manager = db.query(JobPosition).filter(JobPosition.name == "Manager").one()

    with caplog.at_level(logging.WARNING, logger="app"):
        with transaction(db):
            employee = bulk_create_employees(
                db,
                [{"name": "Riley", "job_position_id": manager.id, "job_position": {"name": "Employee"}}],
            )[0]
            employee_id = employee.id

    assert db.get(Employee, employee_id).job_position_id == manager.id
    assert "using job_position_id" in caplog.text


def test_identical_descriptors_are_looked_up_once(db, engine, menu):
    statements, record = _count_selects(engine, "job_positions")
    try:
        with transaction(db):
            bulk_create_employees(
                db,
                [
                    {"name": "A", "job_position": {"name": "Employee", "access": 0x4E}},
                    {"name": "B", "job_position": {"access": 0x4E, "name": "Employee"}},
                    {"name": "C", "job_position": {"name": "Employee", "access": 0x4E}},
                ],
            )
    finally:
        event.remove(engine, "before_cursor_execute", record)

    assert len(statements) == 1
    assert db.query(Employee).filter(Employee.name.in_(["A", "B", "C"])).count() == 3


def test_descriptor_matching_nothing_fails(db, menu):
    with pytest.raises(NotFoundError, match="Couldn't find JobPosition"):
        with transaction(db):
            bulk_create_employees(
                db,
                [
                    {"name": "Jordan", "job_position": {"name": "Employee"}},
                    {"name": "Sam", "job_position": {"name": "Astronaut"}},
                ],
            )

    assert db.query(Employee).filter(Employee.name.in_(["Jordan", "Sam"])).count() == 0


def test_descriptor_matching_several_rows_fails(db, menu):
    with transaction(db):
        bulk_create_items(db, [{"name": "Brown Rice", "additional_price": Decimal("0"), "calories": 200}])

    with pytest.raises(NotUniqueError, match="Found multiple Item"):
        with transaction(db):
            bulk_create_orders(
                db,
                [
                    {
                        "customer_name": "Alex",
                        "sold_sellables": [
                            {"sellable": {"name": "Bowl"}, "sold_items": [{"item": {"name": {"Op.like": "%Rice%"}}}]}
                        ],
                    }
                ],
            )
    assert db.query(Order).count() == 0


def test_soft_deleted_rows_are_not_resolved(db, menu):
    with transaction(db):
        db.get(Sellable, menu["sellables"]["Plate"]).soft_delete()

    with pytest.raises(NotFoundError):
        with transaction(db):
            bulk_create_orders(db, [{"customer_name": "Alex", "sold_sellables": [{"sellable": {"name": "Plate"}}]}])


def test_bulk_create_orders_fans_out_children(db, menu):
    with transaction(db):
        orders = bulk_create_orders(
            db,
            [
                {
                    "customer_name": "Alex",
                    "employee": {"email": "casey@example.com"},
                    "sold_sellables": [
                        {
                            "sellable": {"name": "Bowl"},
                            "sold_items": [
                                {"item": {"name": "Chow Mein"}, "amount": 2},
                                {"item": {"name": "Beijing Beef"}},
                            ],
                        },
                        {"sellable_id": menu["sellables"]["Drink"], "sold_items": [{"item": {"name": "Fountain Drink"}}]},
                    ],
                },
                {
                    "customer_name": "Sam",
                    "total_price": Decimal("5.00"),
                    "order_status": OrderStatus.COMPLETED,
                    "sold_sellables": [{"sellable": {"name": "Drink"}}],
                },
            ],
        )
        order_ids = [order.id for order in orders]

    first, second = (db.get(Order, order_id) for order_id in order_ids)

    assert first.employee_id == menu["employees"]["Casey Cashier"]
    assert first.recent_order.order_status == OrderStatus.PENDING
    assert [s.sellable.name for s in first.sold_sellables] == ["Bowl", "Drink"]
    assert [(i.item.name, i.amount) for i in first.sold_sellables[0].sold_items] == [
        ("Chow Mein", 2),
        ("Beijing Beef", 1),
    ]
    # 8.30 + 1.50 for the beef, plus a 2.10 drink
    assert first.total_price == Decimal("11.90")

    assert second.total_price == Decimal("5.00")
    assert second.recent_order.order_status == OrderStatus.COMPLETED


def test_bulk_create_items_links_features_and_inventory(db, menu, caplog):
    with caplog.at_level(logging.WARNING, logger="app"):
        with transaction(db):
            items = bulk_create_items(
                db,
                [
                    {
                        "name": "Kung Pao Chicken",
                        "additional_price": Decimal("0"),
                        "calories": 290,
                        "item_features": [{"name": "Entree"}, {"name": "Spicy"}, {"name": "Entree"}],
                        "inventory_item": {"servings_per_stock": 8, "current_stock": 40, "min_stock": 10, "max_stock": 80},
                    },
                    {"name": "Napkin", "additional_price": Decimal("0"), "calories": 0},
                ],
            )
            ids = [item.id for item in items]

    kung_pao, napkin = (db.get(Item, item_id) for item_id in ids)

    assert sorted(f.name for f in kung_pao.item_features) == ["Entree", "Spicy"]
    assert kung_pao.inventory_item.name == "Kung Pao Chicken"
    assert kung_pao.inventory_item.current_stock == 40
    assert napkin.inventory_item is None
    assert "'Napkin' has no inventory item" in caplog.text


def test_sellable_component_needs_a_feature(db, menu):
    with pytest.raises(MalformedRequestError, match="item_feature"):
        with transaction(db):
            bulk_create_sellables(db, [{"name": "Mystery Box", "price": Decimal("3"), "sellable_components": [{"amount": 1}]}])

    assert db.query(Sellable).filter(Sellable.name == "Mystery Box").count() == 0


def test_bulk_create_sellables_writes_links_and_slots(db, menu):
    with transaction(db):
        sellable = bulk_create_sellables(
            db,
            [
                {
                    "name": "Bigger Plate",
                    "price": Decimal("11.30"),
                    "sellable_categories": [{"name": "Meal"}],
                    "sellable_components": [
                        {"item_feature": {"name": "Side"}, "amount": 2},
                        {"item_feature": {"name": "Entree"}, "amount": 3},
                    ],
                    "thumbnail": {"src": "images/bigger_plate.png", "alt": "a bigger plate"},
                }
            ],
        )[0]
        sellable_id = sellable.id

    sellable = db.get(Sellable, sellable_id)
    assert [c.name for c in sellable.sellable_categories] == ["Meal"]
    assert sorted((c.item_feature.name, c.amount) for c in sellable.sellable_components) == [
        ("Entree", 3),
        ("Side", 2),
    ]
    assert sellable.thumbnail.src == "images/bigger_plate.png"


def test_explicit_ids_must_point_at_existing_rows(db, menu):
    with pytest.raises(ValidationFailure, match="Constraint violation"):
        with transaction(db):
            bulk_create_orders(
                db,
                [
                    {
                        "customer_name": "Ghost",
                        "employee_id": 9999,
                        "total_price": Decimal("1.00"),
                        "sold_sellables": [{"sellable_id": 8888}],
                    }
                ],
            )

    assert db.query(Order).count() == 0
