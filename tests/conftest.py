from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pos_api.database import Base, enforce_foreign_keys, get_db, transaction
from pos_api.main import app
from pos_api.models.items import ItemFeature
from pos_api.models.job_positions import AccessFlag, JobPosition
from pos_api.services.employees import bulk_create_employees
from pos_api.services.items import bulk_create_items
from pos_api.services.sellables import bulk_create_sellable_categories, bulk_create_sellables


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enforce_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _stock(current_stock=50):
    return {"servings_per_stock": 10, "current_stock": current_stock, "min_stock": 20, "max_stock": 100}


@pytest.fixture
def menu(db):
    """A small menu: two sides, two entrees, a drink, and bowl/plate/drink sellables."""
    with transaction(db):
        db.add_all(
            [
                JobPosition(name="Employee", access=int(AccessFlag.BASIC_ORDERING)),
                JobPosition(name="Manager", access=int(AccessFlag.ALL)),
            ]
        )
        db.add_all(
            [
                ItemFeature(name="Side", importance=3, is_primary=True),
                ItemFeature(name="Entree", importance=3, is_primary=True),
                ItemFeature(name="Drink", importance=3, is_primary=True),
                ItemFeature(name="Spicy", importance=4, is_primary=False),
            ]
        )
        db.flush()

        employees = bulk_create_employees(
            db,
            [
                {"name": "Casey Cashier", "email": "casey@example.com", "job_position": {"name": "Employee"}},
                {"name": "Morgan Manager", "email": "morgan@example.com", "job_position": {"name": "Manager"}},
            ],
        )
        items = bulk_create_items(
            db,
            [
                {"name": "Chow Mein", "additional_price": Decimal("0.00"), "calories": 300,
                 "item_features": [{"name": "Side"}], "inventory_item": _stock()},
                {"name": "Fried Rice", "additional_price": Decimal("0.00"), "calories": 310,
                 "item_features": [{"name": "Side"}], "inventory_item": _stock()},
                {"name": "Orange Chicken", "additional_price": Decimal("0.00"), "calories": 490,
                 "item_features": [{"name": "Entree"}], "inventory_item": _stock()},
                {"name": "Beijing Beef", "additional_price": Decimal("1.50"), "calories": 480,
                 "item_features": [{"name": "Entree"}, {"name": "Spicy"}], "inventory_item": _stock(10)},
                {"name": "Fountain Drink", "additional_price": Decimal("0.00"), "calories": 0,
                 "item_features": [{"name": "Drink"}], "inventory_item": _stock()},
            ],
        )
        bulk_create_sellable_categories(db, [{"name": "Meal", "importance": 2}, {"name": "Drink", "importance": 2}])
        sellables = bulk_create_sellables(
            db,
            [
                {"name": "Bowl", "price": Decimal("8.30"), "sellable_categories": [{"name": "Meal"}],
                 "sellable_components": [{"item_feature": {"name": "Side"}, "amount": 2},
                                         {"item_feature": {"name": "Entree"}}]},
                {"name": "Plate", "price": Decimal("9.80"), "sellable_categories": [{"name": "Meal"}],
                 "sellable_components": [{"item_feature": {"name": "Side"}, "amount": 2},
                                         {"item_feature": {"name": "Entree"}, "amount": 2}]},
                {"name": "Drink", "price": Decimal("2.10"), "sellable_categories": [{"name": "Drink"}],
                 "sellable_components": [{"item_feature": {"name": "Drink"}}]},
            ],
        )
        ids = {
            "employees": {e.name: e.id for e in employees},
            "items": {i.name: i.id for i in items},
            "sellables": {s.name: s.id for s in sellables},
        }
    return ids
