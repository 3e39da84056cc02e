# pos_api/seed.py
#
# Populates a database with a demo menu, staff and order history:
#
#   python -m pos_api.seed --reset --orders 500

import argparse
import logging
import random
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy.orm import Session

from pos_api.database import Base, SessionLocal, engine, transaction
from pos_api.models.items import Item, ItemFeature
from pos_api.models.job_positions import AccessFlag, JobPosition
from pos_api.models.orders import OrderStatus
from pos_api.models.registry import MODELS
from pos_api.models.sellables import Sellable
from pos_api.services.employees import bulk_create_employees
from pos_api.services.items import bulk_create_items
from pos_api.services.orders import bulk_create_orders
from pos_api.services.sellables import bulk_create_sellable_categories, bulk_create_sellables

logger = logging.getLogger("app")

JOB_POSITIONS = [
    {"name": "Employee", "access": AccessFlag.BASIC_ORDERING},
    {"name": "Manager", "access": AccessFlag.ALL},
]

EMPLOYEES = [
    {"name": "Marcel Reed", "start_date": datetime(2024, 9, 14), "job_position": {"name": "Manager"}},
    {"name": "Mike Elko", "start_date": datetime(2023, 11, 27), "job_position": {"name": "Employee"}},
    {"name": "John Helldiver", "start_date": datetime(2024, 2, 8), "job_position": {"name": "Employee"}},
    {
        "name": "Daniel Manning",
        "start_date": datetime(2024, 2, 8),
        "job_position": {"name": "Manager"},
        "email": "dmanning@example.com",
    },
]

ITEM_FEATURES = [
    ("Featured", 0, True),
    ("Seasonal", 1, True),
    ("Kids", 2, True),
    ("Entree", 3, True),
    ("Side", 3, True),
    ("Appetizer", 3, True),
    ("Drink", 3, True),
    ("Vegetarian", 4, False),
    ("Healthy", 4, False),
    ("Spicy", 4, False),
    ("Chicken", 4, False),
    ("Beef", 4, False),
    ("Egg", 4, False),
    ("Pork", 4, False),
    ("Fish/Shellfish", 4, False),
    ("Dairy", 4, False),
    ("Gluten", 4, False),
    ("Soy", 4, False),
    ("Peanuts", 4, False),
]


def _stock(servings_per_stock=10, current_stock=50, min_stock=20, max_stock=100):
    return {
        "servings_per_stock": servings_per_stock,
        "current_stock": current_stock,
        "min_stock": min_stock,
        "max_stock": max_stock,
    }


def _features(*names):
    return [{"name": name} for name in names]


ITEMS = [
    {"name": "Chow Mein", "calories": 300, "item_features": _features("Gluten", "Soy", "Side", "Vegetarian")},
    {"name": "Fried Rice", "calories": 310, "item_features": _features("Gluten", "Soy", "Egg", "Side", "Vegetarian")},
    {"name": "White Steamed Rice", "calories": 260, "item_features": _features("Side", "Vegetarian")},
    {"name": "Super Greens", "calories": 65, "item_features": _features("Side", "Vegetarian", "Healthy")},
    {"name": "Orange Chicken", "calories": 490, "item_features": _features("Entree", "Chicken", "Featured", "Gluten", "Soy")},
    {"name": "Beijing Beef", "calories": 480, "item_features": _features("Entree", "Beef", "Spicy", "Gluten", "Soy")},
    {"name": "Broccoli Beef", "calories": 150, "item_features": _features("Entree", "Beef", "Healthy", "Soy")},
    {"name": "Kung Pao Chicken", "calories": 290, "item_features": _features("Entree", "Chicken", "Spicy", "Peanuts")},
    {"name": "Honey Walnut Shrimp", "calories": 360, "additional_price": Decimal("1.50"), "item_features": _features("Entree", "Fish/Shellfish", "Egg", "Dairy")},
    {"name": "Grilled Teriyaki Chicken", "calories": 300, "item_features": _features("Entree", "Chicken", "Soy")},
    {"name": "Chicken Egg Roll", "calories": 200, "item_features": _features("Appetizer", "Chicken", "Egg", "Gluten")},
    {"name": "Cream Cheese Rangoon", "calories": 190, "item_features": _features("Appetizer", "Dairy", "Vegetarian")},
    {"name": "Fountain Drink", "calories": 0, "item_features": _features("Drink")},
    {
        "name": "Peppermint Bark Cookie",
        "calories": 210,
        "additional_price": Decimal("2.00"),
        "seasonal_start": date(2026, 11, 15),
        "seasonal_end": date(2026, 12, 31),
        "item_features": _features("Appetizer", "Seasonal", "Dairy"),
    },
]

SELLABLE_CATEGORIES = [
    {"name": "Featured", "importance": 0},
    {"name": "Seasonal", "importance": 1},
    {"name": "Meal", "importance": 2, "thumbnail": {"src": "images/plate.png", "alt": "image of a plate meal"}},
    {"name": "A la Carte", "importance": 2, "thumbnail": {"src": "images/ala_carte.png", "alt": "image of an a la carte entree"}},
    {"name": "Drink", "importance": 2, "thumbnail": {"src": "images/drinks.png", "alt": "image of a drink"}},
    {"name": "Appetizer", "importance": 2, "thumbnail": {"src": "images/appetizers.png", "alt": "image of an appetizer"}},
    {"name": "Kids Meal", "importance": 2, "thumbnail": {"src": "images/cub_meal.png", "alt": "image of a cub meal"}},
]


def _slots(**amounts):
    return [{"item_feature": {"name": name}, "amount": amount} for name, amount in amounts.items()]


SELLABLES = [
    {"name": "Bowl", "price": Decimal("8.30"), "sellable_categories": _features("Meal"), "sellable_components": _slots(Side=2, Entree=1)},
    {"name": "Plate", "price": Decimal("9.80"), "sellable_categories": _features("Meal"), "sellable_components": _slots(Side=2, Entree=2)},
    {"name": "Bigger Plate", "price": Decimal("11.30"), "sellable_categories": _features("Meal"), "sellable_components": _slots(Side=2, Entree=3)},
    {
        "name": "Kids Meal",
        "price": Decimal("6.60"),
        "sellable_categories": _features("Kids Meal"),
        "sellable_components": _slots(Side=2, Entree=1, Appetizer=1, Drink=1),
    },
    {"name": "Family Meal", "price": Decimal("43.00"), "sellable_categories": _features("Meal"), "sellable_components": _slots(Side=6, Entree=9)},
    {"name": "Appetizer", "price": Decimal("2.00"), "sellable_categories": _features("Appetizer"), "sellable_components": _slots(Appetizer=1)},
    {"name": "Drink", "price": Decimal("2.10"), "sellable_categories": _features("Drink"), "sellable_components": _slots(Drink=1)},
    {"name": "Small A La Carte Entree", "price": Decimal("5.20"), "sellable_categories": _features("A la Carte"), "sellable_components": _slots(Entree=1)},
]


def _random_orders(db: Session, count: int, rng: random.Random) -> list[dict]:
    """Orders over the last 30 days, each filling every slot of one sellable."""
    items_by_feature = {}
    for item in db.query(Item).filter(Item.live()).all():
        for feature in item.item_features:
            items_by_feature.setdefault(feature.id, []).append(item.id)

    sellables = db.query(Sellable).filter(Sellable.live()).all()
    now = datetime.now(timezone.utc)

    orders = []
    for _ in range(count):
        sellable = rng.choice(sellables)
        sold_items = [
            {"item_id": rng.choice(items_by_feature[component.item_feature_id]), "amount": 1}
            for component in sellable.sellable_components
            for _ in range(component.amount)
            if items_by_feature.get(component.item_feature_id)
        ]
        orders.append(
            {
                "customer_name": rng.choice(["Alex", "Sam", "Jordan", "Riley", "Casey", "Morgan"]),
                "order_date": now - timedelta(minutes=rng.randint(0, 30 * 24 * 60)),
                "employee": {"name": rng.choice(EMPLOYEES)["name"]},
                "order_status": rng.choice(list(OrderStatus)),
                "sold_sellables": [{"sellable_id": sellable.id, "sold_items": sold_items}],
            }
        )
    return orders


def populate(db: Session, order_count: int = 200, seed: int = 0):
    rng = random.Random(seed)

    with transaction(db):
        db.add_all(JobPosition(name=p["name"], access=int(p["access"])) for p in JOB_POSITIONS)
        db.add_all(ItemFeature(name=n, importance=i, is_primary=p) for n, i, p in ITEM_FEATURES)
        db.flush()

        bulk_create_employees(db, EMPLOYEES)
        bulk_create_items(db, [{"additional_price": Decimal("0.00"), "inventory_item": _stock(), **item} for item in ITEMS])
        bulk_create_sellable_categories(db, SELLABLE_CATEGORIES)
        bulk_create_sellables(db, SELLABLES)

    with transaction(db):
        bulk_create_orders(db, _random_orders(db, order_count, rng))

    logger.info(f"Seeded {len(MODELS)} tables with {order_count} orders")


def main():
    parser = argparse.ArgumentParser(description="Populate the POS database with demo data")
    parser.add_argument("--reset", action="store_true", help="drop and recreate every table first")
    parser.add_argument("--orders", type=int, default=200, help="number of random orders")
    parser.add_argument("--seed", type=int, default=0, help="random seed")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")

    if args.reset:
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        populate(db, args.orders, args.seed)
    finally:
        db.close()


if __name__ == "__main__":
    main()
