from datetime import date
from decimal import Decimal

import pytest

from pos_api.core.errors import ValidationFailure
from pos_api.database import transaction
from pos_api.models.inventory import InventoryItem
from pos_api.models.items import Item
from pos_api.models.job_positions import AccessFlag, JobPosition


def _item(**overrides):
    values = {"name": "Egg Roll", "additional_price": Decimal("0"), "calories": 200}
    values.update(overrides)
    return Item(**values)


def test_item_with_only_seasonal_start_is_rejected(db):
    with pytest.raises(ValidationFailure, match="both null or both not null"):
        with transaction(db):
            db.add(_item(seasonal_start=date(2026, 11, 1)))

    assert db.query(Item).count() == 0


def test_item_with_start_after_end_is_rejected(db):
    with pytest.raises(ValidationFailure, match="Seasonal start must be before seasonal end"):
        with transaction(db):
            db.add(_item(seasonal_start=date(2026, 12, 31), seasonal_end=date(2026, 11, 1)))


def test_item_seasonal_dates_both_set_or_both_unset(db):
    with transaction(db):
        db.add(_item())
        db.add(_item(name="Peppermint Cookie", seasonal_start=date(2026, 11, 1), seasonal_end=date(2026, 12, 31)))

    assert db.query(Item).count() == 2


def test_item_update_is_validated(db):
    with transaction(db):
        item = _item(seasonal_start=date(2026, 11, 1), seasonal_end=date(2026, 12, 31))
        db.add(item)

    db.refresh(item)
    with pytest.raises(ValidationFailure):
        with transaction(db):
            item.seasonal_end = None


def test_inventory_min_above_max_is_rejected(db):
    with pytest.raises(ValidationFailure, match="Min stock must be less than max stock"):
        with transaction(db):
            db.add(InventoryItem(name="Noodles", servings_per_stock=10, current_stock=5, min_stock=10, max_stock=5))


def test_inventory_min_below_max_is_accepted(db):
    with transaction(db):
        db.add(InventoryItem(name="Noodles", servings_per_stock=10, current_stock=5, min_stock=5, max_stock=10))

    assert db.query(InventoryItem).one().max_stock == 10


def test_negative_calories_are_rejected(db):
    with pytest.raises(ValidationFailure, match="Calories cannot be negative"):
        with transaction(db):
            db.add(_item(calories=-1))


def test_job_position_access_flags():
    cashier = JobPosition(name="Employee", access=int(AccessFlag.BASIC_ORDERING))

    assert cashier.has_access(AccessFlag.WRITE_ORDERS)
    assert cashier.has_access(AccessFlag.READ_MENU)
    assert not cashier.has_access(AccessFlag.WRITE_EMPLOYEES)
    assert cashier.permissions == ["READ_INVENTORY", "READ_ORDERS", "READ_MENU", "WRITE_ORDERS"]

    assert JobPosition(name="Manager", access=int(AccessFlag.ALL)).has_access(AccessFlag.WRITE_ALL)
    assert not JobPosition(name="Guest", access=0).permissions
