# pos_api/services/orders.py

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy.orm import Session, selectinload

from pos_api.core.errors import NotFoundError, ValidationFailure
from pos_api.models.employees import Employee
from pos_api.models.orders import TERMINAL_STATUSES, Order, OrderStatus, RecentOrder
from pos_api.models.sold_items import SoldItem, SoldSellable
from pos_api.services.cart import price_lines, resolve_entries
from pos_api.services.lookup import LookupCache, apply_changes, columns, get_live, resolve_reference


def _check_total(total_price) -> Decimal:
    total_price = Decimal(str(total_price))
    if total_price <= 0:
        raise ValidationFailure("Total price must be greater than 0")
    return total_price


def bulk_create_orders(db: Session, values: list[dict]) -> list[Order]:
    """Create orders with their recent-order rows, sold sellables and sold items.

    Every reference is resolved before anything is written. Orders without a
    ``total_price`` are priced from their sold sellables.
    """
    cache = LookupCache(db)

    employee_ids = [resolve_reference(cache, Employee, value, "employee_id", "employee") for value in values]
    resolved = [resolve_entries(cache, value.get("sold_sellables") or []) for value in values]

    totals = []
    for value, entries in zip(values, resolved):
        if value.get("total_price") is not None:
            totals.append(_check_total(value["total_price"]))
        else:
            lines = price_lines(db, entries)
            totals.append(_check_total(sum((line["price"] for line in lines), Decimal("0.00"))))

    orders = [
        Order(
            **columns(value, "customer_name", "order_date"),
            total_price=total_price,
            employee_id=employee_id,
        )
        for value, total_price, employee_id in zip(values, totals, employee_ids)
    ]
    db.add_all(orders)
    db.flush()

    db.add_all(
        RecentOrder(
            order_id=order.id,
            order_status=int(value.get("order_status") or OrderStatus.PENDING),
        )
        for order, value in zip(orders, values)
    )

    # flatten so all sold sellables go in together, keeping their entries alongside
    pending = [
        (SoldSellable(order_id=order.id, sellable_id=sellable_id), slots)
        for order, entries in zip(orders, resolved)
        for sellable_id, slots in entries
    ]
    db.add_all(sold_sellable for sold_sellable, _ in pending)
    db.flush()

    db.add_all(
        SoldItem(sold_sellable_id=sold_sellable.id, item_id=item_id, amount=amount)
        for sold_sellable, slots in pending
        for item_id, amount in slots
    )
    db.flush()
    return orders


def update_order(db: Session, order_id: int, changes: dict) -> Order:
    order = get_live(db, Order, order_id)

    if "employee_id" in changes or changes.get("employee") is not None:
        order.employee_id = resolve_reference(LookupCache(db), Employee, changes, "employee_id", "employee")

    if changes.get("total_price") is not None:
        changes = {**changes, "total_price": _check_total(changes["total_price"])}

    apply_changes(order, changes, "customer_name", "total_price", "order_date")
    db.flush()
    return order


def delete_order(db: Session, order_id: int):
    db.delete(get_live(db, Order, order_id))
    db.flush()


def update_order_status(db: Session, order_id: int, status: OrderStatus) -> RecentOrder:
    recent_order = db.query(RecentOrder).filter(RecentOrder.order_id == order_id).first()
    if recent_order is None:
        raise NotFoundError(f"Order {order_id} is not among the recent orders")

    current = OrderStatus(recent_order.order_status)
    if current in TERMINAL_STATUSES and status != current:
        raise ValidationFailure(f"Order {order_id} is {current.name} and cannot become {status.name}")

    recent_order.order_status = int(status)
    recent_order.updated_at = datetime.now(timezone.utc)
    db.flush()
    return recent_order


def _with_contents(query):
    return query.options(
        selectinload(Order.recent_order),
        selectinload(Order.sold_sellables).selectinload(SoldSellable.sellable),
        selectinload(Order.sold_sellables).selectinload(SoldSellable.sold_items).selectinload(SoldItem.item),
    )


def list_orders(db: Session, limit: int, offset: int) -> list[Order]:
    return (
        _with_contents(db.query(Order))
        .order_by(Order.order_date.desc(), Order.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


def kitchen_orders(db: Session) -> list[Order]:
    """Orders still being worked on, oldest first."""
    return (
        _with_contents(db.query(Order))
        .join(Order.recent_order)
        .filter(RecentOrder.order_status.in_([int(OrderStatus.PENDING), int(OrderStatus.IN_PROGRESS)]))
        .order_by(Order.order_date, Order.id)
        .all()
    )
