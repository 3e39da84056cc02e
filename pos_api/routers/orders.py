# pos_api/routers/orders.py

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from pos_api.database import get_db, transaction
from pos_api.schemas.order import (
    OrderCreate,
    OrderResponse,
    OrderStatusUpdate,
    OrderUpdate,
    RecentOrderResponse,
)
from pos_api.services.orders import (
    bulk_create_orders,
    delete_order,
    kitchen_orders,
    list_orders,
    update_order,
    update_order_status,
)

router = APIRouter(prefix="/orders", tags=["Orders"])


# =========================================================
# CHECKOUT
# =========================================================
@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    order_data: OrderCreate,
    db: Session = Depends(get_db),
):
    with transaction(db):
        order = bulk_create_orders(db, [order_data.model_dump()])[0]
    return order


@router.post("/bulk", response_model=list[OrderResponse], status_code=status.HTTP_201_CREATED)
def create_orders(
    orders_data: list[OrderCreate],
    db: Session = Depends(get_db),
):
    with transaction(db):
        orders = bulk_create_orders(db, [o.model_dump() for o in orders_data])
    return orders


@router.get("", response_model=list[OrderResponse])
def get_orders(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    return list_orders(db, limit, offset)


# =========================================================
# KITCHEN QUEUE
# =========================================================
@router.get("/kitchen", response_model=list[OrderResponse])
def get_kitchen_orders(db: Session = Depends(get_db)):
    return kitchen_orders(db)


@router.patch("/{order_id}/status", response_model=RecentOrderResponse)
def set_order_status(
    order_id: int,
    status_data: OrderStatusUpdate,
    db: Session = Depends(get_db),
):
    with transaction(db):
        recent_order = update_order_status(db, order_id, status_data.order_status)
    return recent_order


@router.put("/{order_id}", response_model=OrderResponse)
def edit_order(
    order_id: int,
    order_data: OrderUpdate,
    db: Session = Depends(get_db),
):
    with transaction(db):
        order = update_order(db, order_id, order_data.model_dump(exclude_unset=True))
    return order


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_order(order_id: int, db: Session = Depends(get_db)):
    with transaction(db):
        delete_order(db, order_id)
