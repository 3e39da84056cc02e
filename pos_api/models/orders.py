# pos_api/models/orders.py

from enum import IntEnum

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from pos_api.database import Base


class OrderStatus(IntEnum):
    PENDING = 0  # submitted, waiting in the kitchen queue
    IN_PROGRESS = 1
    COMPLETED = 2  # ready for pickup
    CANCELLED = 3


TERMINAL_STATUSES = {OrderStatus.COMPLETED, OrderStatus.CANCELLED}


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    customer_name = Column(String, nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)

    order_date = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    employee_id = Column(
        Integer,
        ForeignKey("employees.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    employee = relationship("Employee", back_populates="orders")
    recent_order = relationship(
        "RecentOrder",
        back_populates="order",
        uselist=False,
        cascade="all, delete-orphan",
    )
    sold_sellables = relationship(
        "SoldSellable",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="SoldSellable.id",
    )

    __table_args__ = (
        CheckConstraint("customer_name <> ''", name="ck_order_customer_name_not_empty"),
    )


class RecentOrder(Base):
    __tablename__ = "recent_orders"

    id = Column(Integer, primary_key=True, index=True)
    order_status = Column(Integer, nullable=False, default=int(OrderStatus.PENDING))

    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    order_id = Column(
        Integer,
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    order = relationship("Order", back_populates="recent_order")

    __table_args__ = (
        Index("ix_recent_orders_status", "order_status"),
        CheckConstraint(
            "order_status IN (0, 1, 2, 3)",
            name="ck_recent_order_status_valid",
        ),
    )
