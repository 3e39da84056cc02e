# pos_api/models/inventory.py

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, event
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from pos_api.core.errors import ValidationFailure
from pos_api.database import Base
from pos_api.models.mixins import SoftDeleteMixin


class InventoryItem(SoftDeleteMixin, Base):
    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    servings_per_stock = Column(Integer, nullable=False)
    current_stock = Column(Integer, nullable=False)
    min_stock = Column(Integer, nullable=False)
    max_stock = Column(Integer, nullable=False)

    thumbnail_id = Column(Integer, ForeignKey("thumbnails.id", ondelete="SET NULL"), nullable=True)

    item = relationship("Item", back_populates="inventory_item", uselist=False, passive_deletes="all")
    inventory_histories = relationship(
        "InventoryHistory",
        back_populates="inventory_item",
        order_by="InventoryHistory.timestamp",
    )
    thumbnail = relationship("Thumbnail")

    __table_args__ = (
        CheckConstraint("name <> ''", name="ck_inventory_item_name_not_empty"),
        CheckConstraint("servings_per_stock >= 0", name="ck_servings_per_stock_non_negative"),
        CheckConstraint("current_stock >= 0", name="ck_current_stock_non_negative"),
        CheckConstraint("min_stock >= 0", name="ck_min_stock_non_negative"),
        CheckConstraint("max_stock >= 0", name="ck_max_stock_non_negative"),
        CheckConstraint("min_stock <= max_stock", name="ck_min_max_stock"),
    )

    def validate(self):
        for field in ("servings_per_stock", "current_stock", "min_stock", "max_stock"):
            value = getattr(self, field)
            if value is not None and value < 0:
                raise ValidationFailure(f"{field} cannot be negative")

        if self.min_stock is not None and self.max_stock is not None:
            if self.min_stock > self.max_stock:
                raise ValidationFailure("Min stock must be less than max stock")


class InventoryHistory(Base):
    __tablename__ = "inventory_history"

    id = Column(Integer, primary_key=True, index=True)
    stock_amount = Column(Integer, nullable=False)
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    inventory_item_id = Column(
        Integer,
        ForeignKey("inventory_items.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    inventory_item = relationship("InventoryItem", back_populates="inventory_histories")

    __table_args__ = (
        CheckConstraint("stock_amount >= 0", name="ck_stock_amount_non_negative"),
    )


@event.listens_for(InventoryItem, "before_insert")
@event.listens_for(InventoryItem, "before_update")
def _validate_inventory_item(mapper, connection, target):
    target.validate()
