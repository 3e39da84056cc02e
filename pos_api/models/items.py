# pos_api/models/items.py

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Table,
    event,
)
from sqlalchemy.orm import relationship

from pos_api.core.errors import ValidationFailure
from pos_api.database import Base
from pos_api.models.mixins import SoftDeleteMixin


item_feature_links = Table(
    "item_feature_links",
    Base.metadata,
    Column("item_id", Integer, ForeignKey("items.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "item_feature_id",
        Integer,
        ForeignKey("item_features.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class ItemFeature(Base):
    __tablename__ = "item_features"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    importance = Column(Integer, nullable=False)
    is_primary = Column(Boolean, nullable=True, default=False)

    thumbnail_id = Column(Integer, ForeignKey("thumbnails.id", ondelete="SET NULL"), nullable=True)

    items = relationship("Item", secondary=item_feature_links, back_populates="item_features")
    sellable_components = relationship(
        "SellableComponent", back_populates="item_feature", passive_deletes="all"
    )
    thumbnail = relationship("Thumbnail")

    __table_args__ = (
        CheckConstraint("name <> ''", name="ck_item_feature_name_not_empty"),
    )


class Item(SoftDeleteMixin, Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    additional_price = Column(Numeric(10, 2), nullable=False)
    calories = Column(Integer, nullable=False)

    seasonal_start = Column(Date, nullable=True)
    seasonal_end = Column(Date, nullable=True)

    inventory_item_id = Column(
        Integer,
        ForeignKey("inventory_items.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    thumbnail_id = Column(Integer, ForeignKey("thumbnails.id", ondelete="SET NULL"), nullable=True)

    inventory_item = relationship("InventoryItem", back_populates="item")
    item_features = relationship(
        "ItemFeature",
        secondary=item_feature_links,
        back_populates="items",
        order_by="ItemFeature.importance",
    )
    sold_items = relationship("SoldItem", back_populates="item", passive_deletes="all")
    thumbnail = relationship("Thumbnail")

    __table_args__ = (
        CheckConstraint("name <> ''", name="ck_item_name_not_empty"),
        CheckConstraint("calories >= 0", name="ck_item_calories_non_negative"),
        CheckConstraint(
            "(seasonal_start IS NULL) = (seasonal_end IS NULL)",
            name="ck_item_seasonal_fully_formed",
        ),
        CheckConstraint(
            "seasonal_start IS NULL OR seasonal_start <= seasonal_end",
            name="ck_item_seasonal_range",
        ),
    )

    def validate(self):
        if self.calories is not None and self.calories < 0:
            raise ValidationFailure("Calories cannot be negative")

        if (self.seasonal_start is None) != (self.seasonal_end is None):
            raise ValidationFailure(
                "Seasonal start and end must be both null or both not null"
            )

        if self.seasonal_start and self.seasonal_end:
            if self.seasonal_start > self.seasonal_end:
                raise ValidationFailure("Seasonal start must be before seasonal end")


@event.listens_for(Item, "before_insert")
@event.listens_for(Item, "before_update")
def _validate_item(mapper, connection, target):
    target.validate()
