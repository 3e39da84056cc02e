# pos_api/models/sellables.py

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String, Table
from sqlalchemy.orm import relationship

from pos_api.database import Base
from pos_api.models.mixins import SoftDeleteMixin


sellable_category_links = Table(
    "sellable_category_links",
    Base.metadata,
    Column(
        "sellable_id",
        Integer,
        ForeignKey("sellables.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "sellable_category_id",
        Integer,
        ForeignKey("sellable_categories.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class SellableCategory(Base):
    __tablename__ = "sellable_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    importance = Column(Integer, nullable=False)

    thumbnail_id = Column(Integer, ForeignKey("thumbnails.id", ondelete="SET NULL"), nullable=True)

    sellables = relationship(
        "Sellable",
        secondary=sellable_category_links,
        back_populates="sellable_categories",
    )
    thumbnail = relationship("Thumbnail")

    __table_args__ = (
        CheckConstraint("name <> ''", name="ck_sellable_category_name_not_empty"),
    )


class Sellable(SoftDeleteMixin, Base):
    __tablename__ = "sellables"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)

    thumbnail_id = Column(Integer, ForeignKey("thumbnails.id", ondelete="SET NULL"), nullable=True)

    sellable_components = relationship(
        "SellableComponent",
        back_populates="sellable",
        cascade="all, delete-orphan",
    )
    sellable_categories = relationship(
        "SellableCategory",
        secondary=sellable_category_links,
        back_populates="sellables",
        order_by="SellableCategory.importance",
    )
    sold_sellables = relationship("SoldSellable", back_populates="sellable")
    thumbnail = relationship("Thumbnail")

    __table_args__ = (
        CheckConstraint("name <> ''", name="ck_sellable_name_not_empty"),
    )


class SellableComponent(Base):
    __tablename__ = "sellable_components"

    id = Column(Integer, primary_key=True, index=True)
    amount = Column(Integer, nullable=False, default=1)

    item_feature_id = Column(
        Integer,
        ForeignKey("item_features.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    sellable_id = Column(
        Integer,
        ForeignKey("sellables.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    item_feature = relationship("ItemFeature", back_populates="sellable_components")
    sellable = relationship("Sellable", back_populates="sellable_components")

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_sellable_component_amount_positive"),
    )
