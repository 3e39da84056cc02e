# pos_api/models/sold_items.py

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer
from sqlalchemy.orm import relationship

from pos_api.database import Base


class SoldSellable(Base):
    __tablename__ = "sold_sellables"

    id = Column(Integer, primary_key=True, index=True)

    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    sellable_id = Column(Integer, ForeignKey("sellables.id"), nullable=True, index=True)

    order = relationship("Order", back_populates="sold_sellables")
    sellable = relationship("Sellable", back_populates="sold_sellables")
    sold_items = relationship(
        "SoldItem",
        back_populates="sold_sellable",
        cascade="all, delete-orphan",
        order_by="SoldItem.id",
    )


class SoldItem(Base):
    __tablename__ = "sold_items"

    id = Column(Integer, primary_key=True, index=True)
    amount = Column(Integer, nullable=False, default=1)

    item_id = Column(Integer, ForeignKey("items.id", ondelete="RESTRICT"), nullable=True, index=True)
    sold_sellable_id = Column(
        Integer,
        ForeignKey("sold_sellables.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    item = relationship("Item", back_populates="sold_items")
    sold_sellable = relationship("SoldSellable", back_populates="sold_items")

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_sold_item_amount_positive"),
    )
