"""create_pos_schema

Revision ID: 5b1f0c2a9d41
Revises:
Create Date: 2026-10-19 10:12:44.318204
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1f0c2a9d41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id():
    return sa.Column("id", sa.Integer(), primary_key=True)


def _thumbnail_id():
    return sa.Column(
        "thumbnail_id",
        sa.Integer(),
        sa.ForeignKey("thumbnails.id", ondelete="SET NULL"),
        nullable=True,
    )


def _deleted_at():
    return sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True)


def upgrade() -> None:
    """Upgrade schema."""

    # THUMBNAILS
    op.create_table(
        "thumbnails",
        _id(),
        sa.Column("src", sa.String(), nullable=False),
        sa.Column("alt", sa.String(), nullable=False),
        sa.CheckConstraint("src <> ''", name="ck_thumbnail_src_not_empty"),
        sa.CheckConstraint("alt <> ''", name="ck_thumbnail_alt_not_empty"),
    )

    # STAFF
    op.create_table(
        "job_positions",
        _id(),
        sa.Column("name", sa.String(), nullable=False, unique=True),
        sa.Column("access", sa.Integer(), nullable=False, server_default="0"),
    )

    op.create_table(
        "employees",
        _id(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("start_date", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column(
            "job_position_id",
            sa.Integer(),
            sa.ForeignKey("job_positions.id", ondelete="RESTRICT"),
            nullable=True,
        ),
        _thumbnail_id(),
        _deleted_at(),
        sa.CheckConstraint("name <> ''", name="ck_employee_name_not_empty"),
    )
    op.create_index("ix_employees_email", "employees", ["email"], unique=True)
    op.create_index("ix_employees_job_position_id", "employees", ["job_position_id"])
    op.create_index("ix_employees_deleted_at", "employees", ["deleted_at"])

    # INVENTORY
    op.create_table(
        "inventory_items",
        _id(),
        sa.Column("name", sa.String(), nullable=False, unique=True),
        sa.Column("servings_per_stock", sa.Integer(), nullable=False),
        sa.Column("current_stock", sa.Integer(), nullable=False),
        sa.Column("min_stock", sa.Integer(), nullable=False),
        sa.Column("max_stock", sa.Integer(), nullable=False),
        _thumbnail_id(),
        _deleted_at(),
        sa.CheckConstraint("name <> ''", name="ck_inventory_item_name_not_empty"),
        sa.CheckConstraint("servings_per_stock >= 0", name="ck_servings_per_stock_non_negative"),
        sa.CheckConstraint("current_stock >= 0", name="ck_current_stock_non_negative"),
        sa.CheckConstraint("min_stock >= 0", name="ck_min_stock_non_negative"),
        sa.CheckConstraint("max_stock >= 0", name="ck_max_stock_non_negative"),
        sa.CheckConstraint("min_stock <= max_stock", name="ck_min_max_stock"),
    )
    op.create_index("ix_inventory_items_deleted_at", "inventory_items", ["deleted_at"])

    op.create_table(
        "inventory_history",
        _id(),
        sa.Column("stock_amount", sa.Integer(), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column(
            "inventory_item_id",
            sa.Integer(),
            sa.ForeignKey("inventory_items.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.CheckConstraint("stock_amount >= 0", name="ck_stock_amount_non_negative"),
    )
    op.create_index("ix_inventory_history_inventory_item_id", "inventory_history", ["inventory_item_id"])

    # ITEMS
    op.create_table(
        "item_features",
        _id(),
        sa.Column("name", sa.String(), nullable=False, unique=True),
        sa.Column("importance", sa.Integer(), nullable=False),
        sa.Column("is_primary", sa.Boolean(), nullable=True),
        _thumbnail_id(),
        sa.CheckConstraint("name <> ''", name="ck_item_feature_name_not_empty"),
    )

    op.create_table(
        "items",
        _id(),
        sa.Column("name", sa.String(), nullable=False, unique=True),
        sa.Column("additional_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("calories", sa.Integer(), nullable=False),
        sa.Column("seasonal_start", sa.Date(), nullable=True),
        sa.Column("seasonal_end", sa.Date(), nullable=True),
        sa.Column(
            "inventory_item_id",
            sa.Integer(),
            sa.ForeignKey("inventory_items.id", ondelete="RESTRICT"),
            nullable=True,
        ),
        _thumbnail_id(),
        _deleted_at(),
        sa.CheckConstraint("name <> ''", name="ck_item_name_not_empty"),
        sa.CheckConstraint("calories >= 0", name="ck_item_calories_non_negative"),
        sa.CheckConstraint(
            "(seasonal_start IS NULL) = (seasonal_end IS NULL)",
            name="ck_item_seasonal_fully_formed",
        ),
        sa.CheckConstraint(
            "seasonal_start IS NULL OR seasonal_start <= seasonal_end",
            name="ck_item_seasonal_range",
        ),
    )
    op.create_index("ix_items_inventory_item_id", "items", ["inventory_item_id"])
    op.create_index("ix_items_deleted_at", "items", ["deleted_at"])

    op.create_table(
        "item_feature_links",
        sa.Column("item_id", sa.Integer(), sa.ForeignKey("items.id", ondelete="CASCADE"), primary_key=True),
        sa.Column(
            "item_feature_id",
            sa.Integer(),
            sa.ForeignKey("item_features.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    # MENU
    op.create_table(
        "sellable_categories",
        _id(),
        sa.Column("name", sa.String(), nullable=False, unique=True),
        sa.Column("importance", sa.Integer(), nullable=False),
        _thumbnail_id(),
        sa.CheckConstraint("name <> ''", name="ck_sellable_category_name_not_empty"),
    )

    op.create_table(
        "sellables",
        _id(),
        sa.Column("name", sa.String(), nullable=False, unique=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        _thumbnail_id(),
        _deleted_at(),
        sa.CheckConstraint("name <> ''", name="ck_sellable_name_not_empty"),
    )
    op.create_index("ix_sellables_deleted_at", "sellables", ["deleted_at"])

    op.create_table(
        "sellable_category_links",
        sa.Column(
            "sellable_id",
            sa.Integer(),
            sa.ForeignKey("sellables.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "sellable_category_id",
            sa.Integer(),
            sa.ForeignKey("sellable_categories.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    op.create_table(
        "sellable_components",
        _id(),
        sa.Column("amount", sa.Integer(), nullable=False, server_default="1"),
        sa.Column(
            "item_feature_id",
            sa.Integer(),
            sa.ForeignKey("item_features.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "sellable_id",
            sa.Integer(),
            sa.ForeignKey("sellables.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.CheckConstraint("amount > 0", name="ck_sellable_component_amount_positive"),
    )
    op.create_index("ix_sellable_components_item_feature_id", "sellable_components", ["item_feature_id"])
    op.create_index("ix_sellable_components_sellable_id", "sellable_components", ["sellable_id"])

    # ORDERS
    op.create_table(
        "orders",
        _id(),
        sa.Column("customer_name", sa.String(), nullable=False),
        sa.Column("total_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("order_date", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column(
            "employee_id",
            sa.Integer(),
            sa.ForeignKey("employees.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.CheckConstraint("customer_name <> ''", name="ck_order_customer_name_not_empty"),
    )
    op.create_index("ix_orders_order_date", "orders", ["order_date"])
    op.create_index("ix_orders_employee_id", "orders", ["employee_id"])

    op.create_table(
        "recent_orders",
        _id(),
        sa.Column("order_status", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column(
            "order_id",
            sa.Integer(),
            sa.ForeignKey("orders.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.CheckConstraint("order_status IN (0, 1, 2, 3)", name="ck_recent_order_status_valid"),
    )
    op.create_index("ix_recent_orders_status", "recent_orders", ["order_status"])

    op.create_table(
        "sold_sellables",
        _id(),
        sa.Column(
            "order_id",
            sa.Integer(),
            sa.ForeignKey("orders.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("sellable_id", sa.Integer(), sa.ForeignKey("sellables.id"), nullable=True),
    )
    op.create_index("ix_sold_sellables_order_id", "sold_sellables", ["order_id"])
    op.create_index("ix_sold_sellables_sellable_id", "sold_sellables", ["sellable_id"])

    op.create_table(
        "sold_items",
        _id(),
        sa.Column("amount", sa.Integer(), nullable=False, server_default="1"),
        sa.Column(
            "item_id",
            sa.Integer(),
            sa.ForeignKey("items.id", ondelete="RESTRICT"),
            nullable=True,
        ),
        sa.Column(
            "sold_sellable_id",
            sa.Integer(),
            sa.ForeignKey("sold_sellables.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.CheckConstraint("amount > 0", name="ck_sold_item_amount_positive"),
    )
    op.create_index("ix_sold_items_item_id", "sold_items", ["item_id"])
    op.create_index("ix_sold_items_sold_sellable_id", "sold_items", ["sold_sellable_id"])


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_table("sold_items")
    op.drop_table("sold_sellables")
    op.drop_table("recent_orders")
    op.drop_table("orders")
    op.drop_table("sellable_components")
    op.drop_table("sellable_category_links")
    op.drop_table("sellables")
    op.drop_table("sellable_categories")
    op.drop_table("item_feature_links")
    op.drop_table("items")
    op.drop_table("item_features")
    op.drop_table("inventory_history")
    op.drop_table("inventory_items")
    op.drop_table("employees")
    op.drop_table("job_positions")
    op.drop_table("thumbnails")
