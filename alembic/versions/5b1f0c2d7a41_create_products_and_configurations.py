"""create products and packaging_configurations tables

Revision ID: 5b1f0c2d7a41
Revises:
Create Date: 2026-09-14 10:22:05.118734

Idempotent: databases first built by Base.metadata.create_all() already
have both tables and are left untouched.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '5b1f0c2d7a41'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _table_exists(table_name):
    """Check if a table exists."""
    bind = op.get_bind()
    insp = inspect(bind)
    return table_name in insp.get_table_names()


def upgrade() -> None:
    if not _table_exists("products"):
        op.create_table(
            "products",
            sa.Column("product_id", sa.Integer(), nullable=False),
            sa.Column("sku", sa.String(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("unit_of_measure", sa.String(), nullable=True),
            sa.Column("base_price", sa.Float(), nullable=True),
            sa.Column("barcode", sa.String(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint("product_id"),
            sa.UniqueConstraint("sku"),
        )
        op.create_index("ix_products_product_id", "products", ["product_id"])

    if not _table_exists("packaging_configurations"):
        input_columns = [
            ("product_width", sa.Float(), False),
            ("product_length", sa.Float(), False),
            ("product_height", sa.Float(), False),
            ("product_weight", sa.Float(), False),
            ("product_cost", sa.Float(), False),
            ("box_width", sa.Float(), True),
            ("box_length", sa.Float(), True),
            ("box_height", sa.Float(), True),
            ("box_weight", sa.Float(), True),
            ("box_cost", sa.Float(), True),
            ("pallet_width", sa.Float(), False),
            ("pallet_length", sa.Float(), False),
            ("pallet_max_height", sa.Float(), True),
            ("target_pallets", sa.Integer(), True),
            ("target_products", sa.Integer(), True),
            ("production_speed", sa.Float(), False),
            ("working_days", sa.Integer(), False),
            ("deadline", sa.Date(), True),
        ]
        result_columns = [
            ("units_per_box", sa.Integer()),
            ("boxes_per_pallet_layer", sa.Integer()),
            ("layers_per_pallet", sa.Integer()),
            ("total_units_per_pallet", sa.Integer()),
            ("total_boxes_needed", sa.Integer()),
            ("total_pallets_needed", sa.Integer()),
            ("weight_per_box", sa.Float()),
            ("weight_per_pallet_layer", sa.Float()),
            ("weight_per_pallet", sa.Float()),
            ("total_weight", sa.Float()),
            ("cost_per_box", sa.Float()),
            ("cost_per_pallet_layer", sa.Float()),
            ("cost_per_pallet", sa.Float()),
            ("total_cost", sa.Float()),
            ("estimated_days", sa.Float()),
            ("daily_production", sa.Float()),
            ("pallet_utilization", sa.Float()),
            ("box_utilization", sa.Float()),
        ]
        op.create_table(
            "packaging_configurations",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("product_id", sa.Integer(), nullable=False),
            sa.Column("user_id", sa.String(), nullable=True),
            sa.Column("configuration_name", sa.String(), nullable=False),
            sa.Column("notes", sa.Text(), nullable=True),
            *[sa.Column(name, col_type, nullable=nullable) for name, col_type, nullable in input_columns],
            *[sa.Column(name, col_type, nullable=True) for name, col_type in result_columns],
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(["product_id"], ["products.product_id"]),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("product_id", "user_id", name="uq_configuration_product_user"),
        )
        op.create_index("ix_packaging_configurations_id", "packaging_configurations", ["id"])


def downgrade() -> None:
    if _table_exists("packaging_configurations"):
        op.drop_table("packaging_configurations")
    if _table_exists("products"):
        op.drop_table("products")
