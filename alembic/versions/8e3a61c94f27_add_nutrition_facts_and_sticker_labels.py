"""add nutrition_facts and sticker_labels, unique anonymous configuration

Revision ID: 8e3a61c94f27
Revises: 5b1f0c2d7a41
Create Date: 2026-10-18 14:05:41.302917

Idempotent like the base revision: tables and indexes that
Base.metadata.create_all() already built are skipped.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '8e3a61c94f27'
down_revision: Union[str, None] = '5b1f0c2d7a41'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ANONYMOUS_INDEX = "uq_configuration_product_anonymous"


def _table_exists(table_name):
    """Check if a table exists."""
    bind = op.get_bind()
    insp = inspect(bind)
    return table_name in insp.get_table_names()


def _index_exists(table_name, index_name):
    bind = op.get_bind()
    insp = inspect(bind)
    return index_name in [ix["name"] for ix in insp.get_indexes(table_name)]


def upgrade() -> None:
    if not _table_exists("nutrition_facts"):
        nutrient_columns = [
            "calories",
            "total_fat_g", "total_fat_dv", "saturated_fat_g", "saturated_fat_dv", "trans_fat_g",
            "cholesterol_mg", "cholesterol_dv", "sodium_mg", "sodium_dv",
            "total_carbohydrate_g", "total_carbohydrate_dv", "dietary_fiber_g", "dietary_fiber_dv",
            "total_sugars_g", "added_sugars_g", "added_sugars_dv", "protein_g",
            "vitamin_d_mcg", "vitamin_d_dv", "calcium_mg", "calcium_dv",
            "iron_mg", "iron_dv", "potassium_mg", "potassium_dv",
        ]
        op.create_table(
            "nutrition_facts",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("product_id", sa.Integer(), nullable=True),
            sa.Column("user_id", sa.String(), nullable=True),
            sa.Column("label_name", sa.String(), nullable=False),
            sa.Column("serving_size", sa.String(), nullable=True),
            sa.Column("serving_size_metric", sa.String(), nullable=True),
            sa.Column("servings_per_container", sa.String(), nullable=True),
            *[sa.Column(name, sa.Float(), nullable=True) for name in nutrient_columns],
            sa.Column("is_bilingual", sa.Boolean(), nullable=True),
            sa.Column("language_primary", sa.String(), nullable=True),
            sa.Column("language_secondary", sa.String(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(["product_id"], ["products.product_id"]),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_nutrition_facts_id", "nutrition_facts", ["id"])

    if not _table_exists("sticker_labels"):
        text_columns = [
            ("label_size", sa.String()),
            ("company_logo_url", sa.String()),
            ("made_in_mexico_logo_url", sa.String()),
            ("elaborated_by", sa.Text()),
            ("distributed_by", sa.Text()),
            ("product_name_override", sa.String()),
            ("product_flavor_override", sa.String()),
            ("product_flavor_image_override", sa.String()),
            ("product_color_dark_override", sa.String()),
            ("product_color_light_override", sa.String()),
            ("product_net_weight_override", sa.String()),
            ("ingredients", sa.Text()),
            ("how_to_serve_instructions", sa.Text()),
            ("barcode_image_url", sa.String()),
            ("qr_code_url", sa.String()),
        ]
        op.create_table(
            "sticker_labels",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("user_id", sa.String(), nullable=False),
            sa.Column("product_id", sa.Integer(), nullable=False),
            sa.Column("nutrition_facts_id", sa.Integer(), nullable=True),
            sa.Column("label_name", sa.String(), nullable=False),
            *[sa.Column(name, col_type, nullable=True) for name, col_type in text_columns],
            sa.Column("language_setting", sa.Integer(), nullable=True),
            sa.Column("layout_config", sa.JSON(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(["product_id"], ["products.product_id"]),
            sa.ForeignKeyConstraint(["nutrition_facts_id"], ["nutrition_facts.id"]),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("user_id", "product_id", name="uq_sticker_label_user_product"),
        )
        op.create_index("ix_sticker_labels_id", "sticker_labels", ["id"])

    if not _index_exists("packaging_configurations", ANONYMOUS_INDEX):
        op.create_index(
            ANONYMOUS_INDEX, "packaging_configurations", ["product_id"], unique=True,
            sqlite_where=sa.text("user_id IS NULL"),
            postgresql_where=sa.text("user_id IS NULL"),
        )


def downgrade() -> None:
    if _index_exists("packaging_configurations", ANONYMOUS_INDEX):
        op.drop_index(ANONYMOUS_INDEX, table_name="packaging_configurations")
    if _table_exists("sticker_labels"):
        op.drop_table("sticker_labels")
    if _table_exists("nutrition_facts"):
        op.drop_table("nutrition_facts")
