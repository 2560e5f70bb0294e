"""initial_schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19 00:00:00.000000 UTC

Creates category_summaries (one row per certificate per category) and
work_items (one row per submitted work line).
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "category_summaries",
        sa.Column("id", sa.String(36), nullable=False, comment="UUID row identifier"),
        sa.Column(
            "certificate_id", sa.String(64), nullable=False,
            comment="Opaque certificate identifier owned by the certificate service",
        ),
        sa.Column("category", sa.String(32), nullable=False, comment="Category enum value, e.g. 'energy'"),
        sa.Column("total_cost", sa.BigInteger(), nullable=False),
        sa.Column("subsidy_amount", sa.BigInteger(), nullable=False),
        sa.Column("deductible_amount", sa.BigInteger(), nullable=False),
        sa.Column("max_deduction", sa.BigInteger(), nullable=False),
        sa.Column(
            "has_solar_power", sa.Boolean(), nullable=False,
            comment="Cap-relevant flag actually applied",
        ),
        sa.Column(
            "is_excellent_housing", sa.Boolean(), nullable=False,
            comment="Long-term housing AND-mode flag actually applied",
        ),
        sa.Column(
            "result_data", sa.JSON().with_variant(postgresql.JSONB(), "postgresql"), nullable=False,
            comment="Full CategoryDeductionResult serialized as JSON",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("certificate_id", "category", name="uq_category_summaries_certificate_category"),
    )
    op.create_index(
        "ix_category_summaries_certificate_id",
        "category_summaries",
        ["certificate_id"],
        unique=False,
    )

    op.create_table(
        "work_items",
        sa.Column("id", sa.String(36), nullable=False, comment="UUID row identifier"),
        sa.Column("certificate_id", sa.String(64), nullable=False),
        sa.Column("category", sa.String(32), nullable=False),
        sa.Column(
            "position", sa.Integer(), nullable=False,
            comment="0-based order of the line in the submitted works array",
        ),
        sa.Column("work_type_code", sa.String(64), nullable=False),
        sa.Column("work_name", sa.String(255), nullable=False),
        sa.Column("unit_price", sa.BigInteger(), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("resident_ratio", sa.Float(), nullable=True),
        sa.Column("window_area_ratio", sa.Float(), nullable=True),
        sa.Column(
            "amount", sa.BigInteger(), nullable=True,
            comment="Direct-entry amount, other renovation works only",
        ),
        sa.Column("calculated_amount", sa.BigInteger(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_work_items_certificate_id",
        "work_items",
        ["certificate_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_work_items_certificate_id", table_name="work_items")
    op.drop_table("work_items")
    op.drop_index("ix_category_summaries_certificate_id", table_name="category_summaries")
    op.drop_table("category_summaries")
