"""
models/category_summary.py — per-category deduction summary of a certificate.

Table: category_summaries
One row per (certificate_id, category). Rewritten on every Save of that
category, in the same transaction as its work_items.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import BigInteger, Boolean, DateTime, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from reformcert.database import Base
from reformcert.models.types import JSONDocument


class CategorySummaryORM(Base):
    """
    Summary of one category's calculation for one certificate.

    result_data: the full CategoryDeductionResult, works included. The money
                 columns are denormalized copies for querying without parsing JSON.
    """
    __tablename__ = "category_summaries"
    __table_args__ = (
        UniqueConstraint("certificate_id", "category", name="uq_category_summaries_certificate_category"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    certificate_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
        comment="Opaque certificate identifier owned by the certificate service",
    )
    category: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="Category enum value, e.g. 'energy'",
    )
    total_cost: Mapped[int] = mapped_column(BigInteger, nullable=False)
    subsidy_amount: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    deductible_amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    max_deduction: Mapped[int] = mapped_column(BigInteger, nullable=False)
    has_solar_power: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
        comment="Cap-relevant flag actually applied",
    )
    is_excellent_housing: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
        comment="Long-term housing AND-mode flag actually applied",
    )
    result_data: Mapped[dict] = mapped_column(
        JSONDocument,
        nullable=False,
        comment="Full CategoryDeductionResult serialized as JSON",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
