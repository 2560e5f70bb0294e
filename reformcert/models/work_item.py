"""
models/work_item.py — one submitted work line of a certificate category.

Table: work_items
Replaced wholesale (delete-then-recreate) on each Save of the category.
"""
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from reformcert.database import Base


class WorkItemORM(Base):
    __tablename__ = "work_items"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    certificate_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    position: Mapped[int] = mapped_column(
        Integer, nullable=False,
        comment="0-based order of the line in the submitted works array",
    )
    work_type_code: Mapped[str] = mapped_column(String(64), nullable=False)
    work_name: Mapped[str] = mapped_column(String(255), nullable=False)
    unit_price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    quantity: Mapped[float] = mapped_column(Float, nullable=False)
    resident_ratio: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    window_area_ratio: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    amount: Mapped[Optional[int]] = mapped_column(
        BigInteger, nullable=True,
        comment="Direct-entry amount, other renovation works only",
    )
    calculated_amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
