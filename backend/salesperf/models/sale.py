# backend/salesperf/models/sale.py
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Index, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from salesperf.db.base import Base

DEFAULT_COMMISSION_RATE = Decimal("5")


class Sale(Base):
    """
    A single sale record.

    commission_rate (0..20, percent) is carried with the record but the
    monthly commission engine uses its own policy rates.
    """

    __tablename__ = "sales"
    __table_args__ = (
        Index("ix_sales_user_date", "user_id", "date"),
        # duplicate lookup during bulk ingestion
        Index("ix_sales_user_amount_date_category", "user_id", "amount", "date", "category"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # software | hardware | consulting | support
    category: Mapped[str] = mapped_column(String(20), nullable=False)

    commission_rate: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), nullable=False, default=DEFAULT_COMMISSION_RATE, server_default="5"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
