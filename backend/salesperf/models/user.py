# backend/salesperf/models/user.py
from __future__ import annotations

import re
import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from salesperf.db.base import Base

if TYPE_CHECKING:
    from salesperf.models.region_assignment import RegionAssignment

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class User(Base):
    """
    A salesperson.

    region / region_start_date describe the CURRENT assignment.
    region_history keeps every assignment (oldest first) so a month that
    straddles a transfer can be prorated against the previous region.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)

    # north | south | east | west
    region: Mapped[str] = mapped_column(String(10), nullable=False)
    region_start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    hire_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # active | inactive
    status: Mapped[str] = mapped_column(String(10), nullable=False, default="active")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # selectin: async sessions cannot lazy-load on attribute access
    region_history: Mapped[list["RegionAssignment"]] = relationship(
        back_populates="user",
        order_by="RegionAssignment.effective_from",
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    @staticmethod
    def normalize_name(value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        v = " ".join(value.strip().split())
        return v or None

    @staticmethod
    def normalize_email(value: str) -> str:
        v = value.strip().lower()
        if not _EMAIL_RE.match(v):
            raise ValueError("Email format is invalid")
        return v
