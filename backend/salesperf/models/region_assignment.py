# backend/salesperf/models/region_assignment.py
from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from salesperf.db.base import Base

if TYPE_CHECKING:
    from salesperf.models.user import User


class RegionAssignment(Base):
    """
    One entry of a salesperson's region history.
    The assignment is in effect from effective_from until the next entry.
    """

    __tablename__ = "region_assignments"
    __table_args__ = (
        Index("ix_region_assignments_user_effective", "user_id", "effective_from"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    region: Mapped[str] = mapped_column(String(10), nullable=False)
    effective_from: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    user: Mapped["User"] = relationship(back_populates="region_history")
