# salesperf/schemas/sales.py
from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from salesperf.core.calendar import utcnow
from salesperf.core.config import settings
from salesperf.core.regions import ProductCategory


class SaleCreate(BaseModel):
    """
    Field-level validation for a sale. Existence and duplicate checks need the
    stores and happen later (BulkIngestionProcessor / the sales router).
    """

    user_id: UUID
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    date: datetime
    category: ProductCategory = Field(..., alias="product_category")
    commission_rate: Optional[Decimal] = Field(default=None, ge=0, le=20)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("date")
    @classmethod
    def _date_not_too_far_ahead(cls, v: datetime) -> datetime:
        # naive timestamps are read in the business timezone
        if v.tzinfo is None:
            v = v.replace(tzinfo=settings.business_tz)
        if v > utcnow() + timedelta(days=365):
            raise ValueError("Date cannot be more than 1 year in the future")
        return v


class SaleOut(BaseModel):
    id: UUID
    user_id: UUID
    amount: Decimal
    date: datetime
    category: str
    commission_rate: Decimal
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class BulkItemErrorOut(BaseModel):
    index: int
    error: str


class BulkValidationErrorOut(BaseModel):
    index: int
    errors: List[Dict[str, Any]] = Field(default_factory=list)


class BulkSalesOut(BaseModel):
    success: int
    errors: List[BulkItemErrorOut]
    validation_errors: List[BulkValidationErrorOut]
