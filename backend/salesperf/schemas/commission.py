# salesperf/schemas/commission.py
from __future__ import annotations

from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from salesperf.core.regions import Region


class RegionSegmentOut(BaseModel):
    region: Optional[Region] = None
    sales: Decimal
    days: int
    commission: Decimal

    model_config = ConfigDict(from_attributes=True)


class CommissionOut(BaseModel):
    user_id: UUID
    month: int
    year: int

    total_sales: Decimal
    base_commission: Decimal
    tier_bonus: Decimal
    regional_multiplier: Decimal
    streak_bonus: Decimal
    performance_penalty: Decimal
    total_commission: Decimal

    target_hit: bool
    target_amount: Decimal
    has_target: bool

    # omitted (null) when the month had no region transfer
    region_transfers: Optional[List[RegionSegmentOut]] = None

    model_config = ConfigDict(from_attributes=True)


class YearlySummaryOut(BaseModel):
    user_id: UUID
    year: int
    monthly_commissions: List[CommissionOut] = Field(default_factory=list)
    yearly_total: Decimal
    yearly_sales: Decimal
    months_hit_target: int
    average_monthly_commission: Decimal
