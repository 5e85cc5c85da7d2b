# salesperf/core/results.py
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from salesperf.core.regions import Region


@dataclass(frozen=True)
class RegionSegment:
    # None when the region before a transfer was never recorded
    region: Optional[Region]
    sales: Decimal
    days: int
    commission: Decimal


@dataclass(frozen=True)
class CommissionResult:
    user_id: uuid.UUID
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

    region_transfers: tuple[RegionSegment, ...] = ()


@dataclass(frozen=True)
class YearlyCommissionSummary:
    user_id: uuid.UUID
    year: int
    monthly_commissions: tuple[CommissionResult, ...]
    yearly_total: Decimal
    yearly_sales: Decimal
    months_hit_target: int
    average_monthly_commission: Decimal


@dataclass(frozen=True)
class BulkItemError:
    index: int
    error: str


@dataclass
class BulkIngestionResult:
    success_count: int = 0
    errors: list[BulkItemError] = field(default_factory=list)
