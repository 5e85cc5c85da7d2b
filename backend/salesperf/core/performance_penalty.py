# salesperf/core/performance_penalty.py
from __future__ import annotations

import uuid
from datetime import timezone, tzinfo
from decimal import Decimal

from salesperf.core.calendar import month_window, previous_month
from salesperf.core.commission_policy import DEFAULT_POLICY, CommissionPolicy
from salesperf.core.monthly_sales import fetch_month_total
from salesperf.core.stores import SaleStore, TargetStore


class PerformancePenaltyEvaluator:
    """
    Penalty when the immediately preceding month closed below half its target.
    A missing or zero target means no penalty.
    """

    def __init__(
        self,
        sales: SaleStore,
        targets: TargetStore,
        policy: CommissionPolicy = DEFAULT_POLICY,
        tz: tzinfo = timezone.utc,
    ) -> None:
        self._sales = sales
        self._targets = targets
        self._policy = policy
        self._tz = tz

    async def performance_penalty(self, user_id: uuid.UUID, month: int, year: int) -> Decimal:
        prev_month, prev_year = previous_month(month, year)

        target = await self._targets.find_one(user_id, prev_month, prev_year)
        if target is None:
            return Decimal("0")

        target_amount = Decimal(target.target_amount)
        if target_amount == 0:
            return Decimal("0")

        total = await fetch_month_total(self._sales, user_id, month_window(prev_month, prev_year, self._tz))
        if total / target_amount < self._policy.penalty_ratio_threshold:
            return self._policy.performance_penalty
        return Decimal("0")
