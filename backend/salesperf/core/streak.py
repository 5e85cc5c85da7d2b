# salesperf/core/streak.py
from __future__ import annotations

import logging
import uuid
from datetime import timezone, tzinfo
from decimal import Decimal

from salesperf.core.calendar import month_window, previous_month
from salesperf.core.commission_policy import DEFAULT_POLICY, CommissionPolicy
from salesperf.core.monthly_sales import fetch_month_total
from salesperf.core.stores import SaleStore, TargetStore

logger = logging.getLogger("salesperf")


class StreakEvaluator:
    """
    Bonus for consecutive months (ending with the queried one) in which the
    salesperson met the target.

    Walks backward one month per step and stops at the first month without a
    target, the first missed target, or once the cap is reached.
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

    async def count_hits(self, user_id: uuid.UUID, month: int, year: int) -> int:
        hits = 0
        max_hits = self._policy.max_streak_months
        while hits < max_hits:
            target = await self._targets.find_one(user_id, month, year)
            if target is None:
                break

            total = await fetch_month_total(self._sales, user_id, month_window(month, year, self._tz))
            if total < Decimal(target.target_amount):
                break

            hits += 1
            month, year = previous_month(month, year)
        return hits

    async def streak_bonus(self, user_id: uuid.UUID, month: int, year: int) -> Decimal:
        hits = await self.count_hits(user_id, month, year)
        bonus = min(hits * self._policy.streak_bonus_per_month, self._policy.max_streak_bonus)
        logger.debug("Streak for user %s at %s/%s: %d month(s)", user_id, month, year, hits)
        return bonus
