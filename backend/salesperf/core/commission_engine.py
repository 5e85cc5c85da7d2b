"""Monthly commission engine.

For one salesperson and one calendar month:

    base_commission  = total_sales × base_rate
    tier_bonus       = tier rate × total_sales (whole month, exclusive thresholds)
    total_commission = base_commission × regional_multiplier
                       + tier_bonus + streak_bonus − performance_penalty

When the salesperson changed region inside the month, the first term is
replaced by the sum of the prorated segment commissions. The total is
clamped at zero. Nothing is cached: every call re-reads the stores.
"""

from __future__ import annotations

import logging
import uuid
from datetime import timezone, tzinfo
from decimal import Decimal

from salesperf.core.calendar import month_window
from salesperf.core.commission_policy import DEFAULT_POLICY, CommissionPolicy, tier_bonus
from salesperf.core.errors import UserNotFound
from salesperf.core.monthly_sales import fetch_month_sales, total_amount
from salesperf.core.performance_penalty import PerformancePenaltyEvaluator
from salesperf.core.region_transfer import RegionTransferProrator
from salesperf.core.results import CommissionResult, YearlyCommissionSummary
from salesperf.core.streak import StreakEvaluator
from salesperf.core.stores import SaleStore, TargetStore, UserDirectory

logger = logging.getLogger("salesperf")


class CommissionEngine:
    """Computes a CommissionResult per (user, month, year).

    Usage:
        engine = CommissionEngine(users, sales, targets, tz=settings.business_tz)
        result = await engine.calculate_commission(user_id, 12, 2024)
    """

    def __init__(
        self,
        users: UserDirectory,
        sales: SaleStore,
        targets: TargetStore,
        policy: CommissionPolicy = DEFAULT_POLICY,
        tz: tzinfo = timezone.utc,
    ) -> None:
        self._users = users
        self._sales = sales
        self._targets = targets
        self._policy = policy
        self._tz = tz

        self._streak = StreakEvaluator(sales, targets, policy=policy, tz=tz)
        self._penalty = PerformancePenaltyEvaluator(sales, targets, policy=policy, tz=tz)
        self._prorator = RegionTransferProrator(policy=policy, tz=tz)

    @property
    def policy(self) -> CommissionPolicy:
        return self._policy

    async def calculate_commission(self, user_id: uuid.UUID, month: int, year: int) -> CommissionResult:
        user = await self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFound(user_id)

        target = await self._targets.find_one(user_id, month, year)
        target_amount = Decimal(target.target_amount) if target is not None else Decimal("0")

        month_sales = await fetch_month_sales(self._sales, user_id, month_window(month, year, self._tz))
        total_sales = total_amount(month_sales)

        base_commission = total_sales * self._policy.base_rate
        bonus = tier_bonus(total_sales, self._policy)
        multiplier = self._policy.multiplier_for(user.region)

        streak_bonus = await self._streak.streak_bonus(user_id, month, year)
        penalty = await self._penalty.performance_penalty(user_id, month, year)
        transfers = self._prorator.region_transfers(user, month, year, month_sales)

        if transfers:
            regional_commission = sum((seg.commission for seg in transfers), Decimal("0"))
        else:
            regional_commission = base_commission * multiplier

        total_commission = max(regional_commission + bonus + streak_bonus - penalty, Decimal("0"))

        result = CommissionResult(
            user_id=user_id,
            month=month,
            year=year,
            total_sales=total_sales,
            base_commission=base_commission,
            tier_bonus=bonus,
            regional_multiplier=multiplier,
            streak_bonus=streak_bonus,
            performance_penalty=penalty,
            total_commission=total_commission,
            target_hit=total_sales >= target_amount,
            target_amount=target_amount,
            has_target=target is not None,
            region_transfers=tuple(transfers),
        )
        logger.info(
            "Commission for user %s %s/%s: sales=%s total=%s",
            user_id, month, year, total_sales, total_commission,
        )
        return result

    async def yearly_summary(self, user_id: uuid.UUID, year: int) -> YearlyCommissionSummary:
        """
        All twelve months of a year plus totals.
        UserNotFound from the first month aborts the summary.
        """
        monthly = []
        for month in range(1, 13):
            monthly.append(await self.calculate_commission(user_id, month, year))

        yearly_total = sum((m.total_commission for m in monthly), Decimal("0"))
        yearly_sales = sum((m.total_sales for m in monthly), Decimal("0"))

        return YearlyCommissionSummary(
            user_id=user_id,
            year=year,
            monthly_commissions=tuple(monthly),
            yearly_total=yearly_total,
            yearly_sales=yearly_sales,
            months_hit_target=sum(1 for m in monthly if m.target_hit),
            average_monthly_commission=yearly_total / len(monthly),
        )
