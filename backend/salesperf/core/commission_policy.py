# ============================
# FILE: salesperf/core/commission_policy.py
# Canonical commission rates for the sales performance service
# ============================
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping

from salesperf.core.regions import Region


@dataclass(frozen=True)
class TierRule:
    # sales must be strictly above threshold to unlock the rate
    threshold: Decimal
    rate: Decimal


_DEFAULT_MULTIPLIERS: Mapping[Region, Decimal] = MappingProxyType(
    {
        Region.NORTH: Decimal("1.10"),
        Region.SOUTH: Decimal("0.95"),
        Region.EAST: Decimal("1.00"),
        Region.WEST: Decimal("1.05"),
    }
)

# Highest threshold first.
_DEFAULT_TIERS: tuple[TierRule, ...] = (
    TierRule(threshold=Decimal("25000"), rate=Decimal("0.04")),
    TierRule(threshold=Decimal("10000"), rate=Decimal("0.02")),
)


@dataclass(frozen=True)
class CommissionPolicy:
    """
    Immutable rate schedule handed to the engine and its evaluators.

    Build an alternate schedule with dataclasses.replace() in tests instead
    of patching module state.
    """

    base_rate: Decimal = Decimal("0.05")
    tiers: tuple[TierRule, ...] = _DEFAULT_TIERS
    regional_multipliers: Mapping[Region, Decimal] = field(default_factory=lambda: _DEFAULT_MULTIPLIERS)
    # used for a prorated segment whose region was never recorded
    unassigned_region_multiplier: Decimal = Decimal("1.00")

    streak_bonus_per_month: Decimal = Decimal("0.01")
    max_streak_bonus: Decimal = Decimal("0.05")

    performance_penalty: Decimal = Decimal("0.02")
    penalty_ratio_threshold: Decimal = Decimal("0.5")

    def __post_init__(self) -> None:
        if not isinstance(self.regional_multipliers, MappingProxyType):
            object.__setattr__(self, "regional_multipliers", MappingProxyType(dict(self.regional_multipliers)))
        ordered = tuple(sorted(self.tiers, key=lambda t: t.threshold, reverse=True))
        object.__setattr__(self, "tiers", ordered)
        if self.streak_bonus_per_month <= 0:
            raise ValueError("streak_bonus_per_month must be positive.")

    @property
    def max_streak_months(self) -> int:
        return int(self.max_streak_bonus / self.streak_bonus_per_month)

    def multiplier_for(self, region: Region | str | None) -> Decimal:
        """
        Returns the regional multiplier for a region.
        None means the region is unknown (no recorded history).
        """
        if region is None:
            return self.unassigned_region_multiplier
        return self.regional_multipliers[Region(region)]


DEFAULT_POLICY = CommissionPolicy()


def tier_bonus(total_sales: Decimal, policy: CommissionPolicy = DEFAULT_POLICY) -> Decimal:
    """
    Bonus unlocked by the whole month's sales.
    Thresholds are exclusive: a total exactly on a threshold stays in the lower tier.
    """
    for tier in policy.tiers:
        if total_sales > tier.threshold:
            return total_sales * tier.rate
    return Decimal("0")
