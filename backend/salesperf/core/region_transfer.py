# salesperf/core/region_transfer.py
from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from typing import Optional, Sequence

from salesperf.core.calendar import MonthWindow, calendar_days_between, month_window
from salesperf.core.commission_policy import DEFAULT_POLICY, CommissionPolicy
from salesperf.core.monthly_sales import total_amount
from salesperf.core.regions import Region
from salesperf.core.results import RegionSegment
from salesperf.models.sale import Sale
from salesperf.models.user import User

logger = logging.getLogger("salesperf")


def region_before(user: User, instant: datetime) -> Optional[Region]:
    """
    Region in effect just before `instant`, from the user's region history.
    Returns None when no earlier assignment was recorded.
    """
    previous = None
    for assignment in user.region_history or ():
        if assignment.effective_from < instant:
            previous = assignment
        else:
            break
    return Region(previous.region) if previous is not None else None


def region_at(user: User, instant: datetime) -> Optional[Region]:
    current = None
    for assignment in user.region_history or ():
        if assignment.effective_from <= instant:
            current = assignment
        else:
            break
    return Region(current.region) if current is not None else None


def transfer_instants(user: User, window: MonthWindow) -> list[datetime]:
    """
    Region changes strictly after the window start and at or before its end,
    oldest first.

    The first history entry is the hire assignment and never counts as a
    transfer. `region_start_date` counts on its own only when the history does
    not already open with it (users created before history was recorded).
    """
    history = list(user.region_history or ())
    instants = {a.effective_from for a in history[1:] if window.start < a.effective_from <= window.end}

    start = user.region_start_date
    opens_history = bool(history) and history[0].effective_from == start
    if start is not None and window.start < start <= window.end and not opens_history:
        instants.add(start)
    return sorted(instants)


class RegionTransferProrator:
    """
    Splits a month's sales at every instant the salesperson changed region and
    prices each part with the multiplier of the region it was sold in.

    A single change yields [before, after]; two changes in one month yield
    three segments, and so on. The last segment always uses the user's current
    region. A segment whose region was never recorded reports region None and
    is priced with the policy's unassigned multiplier.
    """

    def __init__(self, policy: CommissionPolicy = DEFAULT_POLICY, tz: tzinfo = timezone.utc) -> None:
        self._policy = policy
        self._tz = tz

    def _segment(self, region: Optional[Region], sales: Sequence[Sale], days: int) -> RegionSegment:
        amount = total_amount(sales)
        commission = amount * self._policy.base_rate * self._policy.multiplier_for(region)
        return RegionSegment(region=region, sales=amount, days=days, commission=commission)

    def region_transfers(
        self,
        user: User,
        month: int,
        year: int,
        month_sales: Sequence[Sale],
    ) -> list[RegionSegment]:
        window = month_window(month, year, self._tz)
        instants = transfer_instants(user, window)
        if not instants:
            return []

        regions: list[Optional[Region]] = [region_before(user, instants[0])]
        regions += [region_at(user, t) for t in instants[1:]]
        regions.append(Region(user.region))

        if regions[0] is None:
            logger.warning(
                "No region recorded for user %s before transfer at %s; using unassigned multiplier",
                user.id,
                instants[0].isoformat(),
            )
        logger.info(
            "Prorating %s/%s for user %s across %d region(s): %s",
            month, year, user.id, len(regions), " -> ".join(str(getattr(r, "value", None)) for r in regions),
        )

        bounds = [window.start, *instants, window.end]
        segments = []
        for i, region in enumerate(regions):
            lower = instants[i - 1] if i > 0 else None
            upper = instants[i] if i < len(instants) else None
            part = [
                s
                for s in month_sales
                if (lower is None or s.date >= lower) and (upper is None or s.date < upper)
            ]
            segments.append(self._segment(region, part, calendar_days_between(bounds[i], bounds[i + 1])))
        return segments
