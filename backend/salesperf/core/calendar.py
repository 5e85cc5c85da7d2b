# salesperf/core/calendar.py
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone, tzinfo


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class MonthWindow:
    month: int
    year: int
    start: datetime
    end: datetime

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end


def previous_month(month: int, year: int) -> tuple[int, int]:
    """
    Returns (month, year) of the month before the given one.
    January wraps to December of the previous year.
    """
    if month == 1:
        return 12, year - 1
    return month - 1, year


def month_window(month: int, year: int, tz: tzinfo = timezone.utc) -> MonthWindow:
    """
    Full calendar month in the given local time reference:
    day 1 00:00:00.000 through the last day 23:59:59.999.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1, tzinfo=tz)
    end = datetime.combine(
        start.date().replace(day=last_day),
        time(23, 59, 59, 999000),
        tzinfo=tz,
    )
    return MonthWindow(month=month, year=year, start=start, end=end)


def calendar_days_between(start: datetime, end: datetime) -> int:
    """
    Whole calendar days from start to end, rounded up; never negative.
    """
    seconds = (end - start).total_seconds()
    if seconds <= 0:
        return 0
    return int(-(-seconds // timedelta(days=1).total_seconds()))
