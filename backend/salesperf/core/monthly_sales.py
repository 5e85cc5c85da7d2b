# salesperf/core/monthly_sales.py
from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Iterable, Sequence

from salesperf.core.calendar import MonthWindow
from salesperf.core.stores import SaleStore
from salesperf.models.sale import Sale


def total_amount(sales: Iterable[Sale]) -> Decimal:
    return sum((Decimal(s.amount) for s in sales), Decimal("0"))


async def fetch_month_sales(store: SaleStore, user_id: uuid.UUID, window: MonthWindow) -> Sequence[Sale]:
    return await store.find_by_user_and_range(user_id, window.start, window.end)


async def fetch_month_total(store: SaleStore, user_id: uuid.UUID, window: MonthWindow) -> Decimal:
    return total_amount(await fetch_month_sales(store, user_id, window))
