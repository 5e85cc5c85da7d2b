# salesperf/core/bulk_ingestion.py
from __future__ import annotations

import logging
from typing import Sequence

from salesperf.core.errors import DUPLICATE_SALE_FOUND, USER_NOT_FOUND
from salesperf.core.results import BulkIngestionResult, BulkItemError
from salesperf.core.stores import SaleStore, UserDirectory
from salesperf.models.sale import DEFAULT_COMMISSION_RATE, Sale
from salesperf.schemas.sales import SaleCreate

logger = logging.getLogger("salesperf")


class BulkIngestionProcessor:
    """
    Admits a batch of already field-validated sales, one item at a time.

    Unknown users and duplicates are reported per item and never stop the
    batch. There is no batch transaction: each insert is persisted on its own,
    so a store failure propagates and leaves earlier inserts in place.

    The duplicate check and the insert are separate calls; two batches racing
    on the same sale can both insert it.
    """

    def __init__(self, users: UserDirectory, sales: SaleStore) -> None:
        self._users = users
        self._sales = sales

    async def process(self, sale_inputs: Sequence[SaleCreate]) -> BulkIngestionResult:
        result = BulkIngestionResult()

        for index, item in enumerate(sale_inputs):
            user = await self._users.find_by_id(item.user_id)
            if user is None:
                result.errors.append(BulkItemError(index=index, error=USER_NOT_FOUND))
                continue

            category = item.category.value
            existing = await self._sales.find_matching(item.user_id, item.amount, item.date, category)
            if existing is not None:
                result.errors.append(BulkItemError(index=index, error=DUPLICATE_SALE_FOUND))
                continue

            commission_rate = item.commission_rate
            if commission_rate is None:
                commission_rate = DEFAULT_COMMISSION_RATE

            await self._sales.insert(
                Sale(
                    user_id=item.user_id,
                    amount=item.amount,
                    date=item.date,
                    category=category,
                    commission_rate=commission_rate,
                )
            )
            result.success_count += 1

        for err in result.errors:
            logger.warning("Bulk sale item %d rejected: %s", err.index, err.error)
        logger.info(
            "Bulk sales import: %d inserted, %d rejected of %d",
            result.success_count, len(result.errors), len(sale_inputs),
        )
        return result
