# salesperf/core/stores.py
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from salesperf.models.sale import Sale
from salesperf.models.target import Target
from salesperf.models.user import User


class UserDirectory(Protocol):
    async def find_by_id(self, user_id: uuid.UUID) -> Optional[User]: ...


class SaleStore(Protocol):
    async def find_by_user_and_range(
        self,
        user_id: uuid.UUID,
        start: datetime,
        end: datetime,
    ) -> Sequence[Sale]: ...

    async def find_matching(
        self,
        user_id: uuid.UUID,
        amount: Decimal,
        date: datetime,
        category: str,
    ) -> Optional[Sale]: ...

    async def insert(self, record: Sale) -> Sale: ...


class TargetStore(Protocol):
    async def find_one(self, user_id: uuid.UUID, month: int, year: int) -> Optional[Target]: ...
