# salesperf/crud/sales.py
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from salesperf.models.sale import Sale


class SqlSaleStore:
    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def find_by_user_and_range(
        self,
        user_id: uuid.UUID,
        start: datetime,
        end: datetime,
    ) -> Sequence[Sale]:
        """
        Sales of one user with start <= date <= end, oldest first.
        """
        stmt = (
            select(Sale)
            .where(Sale.user_id == user_id)
            .where(Sale.date >= start)
            .where(Sale.date <= end)
            .order_by(Sale.date.asc(), Sale.id.asc())
        )
        return (await self._db.execute(stmt)).scalars().all()

    async def find_matching(
        self,
        user_id: uuid.UUID,
        amount: Decimal,
        date: datetime,
        category: str,
    ) -> Optional[Sale]:
        stmt = (
            select(Sale)
            .where(Sale.user_id == user_id)
            .where(Sale.amount == amount)
            .where(Sale.date == date)
            .where(Sale.category == category)
            .limit(1)
        )
        return (await self._db.execute(stmt)).scalars().first()

    async def insert(self, record: Sale) -> Sale:
        # one commit per record: bulk ingestion keeps earlier rows if a later one fails
        self._db.add(record)
        await self._db.commit()
        await self._db.refresh(record)
        return record

    async def get(self, sale_id: uuid.UUID) -> Optional[Sale]:
        return await self._db.get(Sale, sale_id)

    async def search(
        self,
        *,
        user_id: Optional[uuid.UUID] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        category: Optional[str] = None,
    ) -> Sequence[Sale]:
        stmt = select(Sale)
        if user_id is not None:
            stmt = stmt.where(Sale.user_id == user_id)
        if start is not None:
            stmt = stmt.where(Sale.date >= start)
        if end is not None:
            stmt = stmt.where(Sale.date <= end)
        if category is not None:
            stmt = stmt.where(Sale.category == category)
        stmt = stmt.order_by(Sale.date.desc())
        return (await self._db.execute(stmt)).scalars().all()
