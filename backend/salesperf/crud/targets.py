# salesperf/crud/targets.py
from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from salesperf.core.errors import TargetAlreadyExists
from salesperf.models.target import Target


class SqlTargetStore:
    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def find_one(self, user_id: uuid.UUID, month: int, year: int) -> Optional[Target]:
        stmt = (
            select(Target)
            .where(Target.user_id == user_id)
            .where(Target.month == month)
            .where(Target.year == year)
        )
        return (await self._db.execute(stmt)).scalar_one_or_none()

    async def create(self, *, user_id: uuid.UUID, month: int, year: int, target_amount: Decimal) -> Target:
        """
        At most one target per (user, month, year); the unique constraint decides.
        """
        target = Target(user_id=user_id, month=month, year=year, target_amount=target_amount)
        self._db.add(target)
        try:
            await self._db.commit()
        except IntegrityError:
            await self._db.rollback()
            raise TargetAlreadyExists(user_id, month, year)
        await self._db.refresh(target)
        return target

    async def search(self, *, user_id: Optional[uuid.UUID] = None, year: Optional[int] = None) -> Sequence[Target]:
        stmt = select(Target)
        if user_id is not None:
            stmt = stmt.where(Target.user_id == user_id)
        if year is not None:
            stmt = stmt.where(Target.year == year)
        stmt = stmt.order_by(Target.year.asc(), Target.month.asc())
        return (await self._db.execute(stmt)).scalars().all()

    async def get(self, target_id: uuid.UUID) -> Optional[Target]:
        return await self._db.get(Target, target_id)

    async def update_amount(self, target: Target, target_amount: Decimal) -> Target:
        target.target_amount = target_amount
        await self._db.commit()
        await self._db.refresh(target)
        return target

    async def delete(self, target: Target) -> None:
        await self._db.delete(target)
        await self._db.commit()
