# salesperf/crud/users.py
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from salesperf.core.calendar import utcnow
from salesperf.core.regions import Region, UserStatus
from salesperf.models.region_assignment import RegionAssignment
from salesperf.models.user import User


class SqlUserDirectory:
    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def find_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        return await self._db.get(User, user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email)
        return (await self._db.execute(stmt)).scalar_one_or_none()

    async def create(self, *, name: str, email: str, region: Region, hire_date: datetime) -> User:
        """
        New salesperson. The hire date starts the first region assignment.
        """
        user = User(
            name=name,
            email=email,
            region=region.value,
            region_start_date=hire_date,
            hire_date=hire_date,
            status="active",
        )
        user.region_history = [RegionAssignment(region=region.value, effective_from=hire_date)]
        self._db.add(user)
        await self._db.commit()
        await self._db.refresh(user)
        return user

    async def change_region(self, user: User, region: Region) -> User:
        """
        Moves the user to a new region from now on and records the move in
        the region history.
        """
        now = utcnow()
        user.region = region.value
        user.region_start_date = now
        user.region_history.append(RegionAssignment(region=region.value, effective_from=now))
        await self._db.commit()
        await self._db.refresh(user)
        return user

    async def search(
        self,
        *,
        region: Optional[Region] = None,
        status: Optional[UserStatus] = None,
    ) -> Sequence[User]:
        stmt = select(User)
        if region is not None:
            stmt = stmt.where(User.region == region.value)
        if status is not None:
            stmt = stmt.where(User.status == status.value)
        stmt = stmt.order_by(User.name.asc())
        return (await self._db.execute(stmt)).scalars().all()

    async def deactivate(self, user: User) -> User:
        """
        Soft delete: the user keeps their sales, targets and region history.
        """
        user.status = UserStatus.INACTIVE.value
        await self._db.commit()
        await self._db.refresh(user)
        return user
