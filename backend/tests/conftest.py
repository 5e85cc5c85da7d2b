from __future__ import annotations

import os
import uuid
import asyncio
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from salesperf.api.deps.stores import get_sale_store, get_target_store, get_user_directory
from salesperf.core.calendar import utcnow
from salesperf.core.commission_engine import CommissionEngine
from salesperf.core.errors import TargetAlreadyExists
from salesperf.core.regions import Region

# Ensure Base + models are registered before create_all
from salesperf.db.base import Base  # noqa: F401
import salesperf.models  # noqa: F401
from salesperf.models.region_assignment import RegionAssignment
from salesperf.models.sale import Sale
from salesperf.models.target import Target
from salesperf.models.user import User


def dt(year: int, month: int, day: int, hour: int = 12, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


# ---------------------------------------------------------
# In-memory stores (same surface as salesperf.crud.*)
# ---------------------------------------------------------
class FakeUserDirectory:
    def __init__(self) -> None:
        self.users: dict[uuid.UUID, User] = {}
        self.lookups = 0

    async def find_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        self.lookups += 1
        return self.users.get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    async def create(self, *, name: str, email: str, region: Region, hire_date: datetime) -> User:
        user = User(
            id=uuid.uuid4(),
            name=name,
            email=email,
            region=region.value,
            region_start_date=hire_date,
            hire_date=hire_date,
            status="active",
        )
        user.region_history = [RegionAssignment(region=region.value, effective_from=hire_date)]
        self.users[user.id] = user
        return user

    async def change_region(self, user: User, region: Region) -> User:
        now = utcnow()
        user.region = region.value
        user.region_start_date = now
        user.region_history.append(RegionAssignment(region=region.value, effective_from=now))
        return user

    async def search(self, *, region=None, status=None):
        rows = [
            u
            for u in self.users.values()
            if (region is None or u.region == region.value) and (status is None or u.status == status.value)
        ]
        return sorted(rows, key=lambda u: u.name)

    async def deactivate(self, user: User) -> User:
        user.status = "inactive"
        return user

    def add(
        self,
        region: str = "north",
        region_start_date: Optional[datetime] = None,
        history: Optional[list[tuple[str, datetime]]] = None,
    ) -> User:
        start = region_start_date or dt(2020, 1, 1, 0)
        user = User(
            id=uuid.uuid4(),
            name="Alice Johnson",
            email=f"{uuid.uuid4().hex[:8]}@company.com",
            region=region,
            region_start_date=start,
            hire_date=start,
            status="active",
        )
        entries = history if history is not None else [(region, start)]
        user.region_history = [RegionAssignment(region=r, effective_from=when) for r, when in entries]
        self.users[user.id] = user
        return user


class FakeSaleStore:
    def __init__(self) -> None:
        self.records: list[Sale] = []
        self.fail_on_insert: Optional[int] = None
        self.range_queries = 0

    async def find_by_user_and_range(self, user_id, start, end):
        self.range_queries += 1
        return [s for s in self.records if s.user_id == user_id and start <= s.date <= end]

    async def find_matching(self, user_id, amount, date, category):
        for s in self.records:
            if s.user_id == user_id and s.amount == amount and s.date == date and s.category == category:
                return s
        return None

    async def insert(self, record: Sale) -> Sale:
        if self.fail_on_insert is not None and len(self.records) >= self.fail_on_insert:
            raise RuntimeError("sale store unavailable")
        if record.id is None:
            record.id = uuid.uuid4()
        self.records.append(record)
        return record

    async def get(self, sale_id):
        return next((s for s in self.records if s.id == sale_id), None)

    async def search(self, *, user_id=None, start=None, end=None, category=None):
        rows = [
            s
            for s in self.records
            if (user_id is None or s.user_id == user_id)
            and (start is None or s.date >= start)
            and (end is None or s.date <= end)
            and (category is None or s.category == category)
        ]
        return sorted(rows, key=lambda s: s.date, reverse=True)

    def add(self, user: User, amount, when: datetime, category: str = "software") -> Sale:
        sale = Sale(
            id=uuid.uuid4(),
            user_id=user.id,
            amount=Decimal(str(amount)),
            date=when,
            category=category,
            commission_rate=Decimal("5"),
        )
        self.records.append(sale)
        return sale


class FakeTargetStore:
    def __init__(self) -> None:
        self.targets: dict[tuple[uuid.UUID, int, int], Target] = {}

    async def find_one(self, user_id, month, year):
        return self.targets.get((user_id, month, year))

    async def create(self, *, user_id, month, year, target_amount):
        key = (user_id, month, year)
        if key in self.targets:
            raise TargetAlreadyExists(user_id, month, year)
        target = Target(id=uuid.uuid4(), user_id=user_id, month=month, year=year, target_amount=target_amount)
        self.targets[key] = target
        return target

    async def search(self, *, user_id=None, year=None):
        rows = [
            t
            for t in self.targets.values()
            if (user_id is None or t.user_id == user_id) and (year is None or t.year == year)
        ]
        return sorted(rows, key=lambda t: (t.year, t.month))

    async def get(self, target_id):
        return next((t for t in self.targets.values() if t.id == target_id), None)

    async def update_amount(self, target: Target, target_amount) -> Target:
        target.target_amount = target_amount
        return target

    async def delete(self, target: Target) -> None:
        del self.targets[(target.user_id, target.month, target.year)]

    def add(self, user: User, month: int, year: int, amount) -> Target:
        target = Target(id=uuid.uuid4(), user_id=user.id, month=month, year=year, target_amount=Decimal(str(amount)))
        self.targets[(user.id, month, year)] = target
        return target


@pytest.fixture()
def users() -> FakeUserDirectory:
    return FakeUserDirectory()


@pytest.fixture()
def sales() -> FakeSaleStore:
    return FakeSaleStore()


@pytest.fixture()
def targets() -> FakeTargetStore:
    return FakeTargetStore()


@pytest.fixture()
def commission_engine(users, sales, targets) -> CommissionEngine:
    return CommissionEngine(users, sales, targets)


# ---------------------------------------------------------
# FastAPI app + dependency override (in-memory stores)
# ---------------------------------------------------------
@pytest.fixture()
def app(users, sales, targets):
    from salesperf.main import app as fastapi_app

    fastapi_app.dependency_overrides[get_user_directory] = lambda: users
    fastapi_app.dependency_overrides[get_sale_store] = lambda: sales
    fastapi_app.dependency_overrides[get_target_store] = lambda: targets
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
    ) as ac:
        yield ac


# ---------------------------------------------------------
# PostgreSQL (SQL store tests only)
# ---------------------------------------------------------
@pytest.fixture(scope="session")
def database_url_async() -> str:
    url = os.getenv("DATABASE_URL_ASYNC")
    if not url:
        pytest.skip("DATABASE_URL_ASYNC is not set; skipping PostgreSQL tests.")
    return url


@pytest.fixture(scope="session")
def test_schema_name() -> str:
    return f"test_{uuid.uuid4().hex}"


@pytest_asyncio.fixture()
async def pg_engine(database_url_async: str, test_schema_name: str):
    engine = create_async_engine(
        database_url_async,
        future=True,
        echo=False,
        poolclass=NullPool,
        connect_args={"server_settings": {"search_path": test_schema_name}},
    )

    # ------------------------------
    # Wait/retry for DB readiness
    # ------------------------------
    last_exc = None
    for _ in range(30):  # ~30 seconds max wait
        try:
            async with engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
            last_exc = None
            break
        except Exception as e:
            last_exc = e
            await asyncio.sleep(1)

    if last_exc is not None:
        raise RuntimeError(
            f"Database not reachable for tests: {last_exc}"
        ) from last_exc

    async with engine.begin() as conn:
        await conn.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{test_schema_name}"'))
        await conn.execute(text(f'SET search_path TO "{test_schema_name}"'))
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # ------------------------------
    # Teardown: drop schema (clean state for every test)
    # ------------------------------
    async with engine.begin() as conn:
        await conn.execute(text(f'DROP SCHEMA IF EXISTS "{test_schema_name}" CASCADE'))

    await engine.dispose()


@pytest_asyncio.fixture()
async def db(pg_engine):
    """
    Session for SQL store tests.
    """
    maker = async_sessionmaker(pg_engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as session:
        yield session
        await session.rollback()
