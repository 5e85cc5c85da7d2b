# salesperf/api/deps/stores.py
from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from salesperf.core.bulk_ingestion import BulkIngestionProcessor
from salesperf.core.commission_engine import CommissionEngine
from salesperf.core.commission_policy import DEFAULT_POLICY, CommissionPolicy
from salesperf.core.config import settings
from salesperf.crud.sales import SqlSaleStore
from salesperf.crud.targets import SqlTargetStore
from salesperf.crud.users import SqlUserDirectory
from salesperf.db.session import get_db


def get_user_directory(db: AsyncSession = Depends(get_db)) -> SqlUserDirectory:
    return SqlUserDirectory(db)


def get_sale_store(db: AsyncSession = Depends(get_db)) -> SqlSaleStore:
    return SqlSaleStore(db)


def get_target_store(db: AsyncSession = Depends(get_db)) -> SqlTargetStore:
    return SqlTargetStore(db)


def get_commission_policy() -> CommissionPolicy:
    return DEFAULT_POLICY


def get_commission_engine(
    users: SqlUserDirectory = Depends(get_user_directory),
    sales: SqlSaleStore = Depends(get_sale_store),
    targets: SqlTargetStore = Depends(get_target_store),
    policy: CommissionPolicy = Depends(get_commission_policy),
) -> CommissionEngine:
    return CommissionEngine(users, sales, targets, policy=policy, tz=settings.business_tz)


def get_bulk_processor(
    users: SqlUserDirectory = Depends(get_user_directory),
    sales: SqlSaleStore = Depends(get_sale_store),
) -> BulkIngestionProcessor:
    return BulkIngestionProcessor(users, sales)
