# salesperf/api/v1/commission.py
from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from salesperf.api.deps.stores import get_commission_engine
from salesperf.core.calendar import utcnow
from salesperf.core.commission_engine import CommissionEngine
from salesperf.core.errors import UserNotFound
from salesperf.core.results import CommissionResult
from salesperf.schemas.commission import CommissionOut, RegionSegmentOut, YearlySummaryOut

router = APIRouter(prefix="/commission", tags=["commission"])


def _to_out(result: CommissionResult) -> CommissionOut:
    transfers = None
    if result.region_transfers:
        transfers = [RegionSegmentOut.model_validate(seg) for seg in result.region_transfers]
    return CommissionOut(
        user_id=result.user_id,
        month=result.month,
        year=result.year,
        total_sales=result.total_sales,
        base_commission=result.base_commission,
        tier_bonus=result.tier_bonus,
        regional_multiplier=result.regional_multiplier,
        streak_bonus=result.streak_bonus,
        performance_penalty=result.performance_penalty,
        total_commission=result.total_commission,
        target_hit=result.target_hit,
        target_amount=result.target_amount,
        has_target=result.has_target,
        region_transfers=transfers,
    )


@router.get("/{user_id}/summary", response_model=YearlySummaryOut)
async def get_commission_summary(
    user_id: UUID,
    year: Optional[int] = Query(None, ge=2020),
    engine: CommissionEngine = Depends(get_commission_engine),
):
    """
    Twelve monthly commissions for a year (defaults to the current year) plus totals.
    """
    year = year if year is not None else utcnow().year
    try:
        summary = await engine.yearly_summary(user_id, year)
    except UserNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    return YearlySummaryOut(
        user_id=summary.user_id,
        year=summary.year,
        monthly_commissions=[_to_out(m) for m in summary.monthly_commissions],
        yearly_total=summary.yearly_total,
        yearly_sales=summary.yearly_sales,
        months_hit_target=summary.months_hit_target,
        average_monthly_commission=summary.average_monthly_commission,
    )


@router.get("/{user_id}/{month}/{year}", response_model=CommissionOut)
async def get_commission(
    user_id: UUID,
    month: int = Path(..., ge=1, le=12),
    year: int = Path(..., ge=2020),
    engine: CommissionEngine = Depends(get_commission_engine),
):
    try:
        result = await engine.calculate_commission(user_id, month, year)
    except UserNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return _to_out(result)
