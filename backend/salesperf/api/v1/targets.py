# salesperf/api/v1/targets.py
from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from salesperf.api.deps.stores import get_target_store, get_user_directory
from salesperf.core.errors import TargetAlreadyExists
from salesperf.crud.targets import SqlTargetStore
from salesperf.crud.users import SqlUserDirectory
from salesperf.schemas.targets import TargetCreate, TargetListOut, TargetOut, TargetUpdate

router = APIRouter(prefix="/targets", tags=["targets"])


@router.post("", response_model=TargetOut, status_code=status.HTTP_201_CREATED)
async def create_target(
    payload: TargetCreate,
    users: SqlUserDirectory = Depends(get_user_directory),
    targets: SqlTargetStore = Depends(get_target_store),
):
    if await users.find_by_id(payload.user_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    try:
        return await targets.create(
            user_id=payload.user_id,
            month=payload.month,
            year=payload.year,
            target_amount=payload.target_amount,
        )
    except TargetAlreadyExists as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get("", response_model=TargetListOut)
async def list_targets(
    user_id: Optional[UUID] = None,
    year: Optional[int] = Query(None, ge=2020),
    targets: SqlTargetStore = Depends(get_target_store),
):
    rows = await targets.search(user_id=user_id, year=year)
    return TargetListOut(items=list(rows), total=len(rows))


async def _get_target_or_404(targets: SqlTargetStore, target_id: UUID):
    target = await targets.get(target_id)
    if not target:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Target not found")
    return target


@router.get("/{target_id}", response_model=TargetOut)
async def get_target(
    target_id: UUID,
    targets: SqlTargetStore = Depends(get_target_store),
):
    return await _get_target_or_404(targets, target_id)


@router.put("/{target_id}", response_model=TargetOut)
async def update_target(
    target_id: UUID,
    payload: TargetUpdate,
    targets: SqlTargetStore = Depends(get_target_store),
):
    """
    Changes the amount only. Commission for that month, and the streak and
    penalty of the months after it, follow on the next calculation.
    """
    target = await _get_target_or_404(targets, target_id)
    return await targets.update_amount(target, payload.target_amount)


@router.delete("/{target_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_target(
    target_id: UUID,
    targets: SqlTargetStore = Depends(get_target_store),
):
    target = await _get_target_or_404(targets, target_id)
    await targets.delete(target)
    return None
