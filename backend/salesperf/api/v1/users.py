# salesperf/api/v1/users.py
from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from salesperf.api.deps.stores import get_user_directory
from salesperf.core.regions import Region, UserStatus
from salesperf.crud.users import SqlUserDirectory
from salesperf.schemas.users import RegionUpdate, UserCreate, UserListOut, UserOut

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreate,
    users: SqlUserDirectory = Depends(get_user_directory),
):
    if await users.find_by_email(payload.email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")

    return await users.create(
        name=payload.name,
        email=payload.email,
        region=payload.region,
        hire_date=payload.hire_date,
    )


@router.get("", response_model=UserListOut)
async def list_users(
    region: Optional[Region] = None,
    user_status: Optional[UserStatus] = Query(None, alias="status"),
    users: SqlUserDirectory = Depends(get_user_directory),
):
    rows = await users.search(region=region, status=user_status)
    return UserListOut(items=list(rows), total=len(rows))


@router.get("/{user_id}", response_model=UserOut)
async def get_user(
    user_id: UUID,
    users: SqlUserDirectory = Depends(get_user_directory),
):
    user = await users.find_by_id(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.put("/{user_id}/region", response_model=UserOut)
async def update_user_region(
    user_id: UUID,
    payload: RegionUpdate,
    users: SqlUserDirectory = Depends(get_user_directory),
):
    """
    Transfer to another region starting now. The previous region stays in
    region_history so the current month can be prorated.
    """
    user = await users.find_by_id(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if user.region == payload.region.value:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User is already in this region")

    return await users.change_region(user, payload.region)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def deactivate_user(
    user_id: UUID,
    users: SqlUserDirectory = Depends(get_user_directory),
):
    """
    Soft delete: the user is marked inactive and keeps their history.
    """
    user = await users.find_by_id(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    await users.deactivate(user)
    return None
