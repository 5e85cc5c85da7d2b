# salesperf/schemas/targets.py
from __future__ import annotations

from decimal import Decimal
from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TargetCreate(BaseModel):
    user_id: UUID
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2020)
    target_amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)


class TargetUpdate(BaseModel):
    target_amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)


class TargetOut(BaseModel):
    id: UUID
    user_id: UUID
    month: int
    year: int
    target_amount: Decimal

    model_config = ConfigDict(from_attributes=True)


class TargetListOut(BaseModel):
    items: List[TargetOut]
    total: int
