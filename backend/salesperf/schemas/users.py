# salesperf/schemas/users.py
from __future__ import annotations

from datetime import datetime
from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from salesperf.core.calendar import utcnow
from salesperf.core.config import settings
from salesperf.core.regions import Region, UserStatus
from salesperf.models.user import User


class UserCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    email: str = Field(..., max_length=320)
    region: Region
    hire_date: datetime

    @field_validator("name")
    @classmethod
    def _normalize_name(cls, v: str) -> str:
        normalized = User.normalize_name(v)
        if normalized is None or len(normalized) < 2:
            raise ValueError("Name must be between 2 and 50 characters")
        return normalized

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, v: str) -> str:
        return User.normalize_email(v)

    @field_validator("hire_date")
    @classmethod
    def _hire_date_not_in_future(cls, v: datetime) -> datetime:
        # naive timestamps are read in the business timezone, like sale dates
        if v.tzinfo is None:
            v = v.replace(tzinfo=settings.business_tz)
        if v > utcnow():
            raise ValueError("Hire date cannot be in the future")
        return v


class RegionUpdate(BaseModel):
    region: Region


class RegionAssignmentOut(BaseModel):
    region: Region
    effective_from: datetime

    model_config = ConfigDict(from_attributes=True)


class UserOut(BaseModel):
    id: UUID
    name: str
    email: str
    region: Region
    region_start_date: datetime
    hire_date: datetime
    status: UserStatus
    region_history: List[RegionAssignmentOut] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class UserListOut(BaseModel):
    items: List[UserOut]
    total: int
