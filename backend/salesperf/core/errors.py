# salesperf/core/errors.py
from __future__ import annotations

import uuid

USER_NOT_FOUND = "User not found"
DUPLICATE_SALE_FOUND = "Duplicate sale found"


class CommissionError(Exception):
    """Base class for domain errors raised by the commission core."""


class UserNotFound(CommissionError):
    def __init__(self, user_id: uuid.UUID) -> None:
        super().__init__(USER_NOT_FOUND)
        self.user_id = user_id


class TargetAlreadyExists(CommissionError):
    def __init__(self, user_id: uuid.UUID, month: int, year: int) -> None:
        super().__init__(f"Target already exists for {month}/{year}")
        self.user_id = user_id
        self.month = month
        self.year = year
