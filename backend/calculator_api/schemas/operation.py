"""Operation Schemas — Pydantic models at the HTTP boundary.

Invariants:
    - OperationUpdate applies NO validation: any JSON value is forwarded to the store
    - Non-finite floats (inf, -inf, NaN) serialize as null — JSON has no literal for them
    - OperationRecordResponse mirrors the persisted columns one-to-one, echoing any stored value
    - Timestamps are always emitted timezone-aware (UTC)

Design Decisions:
    - exclude_unset on OperationUpdate: keys the caller omitted are left untouched
    - Outcome models instead of raw counts: responses name what happened
"""

import math
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_serializer

from calculator_api.core.domain_types import OperationType


def finite_or_none(value: Any) -> Any:
    """Map inf/-inf/NaN to None so the JSON encoder never sees them."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


class ArithmeticResponse(BaseModel):
    """Result of one arithmetic request."""
    operation: OperationType
    result: float | None

    @field_serializer("result")
    def serialize_result(self, v: float | None) -> float | None:
        return finite_or_none(v)


class OperationRecordResponse(BaseModel):
    """Stored operation record."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    operation: Any
    num1: Any
    num2: Any
    result: Any
    timestamp: datetime

    @field_serializer("num1", "num2", "result")
    def serialize_values(self, v: Any) -> Any:
        return finite_or_none(v)

    @field_serializer("timestamp")
    def serialize_timestamp(self, v: datetime) -> datetime:
        # SQLite drops tzinfo on read; stored values are always UTC
        return v if v.tzinfo else v.replace(tzinfo=timezone.utc)


class OperationUpdate(BaseModel):
    """Update body — forwarded to the store as-is."""
    model_config = ConfigDict(extra="ignore")

    operation: Any = None
    num1: Any = None
    num2: Any = None
    result: Any = None


class UpdateOutcome(BaseModel):
    """Storage outcome of an update. matched_count == 0 means no such record."""
    acknowledged: bool = True
    matched_count: int
    modified_count: int


class DeleteOutcome(BaseModel):
    """Storage outcome of a delete. deleted_count == 0 means no such record."""
    acknowledged: bool = True
    deleted_count: int
