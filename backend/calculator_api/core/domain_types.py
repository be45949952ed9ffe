"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - OperationId wraps UUID — record identity never travels as a bare string past the store
    - OperationType is the closed set of persisted operation tags

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum: serializes to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

OperationId = NewType("OperationId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class OperationType(str, Enum):
    """Arithmetic operations — values are stored verbatim in the `operation` column."""
    ADDITION = "addition"
    SUBTRACTION = "subtraction"
    MULTIPLICATION = "multiplication"
    DIVISION = "division"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS: dict[OperationType, str] = {
    OperationType.ADDITION: "+",
    OperationType.SUBTRACTION: "-",
    OperationType.MULTIPLICATION: "*",
    OperationType.DIVISION: "/",
}
