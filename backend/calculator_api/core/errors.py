"""Error Hierarchy — typed, categorized exceptions for all calculator failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client faults (ValidationError, DomainError) are 400-level; storage faults are 500-level
    - to_response() produces the {"error": ...} envelope returned to callers
    - Storage errors never expose their internal message: public_message is generic

Design Decisions:
    - Single hierarchy with CalculatorError base: FastAPI global handler catches all
    - "No matching record" is NOT an error — update/delete report zero counts instead
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


INVALID_OPERANDS_MESSAGE = "Invalid input: Both num1 and num2 should be numbers."
DIVISION_BY_ZERO_MESSAGE = "Division by zero is not allowed."
INTERNAL_ERROR_MESSAGE = "Internal server error"


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    STORAGE = "storage"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    record_id: str | None = None


class CalculatorError(Exception):
    """Base exception for all calculator service errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        public_message: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.public_message = public_message or message

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {"error": self.public_message}


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationError(CalculatorError):
    """Operands missing or not numeric."""
    def __init__(
        self, message: str = INVALID_OPERANDS_MESSAGE, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class DomainError(CalculatorError):
    """Operands are numbers but the operation is not defined for them."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class DivisionByZeroError(DomainError):
    """Divisor is exactly zero."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(DIVISION_BY_ZERO_MESSAGE, "DIVISION_BY_ZERO", context)


# ─── Storage Errors (500-level) ─────────────────────────────────

class StorageError(CalculatorError):
    """Base for record store faults — callers only ever see a generic message."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 500,
            public_message=INTERNAL_ERROR_MESSAGE,
        )


class StorageUnavailable(StorageError):
    """Record store used before its connection was established."""
    def __init__(self, message: str = "Storage is not connected", context: ErrorContext | None = None):
        super().__init__(message, "STORAGE_UNAVAILABLE", context)


class StorageOperationError(StorageError):
    """Query, insert, update or delete failed at the backend."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(f"Storage {operation} failed: {message}", "STORAGE_ERROR", ctx)
        self.operation = operation
