"""Operand Validation — turns raw query tokens into floats or a ValidationError.

Invariants:
    - Both operands are checked together; one failure message covers both
    - Infinities are accepted (float semantics), NaN tokens are rejected
    - Pure: no logging, no IO
"""

import math

from calculator_api.core.errors import ValidationError


def parse_operand(token: str | None) -> float | None:
    """Parse one token. Returns None when it is missing or not a number."""
    if token is None:
        return None
    token = token.strip()
    if not token:
        return None
    try:
        value = float(token)
    except ValueError:
        return None
    if math.isnan(value):
        return None
    return value


def validate_operands(num1: str | None, num2: str | None) -> tuple[float, float]:
    """Parse both operands or raise ValidationError."""
    a = parse_operand(num1)
    b = parse_operand(num2)
    if a is None or b is None:
        raise ValidationError()
    return a, b
