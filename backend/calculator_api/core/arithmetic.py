"""Arithmetic Evaluation — the four operations behind the calculator endpoints.

Invariants:
    - Operands are already validated floats
    - divide() rejects a zero divisor (0.0 and -0.0) instead of returning inf/NaN
    - No other error conditions: overflow follows IEEE-754 (inf), never raises

Design Decisions:
    - Dispatch table keyed by OperationType: routes stay one-liners, one place to extend
"""

from typing import Callable

from calculator_api.core.domain_types import OperationType
from calculator_api.core.errors import DivisionByZeroError


def add(num1: float, num2: float) -> float:
    return num1 + num2


def subtract(num1: float, num2: float) -> float:
    return num1 - num2


def multiply(num1: float, num2: float) -> float:
    return num1 * num2


def divide(num1: float, num2: float) -> float:
    if num2 == 0:
        raise DivisionByZeroError()
    return num1 / num2


OPERATIONS: dict[OperationType, Callable[[float, float], float]] = {
    OperationType.ADDITION: add,
    OperationType.SUBTRACTION: subtract,
    OperationType.MULTIPLICATION: multiply,
    OperationType.DIVISION: divide,
}


def evaluate(operation: OperationType, num1: float, num2: float) -> float:
    """Apply `operation` to the operands."""
    return OPERATIONS[operation](num1, num2)
