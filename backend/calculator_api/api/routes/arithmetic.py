"""Arithmetic Endpoints — validate, compute, persist, respond.

Invariants:
    - Invalid operands and zero divisors raise before the store is touched
    - The record is persisted (awaited) before the response is built, so a caller
      that sees 200 can immediately find the record under /operations
"""

import logging

from fastapi import APIRouter, Depends

from calculator_api.api.dependencies import get_record_store
from calculator_api.core.arithmetic import evaluate
from calculator_api.core.domain_types import OperationType
from calculator_api.core.validate_operands import validate_operands
from calculator_api.infrastructure.record_store import RecordStore
from calculator_api.schemas.operation import ArithmeticResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["arithmetic"])


async def compute_and_record(
    operation: OperationType,
    num1: str | None,
    num2: str | None,
    store: RecordStore,
) -> ArithmeticResponse:
    """Shared pipeline for the four arithmetic endpoints."""
    a, b = validate_operands(num1, num2)
    result = evaluate(operation, a, b)
    logger.info(
        f"{operation.value.capitalize()} requested: {a} {operation.symbol} {b} = {result}",
        extra={"operation": operation.value},
    )
    await store.insert(operation, a, b, result)
    return ArithmeticResponse(operation=operation, result=result)


@router.get("/add", response_model=ArithmeticResponse)
async def add(
    num1: str | None = None, num2: str | None = None,
    store: RecordStore = Depends(get_record_store),
):
    return await compute_and_record(OperationType.ADDITION, num1, num2, store)


@router.get("/subtract", response_model=ArithmeticResponse)
async def subtract(
    num1: str | None = None, num2: str | None = None,
    store: RecordStore = Depends(get_record_store),
):
    return await compute_and_record(OperationType.SUBTRACTION, num1, num2, store)


@router.get("/multiply", response_model=ArithmeticResponse)
async def multiply(
    num1: str | None = None, num2: str | None = None,
    store: RecordStore = Depends(get_record_store),
):
    return await compute_and_record(OperationType.MULTIPLICATION, num1, num2, store)


@router.get("/divide", response_model=ArithmeticResponse)
async def divide(
    num1: str | None = None, num2: str | None = None,
    store: RecordStore = Depends(get_record_store),
):
    return await compute_and_record(OperationType.DIVISION, num1, num2, store)
