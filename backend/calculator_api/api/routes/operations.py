"""Operation History — list, update and delete persisted records.

Invariants:
    - PUT forwards the body unvalidated; only keys present in the body are written
    - PUT/DELETE on a well-formed but unknown id succeed with zero counts
    - Malformed ids and backend faults surface as 500 via the global handler
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from calculator_api.api.dependencies import get_record_store
from calculator_api.infrastructure.record_store import RecordStore
from calculator_api.schemas.operation import (
    OperationRecordResponse, OperationUpdate, UpdateOutcome,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/operations", tags=["operations"])


@router.get("", response_model=list[OperationRecordResponse])
async def list_operations(store: RecordStore = Depends(get_record_store)):
    """Every stored operation record."""
    return await store.list_all()


@router.put("/{operation_id}", response_model=UpdateOutcome)
async def update_operation(
    operation_id: str,
    body: OperationUpdate,
    store: RecordStore = Depends(get_record_store),
):
    """Overwrite fields of a stored record."""
    outcome = await store.update_by_id(
        operation_id, body.model_dump(exclude_unset=True),
    )
    if not outcome.matched_count:
        logger.info(
            f"Update matched no record for {operation_id}",
            extra={"record_id": operation_id},
        )
    return outcome


@router.delete("/{operation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_operation(
    operation_id: str, store: RecordStore = Depends(get_record_store),
):
    """Delete a stored record. Deleting an absent record still succeeds."""
    outcome = await store.delete_by_id(operation_id)
    logger.info(
        f"Deleted {outcome.deleted_count} record(s) for {operation_id}",
        extra={"record_id": operation_id},
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
