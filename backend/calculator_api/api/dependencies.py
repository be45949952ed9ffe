"""Request Dependencies — hand the app-owned record store and coordinator to routes.

Invariants:
    - Routes never import a module-level store; they receive the one on app.state
"""

from fastapi import Request

from calculator_api.infrastructure.lifecycle import LifecycleCoordinator
from calculator_api.infrastructure.record_store import RecordStore


def get_record_store(request: Request) -> RecordStore:
    """FastAPI dependency for the record store."""
    return request.app.state.record_store


def get_lifecycle(request: Request) -> LifecycleCoordinator:
    """FastAPI dependency for the lifecycle coordinator."""
    return request.app.state.lifecycle
