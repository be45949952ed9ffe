"""Lifecycle Coordinator — storage readiness gates the network listener.

Invariants:
    - States: DISCONNECTED -> CONNECTING -> READY, or CONNECTING -> FAILED
    - The transition out of DISCONNECTED happens exactly once per coordinator
    - serve() starts the listener exactly once, and only after READY
    - A failed connection is logged, the listener is never started, nothing is retried

Design Decisions:
    - Listener passed in as an awaitable factory (uvicorn.Server.serve in production):
      the coordinator owns ordering, not the transport
    - ensure_ready() for ASGI lifespan: an external server (uvicorn CLI) runs the
      lifespan before binding its socket, so raising here keeps it from listening
"""

import logging
from enum import Enum
from typing import Awaitable, Callable

from calculator_api.core.errors import StorageUnavailable
from calculator_api.infrastructure.record_store import RecordStore

logger = logging.getLogger(__name__)


class LifecycleState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    READY = "ready"
    FAILED = "failed"


class LifecycleCoordinator:
    """Sequences "connect to storage" before "accept network connections"."""

    def __init__(self, store: RecordStore):
        self._store = store
        self.state = LifecycleState.DISCONNECTED

    @property
    def is_ready(self) -> bool:
        return self.state is LifecycleState.READY

    async def connect(self) -> bool:
        """One-time storage connection. Returns True once READY."""
        if self.state is not LifecycleState.DISCONNECTED:
            return self.is_ready
        self.state = LifecycleState.CONNECTING
        try:
            await self._store.connect()
        except StorageUnavailable as e:
            self.state = LifecycleState.FAILED
            logger.error(
                f"Error connecting to storage: {e.message}",
                extra={"error_code": e.code},
            )
            return False
        self.state = LifecycleState.READY
        logger.info("Connected to storage")
        return True

    async def ensure_ready(self) -> None:
        """Connect if nobody has yet; raise if storage never became ready."""
        if not await self.connect():
            raise StorageUnavailable(
                f"Storage not ready (lifecycle state: {self.state.value})",
            )

    async def serve(self, listener: Callable[[], Awaitable[None]]) -> bool:
        """Connect, then run the listener. Returns False if storage failed."""
        if not await self.connect():
            logger.error("Storage never became ready; listener not started")
            return False
        try:
            await listener()
        finally:
            await self.shutdown()
        return True

    async def shutdown(self) -> None:
        """Release the storage connection. Safe to call more than once."""
        if self._store.is_connected:
            await self._store.close()
            logger.info("Storage connection closed")
