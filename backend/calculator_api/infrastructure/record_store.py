"""Record Store — async persistence façade over the `operations` table.

Invariants:
    - The store is the ONLY owner of the engine and session factory
    - Every operation before connect() succeeds raises StorageUnavailable
    - Every session auto-rolls-back on exception (no partial commits leak)
    - All SQLAlchemy/driver exceptions mapped to StorageOperationError (core/errors.py)
    - Non-finite floats are written to the JSON columns as null
    - update/delete with no matching record return zero counts, never raise

Design Decisions:
    - connect() opens a real connection and runs create_all: the engine itself is lazy,
      so readiness must be proven by a round-trip, and the table is created on demand
    - Record ids arrive as strings from the URL and are parsed here, so a malformed id
      is a storage fault like any other backend rejection
    - expire_on_commit=False: prevents lazy-load issues in async context
"""

import json
import logging
import math
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator
from uuid import UUID

from sqlalchemy import select, delete, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)

from calculator_api.core.domain_types import OperationId, OperationType
from calculator_api.core.errors import (
    ErrorContext, StorageOperationError, StorageUnavailable,
)
from calculator_api.db.base import Base
from calculator_api.models.operation_record import OperationRecord, UPDATABLE_FIELDS
from calculator_api.schemas.operation import DeleteOutcome, UpdateOutcome

logger = logging.getLogger(__name__)


def _json_safe(value: Any) -> Any:
    """Replace inf/-inf/NaN, which strict JSON backends reject, with None."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_safe(v) for v in value]
    return value


def _dump_json(value: Any) -> str:
    return json.dumps(_json_safe(value), ensure_ascii=False)


class RecordStore:
    """Owns the storage connection and exposes insert/list/update/delete."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self._database_url = database_url
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_connected(self) -> bool:
        return self._session_factory is not None

    def _engine_options(self) -> dict[str, Any]:
        # SQLite uses a static/null pool that rejects sizing arguments
        if self._database_url.startswith("sqlite"):
            return {}
        return {
            "pool_size": self._pool_size,
            "max_overflow": self._max_overflow,
            "pool_pre_ping": True,
            "pool_recycle": 3600,
        }

    async def connect(self) -> None:
        """Open the connection and make sure the operations table exists."""
        if self.is_connected:
            return
        engine: AsyncEngine | None = None
        try:
            engine = create_async_engine(
                self._database_url,
                json_serializer=_dump_json,
                **self._engine_options(),
            )
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (OSError, ImportError, SQLAlchemyError) as e:
            # unknown dialect or missing driver surfaces as ArgumentError / ImportError
            if engine is not None:
                await engine.dispose()
            raise StorageUnavailable(f"Could not connect to storage: {e}") from e
        self._engine = engine
        self._session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False,
        )

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_factory = None

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback and error mapping."""
        if self._session_factory is None:
            raise StorageUnavailable(
                context=ErrorContext(operation=operation),
            )
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            raise StorageOperationError(f"Integrity constraint violated: {e}", operation) from e
        except OperationalError as e:
            await session.rollback()
            raise StorageOperationError(f"Connection or operational error: {e}", operation) from e
        except DBAPIError as e:
            await session.rollback()
            raise StorageOperationError(f"Database driver error: {e}", operation) from e
        except SQLAlchemyError as e:
            await session.rollback()
            raise StorageOperationError(f"Database operation failed: {e}", operation) from e
        finally:
            await session.close()

    @staticmethod
    def _parse_id(record_id: str, operation: str) -> UUID:
        try:
            return UUID(str(record_id))
        except ValueError as e:
            raise StorageOperationError(
                f"Malformed record id '{record_id}'", operation,
                ErrorContext(record_id=str(record_id)),
            ) from e

    async def insert(
        self, operation: OperationType, num1: float, num2: float, result: float,
    ) -> OperationId:
        """Append a record. id and timestamp are assigned here."""
        async with self._session("insert") as db:
            record = OperationRecord(
                operation=operation.value, num1=num1, num2=num2, result=result,
            )
            db.add(record)
            await db.commit()
            return OperationId(record.id)

    async def list_all(self) -> list[OperationRecord]:
        """Every stored record, in storage-native order."""
        async with self._session("query") as db:
            result = await db.execute(select(OperationRecord))
            return list(result.scalars().all())

    async def update_by_id(self, record_id: str, fields: dict[str, Any]) -> UpdateOutcome:
        """Overwrite the given fields. Unknown keys are ignored."""
        rid = self._parse_id(record_id, "update")
        changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
        async with self._session("update") as db:
            record = await db.get(OperationRecord, rid)
            if record is None:
                return UpdateOutcome(matched_count=0, modified_count=0)
            modified = any(getattr(record, k) != v for k, v in changes.items())
            for key, value in changes.items():
                setattr(record, key, value)
            await db.commit()
            return UpdateOutcome(matched_count=1, modified_count=int(modified))

    async def delete_by_id(self, record_id: str) -> DeleteOutcome:
        """Remove the record if present. Absence is not an error."""
        rid = self._parse_id(record_id, "delete")
        async with self._session("delete") as db:
            result = await db.execute(
                delete(OperationRecord).where(OperationRecord.id == rid),
            )
            await db.commit()
            return DeleteOutcome(deleted_count=result.rowcount or 0)

    async def health_check(self) -> bool:
        """Check storage connectivity (for the readiness endpoint)."""
        if not self.is_connected:
            return False
        try:
            async with self._session("health_check") as db:
                await db.execute(text("SELECT 1"))
            return True
        except StorageOperationError as e:
            logger.error(f"Storage health check failed: {e.message}")
            return False
