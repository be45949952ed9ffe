"""OperationRecord ORM — one row per computed arithmetic request.

Invariants:
    - id is a UUID primary key assigned at insert time, never updated
    - timestamp is set once at insert, never regenerated on update
    - operation/num1/num2/result hold any JSON value: updates are forwarded unvalidated

Design Decisions:
    - postgresql UUID(as_uuid=True): native uuid on PostgreSQL, CHAR(32) on SQLite (tests)
    - JSON column per field: a stored record behaves like a document, an update may put
      a string or an object where a number was
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from calculator_api.db.base import Base


UPDATABLE_FIELDS: tuple[str, ...] = ("operation", "num1", "num2", "result")


class OperationRecord(Base):
    """Persisted outcome of one arithmetic request."""
    __tablename__ = "operations"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    operation: Mapped[Any] = mapped_column(JSON, nullable=True)
    num1: Mapped[Any] = mapped_column(JSON, nullable=True)
    num2: Mapped[Any] = mapped_column(JSON, nullable=True)
    result: Mapped[Any] = mapped_column(JSON, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
