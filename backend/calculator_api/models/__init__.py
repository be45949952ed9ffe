"""ORM Models — SQLAlchemy declarative models for persisted entities.

Design Decisions:
    - Imported here so Base.metadata knows every table before create_all runs
"""

from calculator_api.models.operation_record import OperationRecord  # noqa: F401
