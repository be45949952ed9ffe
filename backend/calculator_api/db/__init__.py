"""Database Infrastructure — SQLAlchemy Base shared by the ORM models.

Invariants:
    - Single async engine per process, owned by the record store
"""
