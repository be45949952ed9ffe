"""Infrastructure — the imperative shell: storage, lifecycle, logging.

Invariants:
    - Only record_store.py touches SQLAlchemy engines and sessions
"""
