"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Failures leave as {"error": ...} JSON; /health and DELETE success are the only non-JSON bodies

Design Decisions:
    - Thin routes: validation and arithmetic live in core/, persistence in the record store
"""
