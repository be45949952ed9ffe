"""Calculator Microservice — arithmetic over HTTP with a persisted operation history.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
