"""API Schemas — Pydantic models for request bodies and response payloads."""
