"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or write log files
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("LOG_DIR", "")
