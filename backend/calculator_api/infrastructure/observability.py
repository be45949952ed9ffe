"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, service and message
    - Extra fields (error_code, path, operation, record_id) surfaced when present
    - JSON format in production, human-readable in development
    - With a log_dir: error.log receives ERROR and above, combined.log everything

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging is idempotent: handlers it installed earlier are replaced, not stacked
"""

import logging
import json
from datetime import datetime, timezone
from pathlib import Path

_INSTALLED_MARKER = "_calculator_handler"


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def __init__(self, service: str = "calculator-microservice"):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service,
            "message": record.getMessage(),
        }
        for key in ("error_code", "path", "operation", "record_id"):
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def _build_formatter(fmt: str, service: str) -> logging.Formatter:
    if fmt == "json":
        return JSONFormatter(service)
    return logging.Formatter(
        f"%(asctime)s %(levelname)s [{service}] %(name)s - %(message)s",
    )


def _install(handler: logging.Handler, formatter: logging.Formatter) -> None:
    handler.setFormatter(formatter)
    setattr(handler, _INSTALLED_MARKER, True)
    logging.root.addHandler(handler)


def setup_logging(
    level: str = "INFO",
    fmt: str = "json",
    service: str = "calculator-microservice",
    log_dir: str | None = None,
):
    """Configure logging for the application."""
    for handler in list(logging.root.handlers):
        if getattr(handler, _INSTALLED_MARKER, False):
            logging.root.removeHandler(handler)
            handler.close()

    formatter = _build_formatter(fmt, service)
    _install(logging.StreamHandler(), formatter)

    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        error_handler = logging.FileHandler(path / "error.log", encoding="utf-8")
        error_handler.setLevel(logging.ERROR)
        _install(error_handler, formatter)
        _install(
            logging.FileHandler(path / "combined.log", encoding="utf-8"), formatter,
        )

    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
