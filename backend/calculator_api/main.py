"""Calculator API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CalculatorError → {"error": ...} JSON responses
    - The record store and lifecycle coordinator live on app.state, one pair per app
    - The listener starts only after the coordinator reports READY, exactly once

Design Decisions:
    - App factory + module-level app: tests build isolated apps, `uvicorn calculator_api.main:app` still works
    - Lifespan over @app.on_event: under an external ASGI server the lifespan runs before
      the socket is bound, so ensure_ready() failing keeps the server from listening
    - run() drives uvicorn.Server through coordinator.serve(): storage first, then the listener
"""

import asyncio
import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from calculator_api.api.error_handlers import register_error_handlers
from calculator_api.api.routes import health, arithmetic, operations
from calculator_api.config import Settings, get_settings
from calculator_api.infrastructure.lifecycle import LifecycleCoordinator
from calculator_api.infrastructure.observability import setup_logging
from calculator_api.infrastructure.record_store import RecordStore

logger = logging.getLogger(__name__)


def _configure_logging(settings: Settings) -> None:
    setup_logging(
        settings.log_level, settings.log_format,
        service=settings.service_name, log_dir=settings.log_dir or None,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    _configure_logging(app.state.settings)
    coordinator: LifecycleCoordinator = app.state.lifecycle
    await coordinator.ensure_ready()
    logger.info("Calculator API started")
    yield
    logger.info("Calculator API shutting down")
    await coordinator.shutdown()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI app with its own (not yet connected) record store."""
    settings = settings or get_settings()
    app = FastAPI(
        title="Calculator Microservice", version="1.0.0", lifespan=lifespan,
    )
    store = RecordStore(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.settings = settings
    app.state.record_store = store
    app.state.lifecycle = LifecycleCoordinator(store)

    app.include_router(health.router)
    app.include_router(arithmetic.router)
    app.include_router(operations.router)

    register_error_handlers(app)
    return app


app = create_app()


async def serve(settings: Settings, application: FastAPI | None = None) -> bool:
    """Connect storage, then run the HTTP listener. False if storage failed."""
    application = application or create_app(settings)
    server = uvicorn.Server(uvicorn.Config(
        application, host=settings.host, port=settings.port,
        lifespan="on", log_config=None,
    ))

    async def listen() -> None:
        logger.info(
            f"Calculator microservice running at http://{settings.host}:{settings.port}",
        )
        await server.serve()

    return await application.state.lifecycle.serve(listen)


def run() -> None:
    """Console entry point."""
    settings = get_settings()
    _configure_logging(settings)
    if not asyncio.run(serve(settings, app)):
        sys.exit(1)


if __name__ == "__main__":
    run()
