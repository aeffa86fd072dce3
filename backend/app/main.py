"""FastAPI application factory."""

import logging
import time
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, get_settings
from app.application.services import Dispatcher, MetricsRecalculator
from app.infrastructure.logging.colored_logger import RequestLogger
from app.infrastructure.logging.log_config import setup_logging
from app.infrastructure.memory import (
    InMemoryRecordStore,
    new_id,
    sample_metrics,
    sample_products,
    sample_revenue,
    sample_transactions,
)
from app.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


def build_record_store(settings: Settings) -> InMemoryRecordStore:
    """Create the process-wide record store, seeded unless disabled."""
    if not settings.seed_sample_data:
        return InMemoryRecordStore(
            id_factory=new_id,
            transaction_seq_start=settings.transaction_seq_start,
        )

    return InMemoryRecordStore(
        metrics=sample_metrics(),
        revenue=sample_revenue(new_id),
        products=sample_products(new_id),
        transactions=sample_transactions(),
        id_factory=new_id,
        transaction_seq_start=settings.transaction_seq_start,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging and announce the routes."""
    settings: Settings = app.state.settings
    setup_logging(settings)

    RequestLogger().banner(
        f"🚀  {settings.app_title} on http://{settings.host}:{settings.port}/api",
        [f"{method:<6} {template}" for method, template in Dispatcher.route_table()]
        + ["GET    /api/health"],
    )
    logger.info("Record store ready: %s", app.state.record_store.counts())

    yield

    logger.info("Shutting down — in-memory data is discarded")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application.

    Each call owns a fresh record store, so tests can build isolated apps.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.state.settings = settings
    store = build_record_store(settings)
    app.state.record_store = store
    app.state.dispatcher = Dispatcher(store, MetricsRecalculator(store))
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=_settings.host,
        port=_settings.port,
    )
