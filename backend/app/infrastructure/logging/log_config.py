"""Centralized logging configuration.

Applies per-category log levels from Settings so that noisy loggers
(e.g. the per-request access lines) can be silenced without affecting
other parts of the application.

Usage:
    from app.infrastructure.logging.log_config import setup_logging
    setup_logging(settings)   # Call once at startup (in main.py or lifespan)
"""

import logging
import sys

from app.config import Settings, get_settings
from app.infrastructure.logging.colored_logger import REQUEST_LOGGER_NAME


# ── Logger-name → Settings-field mapping ────────────────────────────

_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_uvicorn": [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
    ],
    "log_level_requests": [
        REQUEST_LOGGER_NAME,
    ],
    "log_level_store": [
        "app.infrastructure.memory",
        "app.application.services.metrics_recalculator",
    ],
}


def setup_logging(settings: Settings | None = None) -> None:
    """Configure Python logging levels from application settings.

    Call this once during startup (e.g. in the FastAPI lifespan) with the
    settings the app was built with. Falls back to the cached settings.
    """
    settings = settings or get_settings()
    root_level = _parse_level(settings.log_level)

    root = logging.getLogger()
    root.setLevel(root_level)

    # uvicorn usually installs a handler; tests and scripts may not
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                "%(levelname)-8s %(name)s — %(message)s",
            )
        )
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        raw_level: str = getattr(settings, settings_field, "INFO")
        level = _parse_level(raw_level)

        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured — root=%s, uvicorn=%s, requests=%s, store=%s",
        settings.log_level,
        settings.log_level_uvicorn,
        settings.log_level_requests,
        settings.log_level_store,
    )


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
