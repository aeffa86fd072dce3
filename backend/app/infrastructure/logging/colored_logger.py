"""Colored request logger — ANSI-colored console lines for dispatched requests.

Color scheme:
    🟢 Green   — GET
    🔵 Blue    — POST
    🟡 Yellow  — PUT / PATCH
    🟣 Magenta — DELETE
    🔴 Red     — Failures and errors
    ⚪ Gray    — Timing
"""

import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator

REQUEST_LOGGER_NAME = "nexus.requests"


class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"


_METHOD_COLORS = {
    "GET": _Colors.GREEN,
    "POST": _Colors.BLUE,
    "PUT": _Colors.YELLOW,
    "PATCH": _Colors.YELLOW,
    "DELETE": _Colors.MAGENTA,
}


class RequestOutcome:
    """Mutable holder the caller fills in with the response status."""

    def __init__(self) -> None:
        self.status_code: int | None = None


class RequestLogger:
    """Color-coded access logger for the API transport.

    Usage:
        log = RequestLogger()
        with log.timed_request("POST", "/api/revenue") as outcome:
            result = dispatcher.dispatch(request)
            outcome.status_code = result.status_code
    """

    def __init__(self, name: str = REQUEST_LOGGER_NAME):
        self._logger = logging.getLogger(name)

    def request(self, method: str, path: str, status_code: int, elapsed: float, **kwargs: Any) -> None:
        """Log one completed request, red when the status is 4xx/5xx."""
        color = _METHOD_COLORS.get(method, _Colors.WHITE)
        status_color = _Colors.RED if status_code >= 400 else _Colors.GREEN
        formatted = (
            f"{color}{_Colors.BOLD}{method:<6}{_Colors.RESET} "
            f"{path} {status_color}{status_code}{_Colors.RESET} "
            f"{_Colors.GRAY}{elapsed * 1000:.1f}ms{_Colors.RESET}"
        )
        if kwargs:
            details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
            formatted += f" {_Colors.DIM}({details}){_Colors.RESET}"
        self._logger.info(formatted)

    def error(self, method: str, path: str, error: Exception) -> None:
        """Log an unhandled handler failure with its traceback."""
        self._logger.error(
            f"{_Colors.RED}{_Colors.BOLD}❌ {method} {path}{_Colors.RESET} "
            f"{_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}",
            exc_info=error,
        )

    def banner(self, title: str, lines: list[str]) -> None:
        """Log a startup banner followed by indented lines."""
        self._logger.info(f"{_Colors.BOLD}{title}{_Colors.RESET}")
        for line in lines:
            self._logger.info(f"   {_Colors.GRAY}├─ {line}{_Colors.RESET}")

    @contextmanager
    def timed_request(self, method: str, path: str) -> Iterator[RequestOutcome]:
        """Context manager that logs the request with its elapsed time.

        Exceptions are logged in red and re-raised.
        """
        outcome = RequestOutcome()
        start = time.perf_counter()
        try:
            yield outcome
        except Exception as e:
            self.error(method, path, e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.request(method, path, outcome.status_code or 200, elapsed)
