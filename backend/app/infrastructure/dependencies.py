"""FastAPI dependency injection — hands the app-owned core objects to endpoints."""

from fastapi import Request

from app.application.interfaces import RecordStore
from app.application.services import Dispatcher


def get_record_store(request: Request) -> RecordStore:
    """Provides the record store created by the application factory."""
    return request.app.state.record_store


def get_dispatcher(request: Request) -> Dispatcher:
    """Provides the dispatcher wired to the application's record store."""
    return request.app.state.dispatcher
