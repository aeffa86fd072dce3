"""Top-level API router — health check first, then the catch-all gateway."""

from fastapi import APIRouter

from app.presentation.api.endpoints.health import router as health_router
from app.presentation.api.endpoints.gateway import router as gateway_router

router = APIRouter()
router.include_router(health_router)
router.include_router(gateway_router)
