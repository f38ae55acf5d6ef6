"""API router configuration."""

from typing import Any

from fastapi import APIRouter

from api.routes.auth import router as auth_router
from api.routes.health import router as health_router
from api.routes.profiles import router as profiles_router
from api.routes.settings import router as settings_router
from api.schemas.common import ErrorResponse

# Documented error shape for every protected or validated route
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Validation failed or profile already exists"},
    401: {"model": ErrorResponse, "description": "Missing, invalid or expired token"},
    429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
}

router = APIRouter()
router.include_router(health_router)
router.include_router(auth_router, responses=ERROR_RESPONSES)
router.include_router(profiles_router, responses=ERROR_RESPONSES)
router.include_router(settings_router, responses=ERROR_RESPONSES)
