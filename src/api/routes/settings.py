"""Settings API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_settings_service
from api.schemas.settings import SettingsResponse, SettingsUpdate
from core.rate_limit import limiter
from domain.services.settings_service import SettingsService

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=SettingsResponse, summary="Get my settings")
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_my_settings(
    request: Request,
    user: CurrentUser,
    service: SettingsService = Depends(get_settings_service),
) -> SettingsResponse:
    """Get the caller's settings. Defaults are stored on first access."""
    user_settings = await service.get_or_create(user.id)
    return SettingsResponse.model_validate(user_settings)


@router.patch("", response_model=SettingsResponse, summary="Update my settings")
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_my_settings(
    request: Request,
    body: SettingsUpdate,
    user: CurrentUser,
    service: SettingsService = Depends(get_settings_service),
) -> SettingsResponse:
    """Partially update the caller's settings."""
    user_settings = await service.update(user.id, body.to_changes())
    return SettingsResponse.model_validate(user_settings)
