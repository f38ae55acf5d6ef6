"""Current-user endpoint."""

from fastapi import APIRouter, Request

from api.dependencies.auth import CurrentUser
from api.schemas.user import UserResponse
from core.rate_limit import limiter

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get(
    "/user",
    response_model=UserResponse,
    summary="Get the authenticated user",
    responses={401: {"description": "Missing, invalid or expired token"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_auth_user(request: Request, user: CurrentUser) -> UserResponse:
    """Return the identity carried by the bearer token."""
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.display_name,
        avatar_url=user.avatar_url,
    )
