"""Profile API routes."""

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser, OptionalUser
from api.dependencies.services import get_profile_service
from api.schemas.profile import ProfileCreate, ProfileResponse, ProfileUpdate
from core.rate_limit import limiter
from domain.entities.profile import Profile
from domain.services.profile_service import ProfileService

router = APIRouter(tags=["profiles"])


def _to_response(profile: Profile) -> ProfileResponse:
    return ProfileResponse.model_validate(profile)


@router.get(
    "/profiles",
    response_model=list[ProfileResponse],
    summary="Search public profiles",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def search_profiles(
    request: Request,
    query: str | None = Query(
        None,
        max_length=200,
        description="Matches first name, last name, role or business name",
    ),
    category: str | None = Query(None, max_length=200, description="Matches role"),
    service: ProfileService = Depends(get_profile_service),
) -> list[ProfileResponse]:
    """
    Search the public directory.

    Both filters are case-insensitive substring matches and combine with AND.
    Without filters every public profile is returned, newest first.
    """
    profiles = await service.search(query=query, category=category)
    return [_to_response(p) for p in profiles]


@router.post(
    "/profiles/generate-ai",
    response_model=ProfileResponse,
    summary="Generate profile text with AI",
    responses={
        404: {"description": "Caller has no profile yet"},
        500: {"description": "Text generation failed; profile unchanged"},
    },
)
@limiter.limit("5/minute")  # type: ignore[untyped-decorator]
async def generate_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """
    Rewrite the caller's about text, summary and skills.

    Uses the caller's preferred profile style. Nothing else on the
    profile is modified.
    """
    profile = await service.generate_about(user.id)
    return _to_response(profile)


@router.get(
    "/profiles/{profile_id}",
    response_model=ProfileResponse,
    summary="Get a profile",
    responses={404: {"description": "Profile not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    profile_id: str,
    viewer: OptionalUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get a single profile. Hidden profiles are only visible to their owner."""
    profile = await service.get_public(profile_id, viewer.id if viewer else None)
    return _to_response(profile)


@router.get(
    "/my-profile",
    response_model=ProfileResponse,
    summary="Get my profile",
    responses={404: {"description": "Caller has no profile yet"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get the authenticated user's own profile."""
    profile = await service.get_for_user(user.id)
    return _to_response(profile)


@router.post(
    "/profiles",
    response_model=ProfileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create my profile",
    responses={
        201: {"description": "Profile created"},
        400: {"description": "Invalid fields or profile already exists"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_profile(
    request: Request,
    body: ProfileCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Create the caller's profile. Each user may own one."""
    profile = await service.create(user.id, body.to_fields())
    return _to_response(profile)


@router.patch(
    "/profiles/{profile_id}",
    response_model=ProfileResponse,
    summary="Update a profile",
    responses={
        403: {"description": "Profile belongs to another user"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_profile(
    request: Request,
    profile_id: str,
    body: ProfileUpdate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Partially update a profile. Omitted fields keep their values."""
    profile = await service.update(profile_id, user.id, body.to_changes())
    return _to_response(profile)


@router.delete(
    "/profiles/{profile_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a profile",
    responses={
        204: {"description": "Profile deleted"},
        403: {"description": "Profile belongs to another user"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_profile(
    request: Request,
    profile_id: str,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> None:
    """Delete a profile the caller owns."""
    await service.delete(profile_id, user.id)
    return None
