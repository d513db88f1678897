"""Profile API routes."""

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_profile_service
from api.v1.schemas.common import AvailabilityResponse
from api.v1.schemas.profile import ProfileCreate, ProfileDetailResponse, ProfileResponse
from core.rate_limit import limiter
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get(
    "/availability",
    response_model=AvailabilityResponse,
    summary="Check whether a username is free",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def username_availability(
    request: Request,
    user: CurrentUser,
    username: str = Query(..., min_length=1, max_length=30),
    service: ProfileService = Depends(get_profile_service),
) -> AvailabilityResponse:
    return AvailabilityResponse(data=await service.is_username_available(username))


@router.post(
    "",
    response_model=ProfileDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Complete profile setup",
    responses={
        201: {"description": "Profile created"},
        409: {"description": "Username taken or profile already exists"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_profile(
    request: Request,
    body: ProfileCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Create the caller's profile. The username cannot be changed afterwards."""
    profile = await service.create_profile(
        user,
        username=body.username,
        name=body.name,
        role=body.role,
        bio=body.bio,
        about=body.about,
    )
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.get(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Get your profile",
    responses={404: {"description": "Profile not set up yet"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    profile = await service.get_own_profile(user.id)
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.get(
    "/me/exists",
    response_model=AvailabilityResponse,
    summary="Check whether you completed profile setup",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def has_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> AvailabilityResponse:
    return AvailabilityResponse(data=await service.has_profile(user.id))


@router.delete(
    "/me",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete your profile",
    responses={
        204: {"description": "Profile deleted"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit("5/minute")  # type: ignore[untyped-decorator]
async def delete_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> None:
    """Delete the caller's profile and release the username."""
    await service.delete_profile(user.id)
    return None


@router.get(
    "/{username}",
    response_model=ProfileDetailResponse,
    summary="View a public portfolio",
    responses={404: {"description": "Profile not found or hidden"}},
)
@limiter.limit("60/minute")  # type: ignore[untyped-decorator]
async def get_public_profile(
    request: Request,
    username: str,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Public portfolio lookup; no authentication required."""
    profile = await service.get_public_profile(username)
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))
