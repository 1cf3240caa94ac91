"""Profile API routes (dashboard)."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_profile_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.profile import ProfileDetailResponse, ProfileResponse, ProfileUpdate
from api.v1.schemas.public import SocialLinkListResponse, SocialLinkResponse
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.presentation import select_social_icon
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/me", tags=["profile"])


@router.get(
    "/profile",
    response_model=ProfileDetailResponse,
    summary="Get (or create) the caller's profile",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """
    Get the caller's profile.

    The first call creates it with a username derived from the account email.
    """
    profile = await service.get_or_create_for_user(user.id, user.email)
    return ProfileDetailResponse(data=ProfileResponse.model_validate(profile))


@router.patch(
    "/profile",
    response_model=ProfileDetailResponse,
    summary="Update the caller's profile",
    responses={
        400: {"model": ErrorResponse, "description": "Field validation failed"},
        404: {"model": ErrorResponse, "description": "Profile not found"},
        409: {"model": ErrorResponse, "description": "Username already taken"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_my_profile(
    request: Request,
    body: ProfileUpdate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Partially update the profile. Usernames are lowercased before checking."""
    profile = await service.update_profile(user.id, body.model_dump(exclude_unset=True))
    return ProfileDetailResponse(data=ProfileResponse.model_validate(profile))


@router.get(
    "/social-links",
    response_model=SocialLinkListResponse,
    summary="List the caller's social links",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_my_social_links(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> SocialLinkListResponse:
    """Social icons shown under the profile header, in display order."""
    social_links = await service.get_social_links(user.id)
    return SocialLinkListResponse(
        data=[
            SocialLinkResponse(
                id=s.id,
                platform=s.platform,
                url=s.url,
                position=s.position,
                icon=select_social_icon(s.platform).value,
            )
            for s in social_links
        ]
    )
