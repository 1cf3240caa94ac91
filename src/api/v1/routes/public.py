"""Public profile page route."""

from fastapi import APIRouter, Depends, Request

from api.v1.dependencies import get_profile_service
from api.v1.schemas.common import ErrorResponse
from api.v1.routes.links import build_presentation
from api.v1.schemas.public import (
    PublicLink,
    PublicPage,
    PublicPageResponse,
    PublicProfile,
    SocialLinkResponse,
)
from core.rate_limit import PUBLIC_READ_LIMIT, limiter
from domain.services.presentation import select_social_icon
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/public", tags=["public"])


@router.get(
    "/{username}",
    response_model=PublicPageResponse,
    summary="Public profile page",
    responses={404: {"model": ErrorResponse, "description": "No profile with this username"}},
)
@limiter.limit(PUBLIC_READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_public_page(
    request: Request,
    username: str,
    service: ProfileService = Depends(get_profile_service),
) -> PublicPageResponse:
    """
    Resolve a public page. No authentication required.

    Username lookup is case-insensitive. Only active links are returned.
    """
    page = await service.get_public_page(username)
    profile = page.profile
    return PublicPageResponse(
        data=PublicPage(
            profile=PublicProfile(
                username=profile.username,
                title=profile.title,
                initial=profile.initial,
                display_name=profile.display_name,
                bio=profile.bio,
                avatar_url=profile.avatar_url,
                theme=profile.theme,
                background_style=profile.background_style,
                background_color=profile.background_color,
            ),
            links=[
                PublicLink(
                    id=link.id,
                    title=link.title,
                    url=link.url,
                    type=link.type,
                    price=link.price if link.is_product else None,
                    image_url=link.image_url,
                    presentation=build_presentation(link),
                )
                for link in page.links
            ],
            social_links=[
                SocialLinkResponse(
                    id=s.id,
                    platform=s.platform,
                    url=s.url,
                    position=s.position,
                    icon=select_social_icon(s.platform).value,
                )
                for s in page.social_links
            ],
        )
    )
