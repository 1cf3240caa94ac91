"""Pydantic schemas for the public profile page."""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel

from api.v1.schemas.link import PresentationResponse
from domain.entities.link import LinkKind
from domain.entities.profile import BackgroundStyle, Theme


class PublicProfile(BaseModel):
    username: str
    title: str
    initial: str
    display_name: str | None
    bio: str | None
    avatar_url: str | None
    theme: Theme
    background_style: BackgroundStyle
    background_color: str | None


class PublicLink(BaseModel):
    id: UUID
    title: str
    url: str
    type: LinkKind
    price: Decimal | None
    image_url: str | None
    presentation: PresentationResponse


class SocialLinkResponse(BaseModel):
    id: UUID
    platform: str
    url: str
    position: int
    icon: str


class SocialLinkListResponse(BaseModel):
    data: list[SocialLinkResponse]


class PublicPage(BaseModel):
    profile: PublicProfile
    links: list[PublicLink]
    social_links: list[SocialLinkResponse]


class PublicPageResponse(BaseModel):
    """Schema for the public page at /{username}."""

    data: PublicPage
