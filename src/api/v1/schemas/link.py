"""Pydantic schemas for Link API."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.link import Currency, GradientStyle, LinkCategory, LinkKind


class LinkCreate(BaseModel):
    """Schema for creating a Link.

    ``price`` and ``currency`` are only kept for products.
    """

    title: str = Field(..., max_length=255)
    url: str = Field(..., max_length=2048)
    type: LinkKind = LinkKind.LINK
    link_type: LinkCategory = LinkCategory.WEBSITE
    price: Decimal | None = None
    currency: Currency = Currency.USD
    image_url: str | None = Field(None, max_length=500)
    gradient_style: GradientStyle = GradientStyle.NONE
    is_active: bool = True


class LinkUpdate(BaseModel):
    """Schema for updating a Link (all fields optional).

    Sending a ``type`` different from the stored one is rejected.
    """

    title: str | None = Field(None, max_length=255)
    url: str | None = Field(None, max_length=2048)
    type: LinkKind | None = None
    link_type: LinkCategory | None = None
    price: Decimal | None = None
    currency: Currency | None = None
    image_url: str | None = Field(None, max_length=500)
    gradient_style: GradientStyle | None = None
    is_active: bool | None = None


class LinkActiveUpdate(BaseModel):
    """Schema for toggling visibility."""

    is_active: bool


class LinkMove(BaseModel):
    """Schema for dragging one link to a new index."""

    index: int = Field(..., ge=0)


class LinkOrder(BaseModel):
    """Schema for committing a complete order."""

    link_ids: list[UUID] = Field(..., min_length=1)


class PresentationResponse(BaseModel):
    """How a card is drawn."""

    icon: str
    color_treatment: str
    price_label: str | None = None
    dimmed: bool = False


class LinkResponse(BaseModel):
    """Schema for Link response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "profile_id": "456e4567-e89b-12d3-a456-426614174000",
                "title": "Mug",
                "url": "https://shop.example.com/mug",
                "type": "product",
                "link_type": "website",
                "price": "12.50",
                "currency": "USD",
                "image_url": None,
                "gradient_style": "gradient-2",
                "position": 1,
                "is_active": True,
                "clicks": 0,
                "created_at": "2026-01-28T10:00:00",
                "updated_at": "2026-01-28T10:00:00",
                "presentation": {
                    "icon": "shopping-bag",
                    "color_treatment": "link-gradient-2",
                    "price_label": "$12.50",
                    "dimmed": False,
                },
            }
        },
    )

    id: UUID
    profile_id: UUID
    title: str
    url: str
    type: LinkKind
    link_type: LinkCategory
    price: Decimal | None
    currency: Currency | None
    image_url: str | None
    gradient_style: GradientStyle
    position: int
    is_active: bool
    clicks: int
    created_at: datetime
    updated_at: datetime
    presentation: PresentationResponse


class LinkListResponse(BaseModel):
    """Schema for list of Links response."""

    data: list[LinkResponse]
    meta: dict[str, int] = Field(default_factory=dict)


class LinkDetailResponse(BaseModel):
    """Schema for single Link response."""

    data: LinkResponse
