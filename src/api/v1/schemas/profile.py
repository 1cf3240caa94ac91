"""Pydantic schemas for Profile API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.profile import BackgroundStyle, Theme


class ProfileUpdate(BaseModel):
    """Schema for updating the caller's profile (all fields optional).

    Username format and bio length are checked by the domain so the error
    names the offending field.
    """

    username: str | None = Field(None, max_length=64)
    display_name: str | None = Field(None, max_length=100)
    bio: str | None = None
    avatar_url: str | None = Field(None, max_length=500)
    theme: Theme | None = None
    background_style: BackgroundStyle | None = None
    background_color: str | None = Field(None, max_length=20)


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user_id": "9b2f0f64-5f1c-4d4f-9a0e-0c3f1a4b7e21",
                "username": "jane_k3x9",
                "display_name": "Jane",
                "bio": "Maker of mugs",
                "avatar_url": None,
                "theme": "light",
                "background_style": "solid",
                "background_color": None,
                "created_at": "2026-01-28T10:00:00",
                "updated_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    user_id: UUID
    username: str
    display_name: str | None
    bio: str | None
    avatar_url: str | None
    theme: Theme
    background_style: BackgroundStyle
    background_color: str | None
    created_at: datetime
    updated_at: datetime


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile response."""

    data: ProfileResponse
