"""SQLAlchemy ORM models."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class ProfileModel(Base):
    """Public page owner, one per auth user."""

    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint("theme IN ('light', 'dark', 'auto')", name="ck_profiles_theme"),
        CheckConstraint(
            "background_style IN ('solid', 'gradient', 'dots')",
            name="ck_profiles_background_style",
        ),
    )

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    user_id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), nullable=False, unique=True)
    username: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    display_name: Mapped[str | None] = mapped_column(String(100))
    bio: Mapped[str | None] = mapped_column(String(200))
    avatar_url: Mapped[str | None] = mapped_column(String(500))
    theme: Mapped[str] = mapped_column(String(10), nullable=False, default="light")
    background_style: Mapped[str] = mapped_column(String(10), nullable=False, default="solid")
    background_color: Mapped[str | None] = mapped_column(String(20))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    # Relationships
    links: Mapped[list["LinkModel"]] = relationship(
        "LinkModel",
        back_populates="profile",
        cascade="all, delete-orphan",
    )
    social_links: Mapped[list["SocialLinkModel"]] = relationship(
        "SocialLinkModel",
        back_populates="profile",
        cascade="all, delete-orphan",
    )


class LinkModel(Base):
    """Link or product shown on a profile page."""

    __tablename__ = "links"
    __table_args__ = (
        CheckConstraint("type IN ('link', 'product')", name="ck_links_type"),
        CheckConstraint("price IS NULL OR price >= 0", name="ck_links_price_non_negative"),
        CheckConstraint("position >= 0", name="ck_links_position_non_negative"),
        Index("ix_links_profile_position", "profile_id", "position"),
    )

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    profile_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(10), nullable=False, default="link")
    link_type: Mapped[str | None] = mapped_column(String(20), default="website")
    price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    currency: Mapped[str | None] = mapped_column(String(3))
    image_url: Mapped[str | None] = mapped_column(String(500))
    gradient_style: Mapped[str] = mapped_column(String(20), nullable=False, default="none")
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    clicks: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    # Relationships
    profile: Mapped["ProfileModel"] = relationship("ProfileModel", back_populates="links")


class SocialLinkModel(Base):
    """Platform icon link under the profile header."""

    __tablename__ = "social_links"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    profile_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    platform: Mapped[str] = mapped_column(String(50), nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Relationships
    profile: Mapped["ProfileModel"] = relationship("ProfileModel", back_populates="social_links")
