"""Link domain entity.

A link is one entry on a profile page: either a plain link or a priced
product. ``type`` is fixed at creation; the product-only fields (price and
currency) carry no meaning on plain links.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import StrEnum
from typing import Any
from urllib.parse import urlparse
from uuid import UUID, uuid4

from domain.entities.validation import FieldError, raise_for_errors

PRICE_QUANTUM = Decimal("0.01")


class LinkKind(StrEnum):
    LINK = "link"
    PRODUCT = "product"


class LinkCategory(StrEnum):
    """Category tag for plain links. Only selects the display icon."""

    WEBSITE = "website"
    INSTAGRAM = "instagram"
    TWITTER = "twitter"
    X = "x"
    YOUTUBE = "youtube"
    TIKTOK = "tiktok"
    LINKEDIN = "linkedin"
    GITHUB = "github"
    FACEBOOK = "facebook"
    TWITCH = "twitch"
    DISCORD = "discord"
    SPOTIFY = "spotify"
    APPLE = "apple"
    GOOGLE = "google"
    AMAZON = "amazon"
    OTHER = "other"

    @classmethod
    def parse(cls, value: "str | LinkCategory | None") -> "LinkCategory":
        """Map any value onto a category; unknown or empty values become OTHER."""
        if not value:
            return cls.OTHER
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OTHER


class GradientStyle(StrEnum):
    NONE = "none"
    GRADIENT_1 = "gradient-1"
    GRADIENT_2 = "gradient-2"
    GRADIENT_3 = "gradient-3"
    GRADIENT_4 = "gradient-4"

    @classmethod
    def parse(cls, value: "str | GradientStyle | None") -> "GradientStyle":
        """Map any value onto a style; unknown or empty values become NONE."""
        if not value:
            return cls.NONE
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.NONE


class Currency(StrEnum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    JPY = "JPY"


CURRENCY_SYMBOLS: dict[Currency, str] = {
    Currency.USD: "$",
    Currency.EUR: "€",
    Currency.GBP: "£",
    Currency.JPY: "¥",
}


@dataclass
class Link:
    """Domain entity for a link or product on a profile page."""

    profile_id: UUID
    title: str
    url: str
    id: UUID = field(default_factory=uuid4)
    type: LinkKind = LinkKind.LINK
    link_type: LinkCategory = LinkCategory.WEBSITE
    price: Decimal | None = None
    currency: Currency | None = Currency.USD
    image_url: str | None = None
    gradient_style: GradientStyle = GradientStyle.NONE
    position: int = 0
    is_active: bool = True
    clicks: int = 0
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_product(self) -> bool:
        return self.type == LinkKind.PRODUCT

    def set_active(self, is_active: bool) -> None:
        """Show or hide the link on the public page. Position is untouched."""
        self.is_active = is_active
        self.updated_at = datetime.utcnow()

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at


@dataclass
class PositionChange:
    """New position for one link, produced by the ordering engine."""

    link_id: UUID
    old_position: int
    new_position: int


def normalize_price(value: Any) -> Decimal:
    """Convert a price to a Decimal with two decimal places.

    Raises ValueError when the value is not a finite number.
    """
    try:
        price = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Not a number: {value!r}") from exc
    if not price.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    try:
        return price.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"Price out of range: {value!r}") from exc


def is_valid_url(url: str) -> bool:
    """Absolute http(s) URL with a host."""
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_link(fields: Mapping[str, Any], partial: bool = False) -> list[FieldError]:
    """Validate link fields.

    With ``partial=True`` only the keys present are checked, which is what a
    PATCH-style update needs. Price and currency are skipped entirely on plain
    links since they are dropped before saving.
    """
    errors: list[FieldError] = []

    for name in ("title", "url"):
        if partial and name not in fields:
            continue
        value = fields.get(name)
        if value is None or not str(value).strip():
            errors.append(FieldError(name, "required"))
        elif name == "url" and not is_valid_url(str(value)):
            errors.append(FieldError("url", "format"))

    kind = fields.get("type", LinkKind.LINK)
    if kind not in {k.value for k in LinkKind}:
        errors.append(FieldError("type", "unsupported"))
    elif kind == LinkKind.PRODUCT:
        price = fields.get("price")
        if price is not None:
            try:
                normalize_price(price)
            except ValueError:
                errors.append(FieldError("price", "format"))
            else:
                # Sign is checked before rounding: -0.004 is still negative
                if Decimal(str(price)) < 0:
                    errors.append(FieldError("price", "negative"))

        currency = fields.get("currency")
        if currency is not None and currency not in {c.value for c in Currency}:
            errors.append(FieldError("currency", "unsupported"))

    return errors


def ensure_valid_link(fields: Mapping[str, Any], partial: bool = False) -> None:
    raise_for_errors(validate_link(fields, partial=partial))
