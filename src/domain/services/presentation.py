"""Presentation descriptors for links.

Pure lookups from entity attributes to what a page should draw. Every lookup
has a fallback, so these functions accept any value without raising.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum
from typing import Any

from domain.entities.link import (
    CURRENCY_SYMBOLS,
    Currency,
    GradientStyle,
    Link,
    LinkCategory,
    LinkKind,
    normalize_price,
)


class Icon(StrEnum):
    """Icon names as understood by the front end's icon set."""

    GLOBE = "globe"
    INSTAGRAM = "instagram"
    TWITTER = "twitter"
    YOUTUBE = "youtube"
    VIDEO = "video"
    LINKEDIN = "linkedin"
    GITHUB = "github"
    FACEBOOK = "facebook"
    TWITCH = "twitch"
    MESSAGE_CIRCLE = "message-circle"
    MUSIC = "music"
    SMARTPHONE = "smartphone"
    SHOPPING_CART = "shopping-cart"
    LINK = "link"
    PRODUCT = "shopping-bag"


class ColorTreatment(StrEnum):
    """Card styles. Values are the CSS classes applied to the card."""

    NEUTRAL = "card-neutral"
    VIOLET = "link-gradient-1"
    ROSE = "link-gradient-2"
    TEAL = "link-gradient-3"
    AMBER = "link-gradient-4"


CATEGORY_ICONS: dict[LinkCategory, Icon] = {
    LinkCategory.WEBSITE: Icon.GLOBE,
    LinkCategory.INSTAGRAM: Icon.INSTAGRAM,
    LinkCategory.TWITTER: Icon.TWITTER,
    LinkCategory.X: Icon.TWITTER,
    LinkCategory.YOUTUBE: Icon.YOUTUBE,
    LinkCategory.TIKTOK: Icon.VIDEO,
    LinkCategory.LINKEDIN: Icon.LINKEDIN,
    LinkCategory.GITHUB: Icon.GITHUB,
    LinkCategory.FACEBOOK: Icon.FACEBOOK,
    LinkCategory.TWITCH: Icon.TWITCH,
    LinkCategory.DISCORD: Icon.MESSAGE_CIRCLE,
    LinkCategory.SPOTIFY: Icon.MUSIC,
    LinkCategory.APPLE: Icon.SMARTPHONE,
    LinkCategory.GOOGLE: Icon.GLOBE,
    LinkCategory.AMAZON: Icon.SHOPPING_CART,
}

GRADIENT_TREATMENTS: dict[GradientStyle, ColorTreatment] = {
    GradientStyle.GRADIENT_1: ColorTreatment.VIOLET,
    GradientStyle.GRADIENT_2: ColorTreatment.ROSE,
    GradientStyle.GRADIENT_3: ColorTreatment.TEAL,
    GradientStyle.GRADIENT_4: ColorTreatment.AMBER,
}

SOCIAL_ICONS: dict[str, Icon] = {
    "instagram": Icon.INSTAGRAM,
    "twitter": Icon.TWITTER,
    "x": Icon.TWITTER,
    "youtube": Icon.YOUTUBE,
    "github": Icon.GITHUB,
    "linkedin": Icon.LINKEDIN,
    "facebook": Icon.FACEBOOK,
    "twitch": Icon.TWITCH,
    "website": Icon.GLOBE,
}


@dataclass(frozen=True)
class Presentation:
    icon: Icon
    color_treatment: ColorTreatment
    price_label: str | None = None
    dimmed: bool = False


def select_icon(kind: Any, link_type: Any) -> Icon:
    if kind == LinkKind.PRODUCT:
        return Icon.PRODUCT
    # OTHER and anything unrecognised share the generic link icon
    return CATEGORY_ICONS.get(LinkCategory.parse(link_type), Icon.LINK)


def select_color_treatment(gradient_style: Any) -> ColorTreatment:
    return GRADIENT_TREATMENTS.get(GradientStyle.parse(gradient_style), ColorTreatment.NEUTRAL)


def format_price(price: Decimal | float | None, currency: Any) -> str | None:
    """Display price such as ``$12.50``; None when there is nothing to show."""
    if price is None:
        return None
    try:
        amount = normalize_price(price)
    except ValueError:
        return None
    try:
        symbol = CURRENCY_SYMBOLS[Currency(currency)]
    except ValueError:
        symbol = CURRENCY_SYMBOLS[Currency.USD]
    return f"{symbol}{amount}"


def select_presentation(link: Link) -> Presentation:
    """Describe how a link is drawn on both the dashboard and the public page."""
    is_product = link.type == LinkKind.PRODUCT
    return Presentation(
        icon=select_icon(link.type, link.link_type),
        color_treatment=select_color_treatment(link.gradient_style),
        price_label=format_price(link.price, link.currency) if is_product else None,
        dimmed=not link.is_active,
    )


def select_social_icon(platform: Any) -> Icon:
    """Icon for a social link, keyed by the case-folded platform name."""
    if not isinstance(platform, str):
        return Icon.GLOBE
    return SOCIAL_ICONS.get(platform.strip().lower(), Icon.GLOBE)
