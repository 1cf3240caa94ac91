"""Unit tests for link validation and price normalization."""

from decimal import Decimal
from uuid import uuid4

import pytest

from core.exceptions import FieldValidationError
from domain.entities.link import (
    GradientStyle,
    Link,
    LinkCategory,
    LinkKind,
    ensure_valid_link,
    is_valid_url,
    normalize_price,
    validate_link,
)


def _reasons(errors) -> dict[str, str]:
    return {e.field: e.reason for e in errors}


class TestValidateLink:
    def test_valid_plain_link(self):
        assert validate_link({"title": "Blog", "url": "https://blog.example.com"}) == []

    def test_title_and_url_required(self):
        errors = validate_link({"title": "  ", "url": ""})
        assert _reasons(errors) == {"title": "required", "url": "required"}

    @pytest.mark.parametrize("url", ["not a url", "ftp://example.com", "https://", "example.com"])
    def test_url_must_be_absolute_http(self, url):
        errors = validate_link({"title": "x", "url": url})
        assert _reasons(errors) == {"url": "format"}

    def test_unknown_type_rejected(self):
        errors = validate_link({"title": "x", "url": "https://a.io", "type": "coupon"})
        assert _reasons(errors) == {"type": "unsupported"}

    def test_negative_product_price_rejected(self):
        errors = validate_link(
            {"title": "Mug", "url": "https://a.io", "type": "product", "price": "-1"}
        )
        assert _reasons(errors) == {"price": "negative"}

    @pytest.mark.parametrize("price", ["-0.004", Decimal("-0.001")])
    def test_sub_cent_negative_price_rejected(self, price):
        errors = validate_link(
            {"title": "Mug", "url": "https://a.io", "type": "product", "price": price}
        )
        assert _reasons(errors) == {"price": "negative"}

    def test_zero_price_allowed(self):
        fields = {"title": "Mug", "url": "https://a.io", "type": "product", "price": "0"}
        assert validate_link(fields) == []

    def test_non_numeric_product_price_rejected(self):
        errors = validate_link(
            {"title": "Mug", "url": "https://a.io", "type": "product", "price": "cheap"}
        )
        assert _reasons(errors) == {"price": "format"}

    def test_unknown_product_currency_rejected(self):
        errors = validate_link(
            {"title": "Mug", "url": "https://a.io", "type": "product", "currency": "XYZ"}
        )
        assert _reasons(errors) == {"currency": "unsupported"}

    def test_product_fields_ignored_on_plain_links(self):
        fields = {"title": "x", "url": "https://a.io", "type": "link", "price": "-5", "currency": "??"}
        assert validate_link(fields) == []

    def test_partial_skips_absent_fields(self):
        assert validate_link({"gradient_style": "gradient-1"}, partial=True) == []
        assert _reasons(validate_link({"title": ""}, partial=True)) == {"title": "required"}

    def test_ensure_valid_link_raises_with_every_error(self):
        with pytest.raises(FieldValidationError) as exc_info:
            ensure_valid_link({"title": "", "url": "nope"})

        assert exc_info.value.status_code == 400
        assert {"field": "title", "reason": "required"} in exc_info.value.details
        assert {"field": "url", "reason": "format"} in exc_info.value.details


class TestNormalizePrice:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("12.5", Decimal("12.50")), (3, Decimal("3.00")), ("0.005", Decimal("0.01"))],
    )
    def test_rounds_to_cents(self, raw, expected):
        assert normalize_price(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "NaN", "Infinity", None])
    def test_rejects_non_finite(self, raw):
        with pytest.raises(ValueError):
            normalize_price(raw)


class TestLinkEnums:
    def test_unknown_category_maps_to_other(self):
        assert LinkCategory.parse("myspace") == LinkCategory.OTHER
        assert LinkCategory.parse(None) == LinkCategory.OTHER
        assert LinkCategory.parse(" YouTube ") == LinkCategory.YOUTUBE

    def test_unknown_gradient_maps_to_none(self):
        assert GradientStyle.parse("gradient-9") == GradientStyle.NONE
        assert GradientStyle.parse("gradient-3") == GradientStyle.GRADIENT_3

    def test_set_active_keeps_position(self):
        link = Link(profile_id=uuid4(), title="x", url="https://a.io", position=4)

        link.set_active(False)

        assert link.is_active is False
        assert link.position == 4
        assert link.is_product is False

    def test_product_flag(self):
        link = Link(profile_id=uuid4(), title="x", url="https://a.io", type=LinkKind.PRODUCT)
        assert link.is_product is True

    def test_is_valid_url(self):
        assert is_valid_url("http://example.com/path?q=1")
        assert not is_valid_url("javascript:alert(1)")
