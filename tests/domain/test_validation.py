"""Unit tests for shared field rules."""

import pytest

from storefront.domain import validation
from storefront.domain.exceptions import ValidationError


class TestEmail:

    def test_valid_email_is_trimmed(self):
        assert validation.email("  ana@example.com ") == "ana@example.com"

    def test_missing(self):
        with pytest.raises(ValidationError, match="email is required"):
            validation.email(None)

    def test_field_name_in_message(self):
        with pytest.raises(ValidationError, match="customer.email is not a valid"):
            validation.email("ana@", "customer.email")


class TestSlug:

    def test_lowercased(self):
        assert validation.slug("Tenis-2024") == "tenis-2024"

    def test_spaces_rejected(self):
        with pytest.raises(ValidationError, match="lowercase letters"):
            validation.slug("running shoes")


class TestPassword:

    def test_too_short(self):
        with pytest.raises(ValidationError, match="at least 6"):
            validation.password("abc")

    def test_too_long(self):
        with pytest.raises(ValidationError, match="too long"):
            validation.password("x" * 129)


class TestCleanText:

    def test_strips_tags_and_control_chars(self):
        assert validation.clean_text("hi\x00 <i>there</i>") == "hi there"

    def test_none_becomes_empty(self):
        assert validation.clean_text(None) == ""


class TestImageUrl:

    def test_javascript_scheme_rejected(self):
        with pytest.raises(ValidationError, match="Invalid image URL"):
            validation.image_url("javascript:alert(1)")
