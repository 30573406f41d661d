"""
Tests for form validation, password rules and slug helpers.
"""

from __future__ import annotations

import pytest

from marketplace_admin.utils import validation as v


@pytest.mark.parametrize(
    "email, ok",
    [
        ("admin@example.com", True),
        ("a.b+c@sub.example.org", True),
        ("no-at-sign.com", False),
        ("spaces in@example.com", False),
        ("missing@tld", False),
        ("", False),
    ],
)
def test_validate_email(email, ok) -> None:
    assert v.validate_email(email) is ok


def test_validate_password_lists_every_missing_rule() -> None:
    valid, errors = v.validate_password("abc")
    assert not valid
    assert len(errors) == 3
    valid, errors = v.validate_password("Str0ngPass")
    assert valid
    assert errors == []


@pytest.mark.parametrize(
    "title, slug",
    [
        ("Terms of Service", "terms-of-service"),
        ("  Privacy   Policy!  ", "privacy-policy"),
        ("Refund & Returns -- 2024", "refund-returns-2024"),
        ("A -- B", "a-b"),
        ("Café Policy", "caf-policy"),
    ],
)
def test_generate_slug(title, slug) -> None:
    assert v.generate_slug(title) == slug


def test_is_valid_slug() -> None:
    assert v.is_valid_slug(v.generate_slug("Política de privacidad"))
    assert v.is_valid_slug("cookie-policy-2")
    assert not v.is_valid_slug("Cookie Policy")
    assert not v.is_valid_slug("")


def test_validate_form_collects_field_errors() -> None:
    rules = [
        v.ValidationRule("title", v.required),
        v.ValidationRule("slug", v.slug),
        v.ValidationRule("email", v.email),
        v.ValidationRule("name", v.min_length(3), message="Name is too short"),
    ]
    result = v.validate_form({"title": "", "slug": "Bad Slug", "email": "x", "name": "ab"}, rules)

    assert not result.is_valid
    assert set(result.errors) == {"title", "slug", "email", "name"}
    assert result.errors["name"] == "Name is too short"


def test_validate_form_passes_clean_data() -> None:
    rules = [
        v.ValidationRule("title", v.required),
        v.ValidationRule("title", v.max_length(10)),
        v.ValidationRule("website", v.url),
        v.ValidationRule("price", v.positive_number),
    ]
    result = v.validate_form({"title": "Terms", "website": "https://example.com", "price": 9.5}, rules)
    assert result.is_valid
    assert result.errors == {}


def test_optional_validators_ignore_empty_values() -> None:
    """Only `required` rejects empty input."""
    for validator in (v.email, v.url, v.numeric, v.slug, v.password, v.min_length(5), v.max_length(1)):
        assert validator("") is None
    assert v.required("   ") is not None
    assert v.numeric("12a") is not None
    assert v.positive_number(0) is not None
