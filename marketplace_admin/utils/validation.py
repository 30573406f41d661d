"""
Form validation rules and slug helpers used by the login, register and
legal-page forms.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import urlparse

from marketplace_admin.domains.constants import EMAIL_PATTERN, PASSWORD_MIN_LENGTH, SLUG_PATTERN
from marketplace_admin.domains.models import ValidationResult

_EMAIL_RE = re.compile(EMAIL_PATTERN)
_SLUG_RE = re.compile(SLUG_PATTERN)

Validator = Callable[[Any], "str | None"]


def validate_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email or ""))


def validate_password(password: str) -> tuple[bool, list[str]]:
    """
    Check the password policy.

    Returns:
        (valid, errors) with one message per failed rule.
    """
    password = password or ""
    errors: list[str] = []
    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    if not re.search(r"[A-Z]", password):
        errors.append("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        errors.append("Password must contain at least one lowercase letter")
    if not re.search(r"[0-9]", password):
        errors.append("Password must contain at least one number")
    return not errors, errors


def generate_slug(title: str) -> str:
    """'Terms & Conditions 2024' -> 'terms-conditions-2024'."""
    slug = (title or "").lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug, flags=re.ASCII)
    slug = re.sub(r"\s+", "-", slug)
    return re.sub(r"-+", "-", slug)


def is_valid_slug(slug: str) -> bool:
    return bool(_SLUG_RE.match(slug or ""))


# --- Field validators: return an error message or None ---

def required(value: Any) -> str | None:
    if value is None or value == "":
        return "This field is required"
    if isinstance(value, str) and not value.strip():
        return "This field is required"
    return None


def email(value: str) -> str | None:
    if not value:
        return None
    return None if validate_email(value) else "Please enter a valid email address"


def min_length(n: int) -> Validator:
    def check(value: str) -> str | None:
        if not value:
            return None
        return None if len(value) >= n else f"Must be at least {n} characters long"
    return check


def max_length(n: int) -> Validator:
    def check(value: str) -> str | None:
        if not value:
            return None
        return None if len(value) <= n else f"Must be no more than {n} characters long"
    return check


def password(value: str) -> str | None:
    if not value:
        return None
    missing: list[str] = []
    if len(value) < PASSWORD_MIN_LENGTH:
        missing.append(f"at least {PASSWORD_MIN_LENGTH} characters")
    if not re.search(r"[A-Z]", value):
        missing.append("one uppercase letter")
    if not re.search(r"[a-z]", value):
        missing.append("one lowercase letter")
    if not re.search(r"[0-9]", value):
        missing.append("one number")
    return f"Password must contain {', '.join(missing)}" if missing else None


def url(value: str) -> str | None:
    if not value:
        return None
    parsed = urlparse(value)
    if parsed.scheme and parsed.netloc:
        return None
    return "Please enter a valid URL"


def numeric(value: str) -> str | None:
    if not value:
        return None
    return None if re.fullmatch(r"\d+", value) else "Please enter a valid number"


def positive_number(value: float | None) -> str | None:
    if value is None:
        return None
    return None if value > 0 else "Must be a positive number"


def slug(value: str) -> str | None:
    if not value:
        return None
    if is_valid_slug(value):
        return None
    return "Slug can only contain lowercase letters, numbers, and hyphens"


@dataclass
class ValidationRule:
    field: str
    validate: Validator
    message: str | None = None


def validate_form(data: dict[str, Any], rules: list[ValidationRule]) -> ValidationResult:
    """Run rules in order; a later failure on the same field overwrites an earlier one."""
    errors: dict[str, str] = {}
    for rule in rules:
        err = rule.validate(data.get(rule.field))
        if err:
            errors[rule.field] = rule.message or err
    return ValidationResult(is_valid=not errors, errors=errors)
