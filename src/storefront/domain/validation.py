"""Field-level rules shared by the aggregates and the HTTP schemas.

Each function returns the normalised value or raises ValidationError with a
message naming the offending field.
"""

from __future__ import annotations

import re

from email_validator import EmailNotValidError, validate_email

from storefront.domain.exceptions import ValidationError

MAX_EMAIL_LENGTH = 254
NAME_MIN, NAME_MAX = 2, 100
DESCRIPTION_MIN, DESCRIPTION_MAX = 10, 2000
PASSWORD_MIN, PASSWORD_MAX = 6, 128
SLUG_MAX = 200
PHONE_MAX = 20
TEXT_MAX = 1000

_UNSAFE_NAME = re.compile(r"<|>|script|onclick", re.IGNORECASE)
_SLUG = re.compile(r"^[a-z0-9-]+$")
_PHONE = re.compile(r"^[\d\s+\-()]+$")
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_TAGS = re.compile(r"<[^>]*>")


def email(value: str | None, field: str = "email") -> str:
    if not value or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    trimmed = value.strip()
    if len(trimmed) > MAX_EMAIL_LENGTH:
        raise ValidationError(f"{field} is too long (max {MAX_EMAIL_LENGTH} characters)")
    try:
        result = validate_email(trimmed, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValidationError(f"{field} is not a valid email address") from exc
    return result.normalized


def person_name(value: str | None, field: str = "name") -> str:
    if not value or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    trimmed = value.strip()
    if len(trimmed) < NAME_MIN:
        raise ValidationError(f"{field} must have at least {NAME_MIN} characters")
    if len(trimmed) > NAME_MAX:
        raise ValidationError(f"{field} is too long (max {NAME_MAX} characters)")
    if _UNSAFE_NAME.search(trimmed):
        raise ValidationError(f"{field} contains invalid characters")
    return trimmed


def slug(value: str | None) -> str:
    if not value or not isinstance(value, str) or not value.strip():
        raise ValidationError("slug is required")
    normalised = value.strip().lower()
    if not _SLUG.match(normalised):
        raise ValidationError(
            "slug may only contain lowercase letters, digits and hyphens"
        )
    if len(normalised) > SLUG_MAX:
        raise ValidationError(f"slug is too long (max {SLUG_MAX} characters)")
    return normalised


def phone(value: str | None) -> str | None:
    """Phone is optional; blank means absent."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if not isinstance(value, str):
        raise ValidationError("phone must be text")
    trimmed = value.strip()
    if not _PHONE.match(trimmed):
        raise ValidationError("phone is not valid")
    if len(trimmed) > PHONE_MAX:
        raise ValidationError("phone is too long")
    return trimmed


def description(value: str | None) -> str:
    if not value or not isinstance(value, str) or not value.strip():
        raise ValidationError("description is required")
    trimmed = value.strip()
    if len(trimmed) < DESCRIPTION_MIN:
        raise ValidationError(
            f"description must have at least {DESCRIPTION_MIN} characters"
        )
    if len(trimmed) > DESCRIPTION_MAX:
        raise ValidationError(
            f"description is too long (max {DESCRIPTION_MAX} characters)"
        )
    return trimmed


def password(value: str | None) -> str:
    if not value or not isinstance(value, str):
        raise ValidationError("password is required")
    if len(value) < PASSWORD_MIN:
        raise ValidationError(f"password must have at least {PASSWORD_MIN} characters")
    if len(value) > PASSWORD_MAX:
        raise ValidationError(f"password is too long (max {PASSWORD_MAX} characters)")
    return value


def required_text(value: str | None, field: str) -> str:
    if not value or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    return value.strip()


def clean_text(value: str | None) -> str:
    """Strip control characters and markup from free text."""
    if not value or not isinstance(value, str):
        return ""
    cleaned = _TAGS.sub("", _CONTROL_CHARS.sub("", value))
    return cleaned.strip()[:TEXT_MAX]


def image_url(value: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("image URL is required")
    trimmed = value.strip()
    if not (trimmed.startswith(("http://", "https://")) or trimmed.startswith("/")):
        raise ValidationError(f"Invalid image URL: {trimmed!r}")
    return trimmed
