"""
Validation functions.

This module provides the field validators applied to command-line flags,
environment variables and settings-file values before a run starts.
"""

import math
import re
import uuid
from typing import Any, Optional
from urllib.parse import urlparse

from .exceptions import ValidationError

# Healthchecks.io slugs are lowercase letters, digits, hyphens and underscores.
_SLUG_PATTERN = re.compile(r'^[a-z0-9_-]+$')


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """
    Validate that a value is a float within a range.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (exclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated float value

    Raises:
        ValidationError: If validation fails
    """
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value!r}",
            field_name=field_name,
            value=value
        )
    if not math.isfinite(float_value):
        raise ValidationError(
            f"{field_name} must be a finite number, got {value!r}",
            field_name=field_name,
            value=value
        )
    if float_value <= min_value:
        raise ValidationError(
            f"{field_name} must be > {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and float_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    return float_value


def validate_non_empty_string(value: Any, field_name: str = "value") -> str:
    """
    Validate that a value is a string with non-whitespace content.

    Raises:
        ValidationError: If the value is missing or blank
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=value
        )
    return value


def validate_check_uuid(value: Any, field_name: str = "uuid") -> str:
    """
    Validate a check UUID.

    Args:
        value: Candidate UUID string
        field_name: Name of the field being validated

    Returns:
        The UUID in canonical lowercase hyphenated form

    Raises:
        ValidationError: If the value is not a UUID
    """
    validate_non_empty_string(value, field_name)
    try:
        return str(uuid.UUID(value.strip()))
    except ValueError:
        raise ValidationError(
            f"{field_name} is not a valid UUID: {value}",
            field_name=field_name,
            value=value
        )


def validate_slug(value: Any, field_name: str = "slug") -> str:
    """
    Validate a check slug.

    Raises:
        ValidationError: If the slug contains characters a slug cannot have
    """
    validate_non_empty_string(value, field_name)
    if not _SLUG_PATTERN.match(value):
        raise ValidationError(
            f"{field_name} must contain only lowercase letters, digits, hyphens and underscores: {value}",
            field_name=field_name,
            value=value
        )
    return value


def validate_ping_key(value: Any, field_name: str = "ping_key") -> str:
    """Validate a project ping key; it becomes a URL path segment."""
    validate_non_empty_string(value, field_name)
    if "/" in value or any(c.isspace() for c in value):
        raise ValidationError(
            f"{field_name} must not contain slashes or whitespace",
            field_name=field_name,
            value=value
        )
    return value


def validate_base_url(value: Any, field_name: str = "base_url") -> str:
    """
    Validate the ping service base URL.

    Returns:
        The URL with any trailing slashes removed

    Raises:
        ValidationError: If the URL is not an absolute http(s) URL
    """
    validate_non_empty_string(value, field_name)
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError(
            f"{field_name} must be an absolute http or https URL, got {value}",
            field_name=field_name,
            value=value
        )
    if parsed.query or parsed.fragment:
        raise ValidationError(
            f"{field_name} must not contain a query string or fragment: {value}",
            field_name=field_name,
            value=value
        )
    return value.rstrip("/")
