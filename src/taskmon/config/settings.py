"""
Settings file validation.

Converts the raw ``[healthchecks]`` table of the settings file into a
validated ``Settings`` object. Every field is optional; anything unset falls
through to environment variables and built-in defaults.
"""

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from ..validation import (
    ValidationError,
    validate_base_url,
    validate_non_empty_string,
    validate_ping_key,
    validate_positive_float,
)

logger = logging.getLogger(__name__)

# Generous upper bound; a ping that needs longer than this is not worth waiting for.
MAX_TIMEOUT_SECONDS = 300.0


@dataclass(frozen=True)
class Settings:
    """
    Connection defaults loaded from the settings file.
    """

    # Root URL of the ping service.
    base_url: Optional[str] = None
    # Project ping key used with slug identities.
    ping_key: Optional[str] = None
    # Custom user-agent prefix.
    user_agent: Optional[str] = None
    # Per-request timeout in seconds.
    timeout: Optional[float] = None


def validate_settings(data: Dict[str, Any]) -> Settings:
    """
    Validate the ``[healthchecks]`` table of a settings file.

    Args:
        data: Parsed table contents

    Returns:
        Validated Settings

    Raises:
        ValidationError: On unknown keys or invalid values
    """
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValidationError(
            f"Unknown settings in [healthchecks]: {', '.join(unknown)}",
            field_name="healthchecks",
            value=unknown
        )

    values: Dict[str, Any] = {}
    if "base_url" in data:
        values["base_url"] = validate_base_url(data["base_url"], "healthchecks.base_url")
    if "ping_key" in data:
        values["ping_key"] = validate_ping_key(data["ping_key"], "healthchecks.ping_key")
    if "user_agent" in data:
        values["user_agent"] = validate_non_empty_string(data["user_agent"], "healthchecks.user_agent")
    if "timeout" in data:
        # TOML booleans are ints in Python; reject them explicitly.
        if isinstance(data["timeout"], bool):
            raise ValidationError(
                "healthchecks.timeout must be a number",
                field_name="healthchecks.timeout",
                value=data["timeout"]
            )
        values["timeout"] = validate_positive_float(
            data["timeout"], max_value=MAX_TIMEOUT_SECONDS, field_name="healthchecks.timeout"
        )

    settings = Settings(**values)
    logger.debug(f"Loaded settings: {', '.join(sorted(values)) or 'none'}")
    return settings
