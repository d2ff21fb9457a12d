"""
Validation and error handling for the taskmon package.

This module provides input validation and error handling with consistent
error reporting across the application.
"""

# Core exception classes and error handling
from .exceptions import (
    ErrorSeverity,
    ValidationError,
    handle_error,
    handle_config_error,
    handle_subprocess_error,
    handle_cli_error,
)

# Validation functions
from .validators import (
    validate_base_url,
    validate_check_uuid,
    validate_non_empty_string,
    validate_ping_key,
    validate_positive_float,
    validate_slug,
)

__all__ = [
    # Core functionality
    "ErrorSeverity",
    "ValidationError",
    "handle_error",
    "handle_config_error",
    "handle_subprocess_error",
    "handle_cli_error",
    # Validators
    "validate_base_url",
    "validate_check_uuid",
    "validate_non_empty_string",
    "validate_ping_key",
    "validate_positive_float",
    "validate_slug",
]
