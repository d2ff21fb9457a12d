"""
Exception handling and error management.

This module provides the small set of error handling helpers used across
task-mon: a single validation exception type and uniform logging of errors
at a chosen severity.
"""

import logging
import sys
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ValidationError(Exception):
    """
    Exception raised when configuration or input validation fails.

    Raised before any command is executed or any ping is sent.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None):
        super().__init__(message)
        self.field_name = field_name
        self.value = value


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    if isinstance(severity, str):
        severity = ErrorSeverity(severity.lower())

    if severity is ErrorSeverity.DEBUG:
        effective_logger.debug(error_msg, exc_info=True)
    elif severity is ErrorSeverity.INFO:
        effective_logger.info(error_msg)
    elif severity is ErrorSeverity.WARNING:
        effective_logger.warning(error_msg)
    elif severity is ErrorSeverity.ERROR:
        effective_logger.error(error_msg)
    else:
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_subprocess_error(error: Exception, command: str, **kwargs) -> None:
    """Handle subprocess-related errors."""
    handle_error(error, f"subprocess command '{command}'", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Log a fatal CLI error and exit with ``exit_code`` (default 2)."""
    exit_code = kwargs.pop('exit_code', 2)
    severity = kwargs.pop('severity', ErrorSeverity.ERROR)

    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    sys.exit(exit_code)
