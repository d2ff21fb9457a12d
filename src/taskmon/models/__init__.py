"""
Data models and structures for task-mon.

Configuration Models:
- Check identity (UUID or slug + ping key)
- Immutable run configuration and its capture/detail enums

Runtime Models:
- Run outcomes (completed, terminated by signal, failed to launch)
- Report intents (start, success, failure, log-only)
"""

# Configuration models
from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    MAX_CAPTURE_BYTES,
    CaptureMode,
    CheckIdentity,
    DetailLevel,
    RunConfiguration,
)

# Runtime models
from .outcome import (
    Completed,
    Failed,
    LaunchFailed,
    Logged,
    ReportIntent,
    RunOutcome,
    Started,
    Succeeded,
    Terminated,
)

__all__ = [
    # Configuration
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "MAX_CAPTURE_BYTES",
    "CaptureMode",
    "CheckIdentity",
    "DetailLevel",
    "RunConfiguration",
    # Runtime
    "Completed",
    "Terminated",
    "LaunchFailed",
    "RunOutcome",
    "Started",
    "Succeeded",
    "Failed",
    "Logged",
    "ReportIntent",
]
