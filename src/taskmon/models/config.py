"""
Configuration data models.

This module contains the immutable run configuration assembled once at
startup, together with the small closed enums that select capture and
report-detail behavior.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

# Healthchecks.io accepts at most 10,240 bytes of request body per ping.
MAX_CAPTURE_BYTES = 10_240

DEFAULT_BASE_URL = "https://hc-ping.com"
DEFAULT_TIMEOUT_SECONDS = 10.0


class CaptureMode(Enum):
    """Which part of the child's output is retained for the report."""

    HEAD = "head"
    TAIL = "tail"
    NONE = "none"


class DetailLevel(Enum):
    """How much execution metadata is included in the report body."""

    BASIC = "basic"
    DETAILED = "detailed"
    DETAILED_ENV = "detailed+env"

    @property
    def is_detailed(self) -> bool:
        return self is not DetailLevel.BASIC

    @property
    def includes_env(self) -> bool:
        return self is DetailLevel.DETAILED_ENV


@dataclass(frozen=True)
class CheckIdentity:
    """
    Routing key the monitoring service uses to match a ping to a check.

    Exactly one of ``uuid`` or the ``slug``/``ping_key`` pair is set.
    """

    uuid: Optional[str] = None
    slug: Optional[str] = None
    ping_key: Optional[str] = None

    def __post_init__(self):
        if self.uuid is not None:
            if self.slug is not None or self.ping_key is not None:
                raise ValueError("A check is identified by a UUID or by a slug, not both")
        elif self.slug is None or self.ping_key is None:
            raise ValueError("A slug identity requires both slug and ping_key")

    @property
    def label(self) -> str:
        """Human-readable check identifier for log messages."""
        return self.uuid if self.uuid is not None else self.slug

    def url_prefix(self, base_url: str) -> str:
        """
        Build the ping URL for this check, without any signal suffix.

        Args:
            base_url: Root URL of the ping service (e.g. https://hc-ping.com)

        Returns:
            ``{base}/{uuid}`` or ``{base}/{ping_key}/{slug}``
        """
        base = base_url.rstrip("/")
        if self.uuid is not None:
            return f"{base}/{self.uuid}"
        return f"{base}/{self.ping_key}/{self.slug}"


@dataclass(frozen=True)
class RunConfiguration:
    """
    Everything a single invocation needs, resolved from flags, environment
    and the optional settings file. Built once and never mutated.
    """

    identity: CheckIdentity
    command: Tuple[str, ...]
    base_url: str = DEFAULT_BASE_URL
    # Custom user-agent prefix; the hostname-based default is always appended.
    user_agent: Optional[str] = None
    report_on_start: bool = False
    capture_mode: CaptureMode = CaptureMode.TAIL
    detail_level: DetailLevel = DetailLevel.BASIC
    verbose: bool = False
    log_only: bool = False
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def url_prefix(self) -> str:
        return self.identity.url_prefix(self.base_url)

    @property
    def command_line(self) -> str:
        """The command joined with spaces, as shown in detailed reports."""
        return " ".join(self.command)
