"""
Runtime result models.

This module contains the transient values computed once per invocation:
the terminal outcome of the child process and the report intent derived
from it.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Completed:
    """The child ran and exited normally with ``exit_code``."""

    exit_code: int
    duration: float = 0.0


@dataclass(frozen=True)
class Terminated:
    """The child was killed by ``signal``."""

    signal: int
    duration: float = 0.0


@dataclass(frozen=True)
class LaunchFailed:
    """The child could not be started at all."""

    error: str
    duration: float = 0.0


RunOutcome = Union[Completed, Terminated, LaunchFailed]


@dataclass(frozen=True)
class Started:
    """Sent before the command runs when start pings are enabled."""


@dataclass(frozen=True)
class Succeeded:
    captured_output: bytes
    outcome: RunOutcome


@dataclass(frozen=True)
class Failed:
    captured_output: bytes
    reason: str
    outcome: RunOutcome


@dataclass(frozen=True)
class Logged:
    """Records that the command ran without touching the check's status."""

    captured_output: bytes
    outcome: RunOutcome


ReportIntent = Union[Started, Succeeded, Failed, Logged]
