"""
Outcome classification for the taskmon package.
"""

from .classifier import (
    LAUNCH_FAILURE_EXIT_CODE,
    classify,
    describe_failure,
    exit_status,
    signal_name,
    start_intent,
)

__all__ = [
    "LAUNCH_FAILURE_EXIT_CODE",
    "classify",
    "describe_failure",
    "exit_status",
    "signal_name",
    "start_intent",
]
