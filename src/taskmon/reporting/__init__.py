"""
Report dispatch for the taskmon package.

This module provides the reporter that pings the monitoring service and the
formatting of the bodies attached to those pings.
"""

from .agent import PING_SUFFIXES, PROGRAM_NAME, Reporter, make_user_agent
from .body import clamp_utf8, format_environment, format_report_body, normalize_output

__all__ = [
    "PING_SUFFIXES",
    "PROGRAM_NAME",
    "Reporter",
    "make_user_agent",
    "clamp_utf8",
    "format_environment",
    "format_report_body",
    "normalize_output",
]
