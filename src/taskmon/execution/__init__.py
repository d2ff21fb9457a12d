"""
Command execution for the taskmon package.

This module provides the process runner and the signal forwarding it uses
while waiting for the wrapped command.
"""

from .runner import ProcessRunner, drain_stream, truncate_str
from .signals import SignalForwarder, signal_process_tree

__all__ = [
    "ProcessRunner",
    "SignalForwarder",
    "drain_stream",
    "signal_process_tree",
    "truncate_str",
]
