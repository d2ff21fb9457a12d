"""
Output capture for task-mon.

This module provides the bounded buffer that retains the head or tail of a
child process's combined output.
"""

from .buffer import CaptureBuffer

__all__ = [
    "CaptureBuffer",
]
