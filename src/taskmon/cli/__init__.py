"""
Command-line interface for the taskmon package.

This module provides the main CLI entry point and the orchestrator that
drives a single invocation.
"""

from .main import main_cli, run_cli
from .orchestrator import TaskMonitor

__all__ = [
    "TaskMonitor",
    "main_cli",
    "run_cli",
]
