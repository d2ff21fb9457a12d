"""
task-mon: run a command and report its outcome to a dead man's switch.

This package wraps a scheduled command (typically a cron job), captures its
output and exit status, and pings a Healthchecks.io compatible service so
that failures and missed runs are detected externally.

The package is organized into specialized modules:
- models: Run configuration, outcomes and report intents
- capture: Bounded head/tail output buffer
- execution: Child process runner and signal forwarding
- classification: Outcome to report-intent and exit-status mapping
- reporting: Ping dispatch and report body formatting
- validation: Input validation and error handling
- config: Flags, environment and settings file resolution
- cli: Command-line interface and orchestration

Usage:
    From command line:
        task-mon --uuid UUID [options] -- command [args ...]

    Programmatically:
        from taskmon import TaskMonitor, Reporter, build_run_configuration
        config = build_run_configuration(args, os.environ)
        with Reporter.create(config) as reporter:
            status = TaskMonitor(config, reporter).run()
"""

__version__ = "0.3.2"

# Main interfaces
from .cli import TaskMonitor, main_cli, run_cli
from .config import build_run_configuration
from .reporting import Reporter

# Model classes for external use
from .models import (
    CaptureMode,
    CheckIdentity,
    DetailLevel,
    RunConfiguration,
    Completed,
    Terminated,
    LaunchFailed,
    Started,
    Succeeded,
    Failed,
    Logged,
)

# Pipeline components
from .capture import CaptureBuffer
from .execution import ProcessRunner
from .classification import classify, exit_status

# Validation utilities
from .validation import ValidationError

__all__ = [
    # Main interfaces
    "TaskMonitor",
    "main_cli",
    "run_cli",
    "build_run_configuration",
    "Reporter",
    # Models
    "CaptureMode",
    "CheckIdentity",
    "DetailLevel",
    "RunConfiguration",
    "Completed",
    "Terminated",
    "LaunchFailed",
    "Started",
    "Succeeded",
    "Failed",
    "Logged",
    # Pipeline components
    "CaptureBuffer",
    "ProcessRunner",
    "classify",
    "exit_status",
    # Validation
    "ValidationError",
]
