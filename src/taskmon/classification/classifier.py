"""
Outcome classification.

Maps the terminal outcome of a run onto the report intent sent to the
monitoring service, and onto the exit status task-mon itself returns.
Both mappings are pure functions of their inputs.
"""

import signal
from typing import Optional

from ..models.config import CaptureMode, RunConfiguration
from ..models.outcome import (
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

# Exit status when the command could not be started (shell "command not found").
LAUNCH_FAILURE_EXIT_CODE = 127

# Shells report death by signal N as status 128 + N.
SIGNAL_EXIT_OFFSET = 128


def signal_name(signum: int) -> Optional[str]:
    """Return the symbolic name of a signal number, if the platform knows it."""
    try:
        return signal.Signals(signum).name
    except ValueError:
        return None


def describe_failure(outcome: RunOutcome) -> str:
    """
    Describe why a run counts as failed.

    Signals are rendered as the number followed by the name in parentheses,
    e.g. ``command terminated by signal 9 (SIGKILL)``.
    """
    if isinstance(outcome, Completed):
        return f"command exited with code {outcome.exit_code}"
    if isinstance(outcome, Terminated):
        name = signal_name(outcome.signal)
        suffix = f" ({name})" if name else ""
        return f"command terminated by signal {outcome.signal}{suffix}"
    if isinstance(outcome, LaunchFailed):
        return f"command failed to launch: {outcome.error}"
    raise TypeError(f"Unknown run outcome: {outcome!r}")


def classify(outcome: RunOutcome, config: RunConfiguration, captured_output: bytes = b"") -> ReportIntent:
    """
    Turn a run outcome into the intent to report.

    Args:
        outcome: Terminal result of the child process
        config: The run configuration
        captured_output: Snapshot of the capture buffer

    Returns:
        ``Logged`` in log-only mode, ``Succeeded`` for exit code 0, and
        ``Failed`` for everything else.
    """
    if config.capture_mode is CaptureMode.NONE:
        captured_output = b""

    if config.log_only:
        return Logged(captured_output, outcome)
    if isinstance(outcome, Completed) and outcome.exit_code == 0:
        return Succeeded(captured_output, outcome)
    return Failed(captured_output, describe_failure(outcome), outcome)


def start_intent(config: RunConfiguration) -> Optional[Started]:
    """Return the pre-run ``Started`` intent when start pings are enabled."""
    return Started() if config.report_on_start else None


def exit_status(outcome: RunOutcome) -> int:
    """
    Exit status task-mon should terminate with for ``outcome``.

    Never depends on whether any report was delivered.
    """
    if isinstance(outcome, Completed):
        return outcome.exit_code
    if isinstance(outcome, Terminated):
        return SIGNAL_EXIT_OFFSET + outcome.signal
    return LAUNCH_FAILURE_EXIT_CODE
