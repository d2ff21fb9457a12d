"""
Invocation orchestration.

``TaskMonitor`` coordinates one complete run: the optional start ping, the
command execution, classification of its outcome and the completion ping.
It delegates each step to the component responsible for it and guarantees
that reporting can never change the exit status of the run.
"""

import logging
import uuid
from typing import Optional

from ..classification import classify, exit_status, start_intent
from ..execution import ProcessRunner
from ..models.config import RunConfiguration
from ..models.outcome import ReportIntent
from ..reporting import Reporter
from ..validation import ErrorSeverity, handle_error

logger = logging.getLogger(__name__)


class TaskMonitor:
    """
    Runs one command and reports its outcome to one check.
    """

    def __init__(self, config: RunConfiguration, reporter: Reporter,
                 runner: Optional[ProcessRunner] = None):
        """
        Initialize the monitor.

        Args:
            config: The immutable run configuration
            reporter: Reporter bound to the configured check
            runner: Process runner; defaults to one using the configured capture mode
        """
        self.config = config
        self.reporter = reporter
        self.runner = runner or ProcessRunner(config.capture_mode)
        self.run_id: Optional[uuid.UUID] = None

    def run(self) -> int:
        """
        Execute the full start, run, classify and report sequence.

        Returns:
            The exit status task-mon should terminate with
        """
        started = start_intent(self.config)
        if started is not None:
            # Only worth pairing pings when there is a start ping to pair with.
            self.run_id = uuid.uuid4()
            self._report(started)

        outcome, buffer = self.runner.run(self.config.command)
        intent = classify(outcome, self.config, buffer.snapshot())
        status = exit_status(outcome)
        logger.info(
            f"Command finished: {type(outcome).__name__}, exit status {status}, "
            f"{buffer.total_written} bytes of output"
        )

        self._report(intent)
        return status

    def _report(self, intent: ReportIntent) -> bool:
        try:
            return self.reporter.send(intent, self.config, self.run_id)
        except Exception as e:
            # Reporting must not affect the run's exit status.
            handle_error(
                error=e,
                context=f"reporting {type(intent).__name__} for check {self.config.identity.label}",
                severity=ErrorSeverity.WARNING,
                reraise=False,
                logger=logger
            )
            return False
