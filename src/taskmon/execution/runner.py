"""
Command execution.

This module spawns the wrapped command with stderr merged into stdout,
drains the combined stream into a capture buffer on a dedicated thread while
the main thread waits for the process, and distills the result into a
single run outcome.
"""

import contextlib
import logging
import subprocess
import threading
import time
from typing import IO, Sequence, Tuple

from ..capture import CaptureBuffer
from ..models.config import MAX_CAPTURE_BYTES, CaptureMode
from ..models.outcome import Completed, LaunchFailed, RunOutcome, Terminated
from ..validation import ErrorSeverity, handle_subprocess_error
from .signals import SignalForwarder

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 4096
# Longest captured output echoed to the verbose log.
MAX_STRING_TO_LOG = 1000


def truncate_str(s: str, max_len: int) -> str:
    """Truncate a string for display, marking the cut with an ellipsis."""
    if len(s) > max_len:
        return s[:max_len - 3] + "..."
    return s


def drain_stream(stream: IO[bytes], buffer: CaptureBuffer) -> None:
    """
    Read ``stream`` until EOF, feeding every chunk to ``buffer``.

    Runs on the drain thread. Reading must continue even when nothing is
    retained, otherwise a chatty child blocks on a full pipe.
    """
    try:
        for chunk in iter(lambda: stream.read1(READ_CHUNK_SIZE), b""):
            buffer.write(chunk)
    except (OSError, ValueError) as e:
        logger.warning(f"Stopped reading command output: {e}")


class ProcessRunner:
    """
    Runs one external command to completion and captures its output.

    The child's output is captured, never mirrored to task-mon's own stdout
    or stderr.
    """

    def __init__(self, capture_mode: CaptureMode = CaptureMode.TAIL,
                 capacity: int = MAX_CAPTURE_BYTES, forward_signals: bool = True):
        """
        Initialize the runner.

        Args:
            capture_mode: Which window of the output to retain
            capacity: Capture buffer ceiling in bytes
            forward_signals: Relay SIGTERM/SIGHUP to the child while waiting
        """
        self.capture_mode = capture_mode
        self.capacity = capacity
        self.forward_signals = forward_signals

    def run(self, command: Sequence[str]) -> Tuple[RunOutcome, CaptureBuffer]:
        """
        Execute ``command`` and wait for it to terminate.

        Args:
            command: Program followed by its arguments, passed through unmodified

        Returns:
            Tuple of (outcome, capture_buffer). The buffer is no longer written
            to once this returns.
        """
        buffer = CaptureBuffer(self.capture_mode, self.capacity)
        command = list(command)
        if not command:
            return LaunchFailed("no command given"), buffer

        logger.debug(f"About to run: {command}")
        start = time.monotonic()

        # Signals received before attach() are held, not lost.
        forwarder = SignalForwarder() if self.forward_signals else None
        with forwarder or contextlib.nullcontext():
            try:
                process = subprocess.Popen(
                    command,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                )
            except (OSError, ValueError) as e:
                handle_subprocess_error(
                    error=e,
                    command=" ".join(command),
                    severity=ErrorSeverity.WARNING,
                    reraise=False,
                    logger=logger
                )
                return LaunchFailed(str(e), duration=time.monotonic() - start), buffer

            logger.debug(f"Command started with PID {process.pid}")
            if forwarder is not None:
                forwarder.attach(process.pid)

            reader = threading.Thread(
                target=drain_stream,
                args=(process.stdout, buffer),
                name=f"task-mon-drain-{process.pid}",
                daemon=True,
            )
            reader.start()

            try:
                return_code = process.wait()
                # Descendants holding the pipe open keep the reader alive until they exit.
                reader.join()
            finally:
                process.stdout.close()

        elapsed = time.monotonic() - start
        if return_code < 0:
            outcome: RunOutcome = Terminated(-return_code, duration=elapsed)
        else:
            outcome = Completed(return_code, duration=elapsed)

        if logger.isEnabledFor(logging.DEBUG):
            output = buffer.snapshot().decode("utf-8", errors="replace")
            logger.debug(
                f"stdout+stderr:[{truncate_str(output, MAX_STRING_TO_LOG)}] "
                f"outcome:{outcome} runtime:{elapsed:.3f}s"
            )
        return outcome, buffer
