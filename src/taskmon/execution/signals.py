"""
Signal forwarding while the wrapped command runs.

task-mon must outlive its child so the outcome can still be reported. While
the child is running, termination signals aimed at task-mon are passed on to
the child's process tree instead of killing task-mon, and an interactive
Ctrl-C (which the terminal already delivers to the child's process group)
is simply not allowed to interrupt the wait.
"""

import logging
import signal
import threading
from typing import Dict, List, Optional

import psutil

logger = logging.getLogger(__name__)

# Signals relayed to the child's process tree.
FORWARDED_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGTERM", "SIGHUP") if hasattr(signal, name)
)


def signal_process_tree(pid: int, signum: int) -> List[int]:
    """
    Send ``signum`` to a process and all of its descendants.

    Children are collected before the parent is signalled so that processes
    reparented during shutdown are still reached.

    Args:
        pid: PID of the root process
        signum: Signal number to deliver

    Returns:
        PIDs that were successfully signalled
    """
    try:
        parent = psutil.Process(pid)
    except psutil.NoSuchProcess:
        logger.debug(f"Process {pid} already exited, nothing to signal")
        return []

    try:
        children = parent.children(recursive=True)
    except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
        logger.warning(f"Could not list children of {pid} ({type(e).__name__}), signalling it alone")
        children = []

    signalled = []
    for proc in [parent] + children:
        try:
            proc.send_signal(signum)
            signalled.append(proc.pid)
        except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
            logger.debug(f"Could not signal {proc.pid}: {type(e).__name__}")
    return signalled


class SignalForwarder:
    """
    Context manager installing forwarding handlers for one child process.

    Installed before the child is spawned; signals that arrive before
    ``attach`` names the child are held and delivered once it does.

    Handlers can only be installed from the main thread; elsewhere (e.g. when
    task-mon is embedded and driven from a worker thread) this is a no-op.
    """

    def __init__(self, pid: Optional[int] = None):
        self.pid = pid
        self._pending: List[int] = []
        self._original_handlers: Dict[int, object] = {}

    def attach(self, pid: int) -> None:
        """Start forwarding to ``pid``, delivering any signals held so far."""
        self.pid = pid
        pending, self._pending = self._pending, []
        for signum in pending:
            logger.info(f"Forwarding held {signal.Signals(signum).name} to command (PID {pid})")
            signal_process_tree(pid, signum)

    def __enter__(self) -> "SignalForwarder":
        if threading.current_thread() is not threading.main_thread():
            logger.debug("Not on the main thread, signal forwarding disabled")
            return self

        self._install(signal.SIGINT, self._ignore_interrupt)
        for signum in FORWARDED_SIGNALS:
            self._install(signum, self._forward)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        for signum, handler in self._original_handlers.items():
            try:
                signal.signal(signum, handler)
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to restore handler for {signal.Signals(signum).name}: {e}")
        self._original_handlers.clear()
        if self._pending:
            logger.warning(f"Dropped {len(self._pending)} signal(s) received before the command started")
            self._pending = []

    def _install(self, signum: int, handler) -> None:
        try:
            self._original_handlers[signum] = signal.signal(signum, handler)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to install handler for {signal.Signals(signum).name}: {e}")

    def _forward(self, signum, frame) -> None:
        name = signal.Signals(signum).name
        if self.pid is None:
            logger.info(f"Received {name} before the command started, holding it")
            self._pending.append(signum)
            return
        logger.info(f"Received {name}, forwarding to command (PID {self.pid})")
        signal_process_tree(self.pid, signum)

    def _ignore_interrupt(self, signum, frame) -> None:
        logger.info("Received SIGINT, waiting for the command to exit")
