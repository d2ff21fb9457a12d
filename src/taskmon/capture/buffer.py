"""
Bounded output capture.

The child's combined stdout/stderr can be arbitrarily large, but the ping
service only accepts a bounded body. The buffer keeps either the first or
the last ``capacity`` bytes while the output is being drained, so memory use
never depends on how much the command prints.
"""

from typing import Callable, Dict

from ..models.config import MAX_CAPTURE_BYTES, CaptureMode


def _append_head(retained: bytes, data: bytes, capacity: int) -> bytes:
    room = capacity - len(retained)
    if room <= 0:
        return retained
    return retained + data[:room]


def _append_tail(retained: bytes, data: bytes, capacity: int) -> bytes:
    if len(data) >= capacity:
        return data[len(data) - capacity:]
    overflow = len(retained) + len(data) - capacity
    if overflow > 0:
        retained = retained[overflow:]
    return retained + data


def _append_none(retained: bytes, data: bytes, capacity: int) -> bytes:
    return retained


_APPENDERS: Dict[CaptureMode, Callable[[bytes, bytes, int], bytes]] = {
    CaptureMode.HEAD: _append_head,
    CaptureMode.TAIL: _append_tail,
    CaptureMode.NONE: _append_none,
}


class CaptureBuffer:
    """
    Ordered byte buffer with a fixed capacity ceiling.

    Written by exactly one drain thread while the child runs, and read by the
    reporter only after that thread has been joined, so no locking is needed.
    """

    def __init__(self, mode: CaptureMode = CaptureMode.TAIL, capacity: int = MAX_CAPTURE_BYTES):
        """
        Initialize an empty buffer.

        Args:
            mode: Which window of the output to retain
            capacity: Maximum number of bytes ever retained
        """
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        self.mode = mode
        self.capacity = capacity
        self.total_written = 0
        self._append = _APPENDERS[mode]
        self._retained = b""

    def write(self, data: bytes) -> None:
        """Append ``data``, dropping or evicting bytes per the capture mode."""
        if not data:
            return
        self.total_written += len(data)
        self._retained = self._append(self._retained, bytes(data), self.capacity)

    def snapshot(self) -> bytes:
        """Return the currently retained bytes as an independent value."""
        return self._retained

    @property
    def truncated(self) -> bool:
        """True if any written bytes are not part of the snapshot."""
        return self.total_written > len(self._retained)

    def __len__(self) -> int:
        return len(self._retained)

    def __repr__(self) -> str:
        return (
            f"CaptureBuffer(mode={self.mode.value}, retained={len(self._retained)}, "
            f"total_written={self.total_written})"
        )
