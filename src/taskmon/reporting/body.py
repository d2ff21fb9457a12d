"""
Report body formatting.

Renders a report intent into the UTF-8 text POST-ed with a ping. The body
never exceeds ``MAX_CAPTURE_BYTES``: fixed parts (command line, exit code,
failure reason, environment) are kept and the captured output shrinks to
fit, keeping the head or tail according to the capture mode.
"""

import os
from typing import Mapping, Optional

from ..classification import exit_status
from ..models.config import MAX_CAPTURE_BYTES, CaptureMode, RunConfiguration
from ..models.outcome import Failed, ReportIntent, Started

REPLACEMENT_CHAR = "\ufffd"


def normalize_output(data: bytes, mode: CaptureMode) -> bytes:
    """
    Re-encode captured bytes as valid UTF-8.

    A capture window can start (tail) or end (head) in the middle of a
    multi-byte character; the replacement characters that produces at the
    cut edge are dropped.
    """
    text = data.decode("utf-8", errors="replace")
    if mode is CaptureMode.HEAD:
        text = text.rstrip(REPLACEMENT_CHAR)
    else:
        text = text.lstrip(REPLACEMENT_CHAR)
    return text.encode("utf-8")


def clamp_utf8(data: bytes, limit: int, mode: CaptureMode) -> bytes:
    """
    Cut valid UTF-8 ``data`` to at most ``limit`` bytes without splitting a
    character, keeping the start in head mode and the end otherwise.
    """
    if limit <= 0:
        return b""
    if len(data) <= limit:
        return data
    cut = data[:limit] if mode is CaptureMode.HEAD else data[len(data) - limit:]
    return cut.decode("utf-8", errors="ignore").encode("utf-8")


def format_environment(environ: Mapping[str, str]) -> str:
    """Render an environment as sorted ``KEY=value`` lines."""
    return "\n".join(f"{key}={value}" for key, value in sorted(environ.items()))


def format_duration(seconds: float) -> str:
    return f"{seconds:.3f}s"


def format_report_body(intent: ReportIntent, config: RunConfiguration,
                       environ: Optional[Mapping[str, str]] = None,
                       limit: int = MAX_CAPTURE_BYTES) -> bytes:
    """
    Build the request body for ``intent``.

    Args:
        intent: The classified report intent
        config: The run configuration (capture mode and detail level)
        environ: Environment to include with ``--env``; defaults to os.environ
        limit: Maximum body size in bytes

    Returns:
        The encoded body; empty when there is nothing to send
    """
    if isinstance(intent, Started):
        return b""

    mode = config.capture_mode
    output = normalize_output(intent.captured_output, mode)
    reason_line = f"task-mon: {intent.reason}" if isinstance(intent, Failed) else None

    if config.detail_level.is_detailed:
        header = f"$ {config.command_line} 2>&1\n"
        if config.detail_level.includes_env:
            header = format_environment(os.environ if environ is None else environ) + "\n" + header
        footer = (
            f"\n\nExit Code: {exit_status(intent.outcome)}"
            f"\nDuration: {format_duration(intent.outcome.duration)}"
        )
        if reason_line:
            footer += f"\n{reason_line}"
    else:
        header = ""
        footer = ""
        if reason_line:
            separator = "\n" if output and not output.endswith(b"\n") else ""
            footer = f"{separator}{reason_line}\n"

    header_bytes = header.encode("utf-8")
    footer_bytes = footer.encode("utf-8")
    room = limit - len(header_bytes) - len(footer_bytes)
    if room >= 0:
        return header_bytes + clamp_utf8(output, room, mode) + footer_bytes

    # Fixed parts alone are too long (e.g. a huge environment).
    return clamp_utf8(header_bytes + output + footer_bytes, limit, mode)
