"""
Report dispatch to the ping service.

The ``Reporter`` owns the one HTTP session of an invocation and turns report
intents into Healthchecks.io pings. Pings are best effort: a single attempt
with a bounded timeout, and every transport problem is logged and absorbed so
it can never change task-mon's exit status.
"""

import logging
import socket
from typing import Dict, Optional, Type
from uuid import UUID

import requests

from ..execution import truncate_str
from ..models.config import DEFAULT_TIMEOUT_SECONDS, RunConfiguration
from ..models.outcome import Failed, Logged, ReportIntent, Started, Succeeded
from ..validation import ErrorSeverity, handle_error
from .body import format_report_body

logger = logging.getLogger(__name__)

PROGRAM_NAME = "task-mon"

# Path suffix appended to the check URL for each kind of ping.
PING_SUFFIXES: Dict[Type, str] = {
    Started: "/start",
    Succeeded: "",
    Failed: "/fail",
    Logged: "/log",
}


def make_user_agent(custom: Optional[str] = None) -> str:
    """
    Construct a User-Agent string identifying task-mon and the host.

    Args:
        custom: Optional caller-supplied agent, placed in front

    Returns:
        ``task-mon - <host>`` or ``<custom> (task-mon - <host>)``
    """
    try:
        host = socket.gethostname()
    except OSError:
        host = ""
    base = f"{PROGRAM_NAME} - {host}" if host else PROGRAM_NAME
    if custom:
        return f"{custom} ({base})"
    return base


def ping_kind(intent: ReportIntent) -> str:
    return type(intent).__name__.lower()


class Reporter:
    """
    Sends report intents for one check.

    Constructed explicitly and passed to whoever needs it; tests substitute a
    fake session.
    """

    def __init__(self, session: requests.Session, url_prefix: str,
                 timeout: float = DEFAULT_TIMEOUT_SECONDS):
        """
        Initialize the reporter.

        Args:
            session: HTTP session carrying the User-Agent header
            url_prefix: Check URL without any suffix
            timeout: Per-request timeout in seconds
        """
        self.session = session
        self.url_prefix = url_prefix.rstrip("/")
        self.timeout = timeout

    @classmethod
    def create(cls, config: RunConfiguration) -> "Reporter":
        """Build a reporter with a fresh session for ``config``'s check."""
        session = requests.Session()
        session.headers["User-Agent"] = make_user_agent(config.user_agent)
        return cls(session, config.url_prefix, config.timeout)

    def url_for(self, intent: ReportIntent) -> str:
        try:
            return self.url_prefix + PING_SUFFIXES[type(intent)]
        except KeyError:
            raise TypeError(f"Unknown report intent: {intent!r}") from None

    def send(self, intent: ReportIntent, config: RunConfiguration,
             run_id: Optional[UUID] = None) -> bool:
        """
        Send one ping for ``intent``.

        Args:
            intent: What to report
            config: Run configuration, used to render the body
            run_id: Pairs a start ping with its completion ping when set

        Returns:
            True if the service acknowledged the ping with a 2xx status,
            False on any transport error, timeout or other status.
        """
        url = self.url_for(intent)
        params = {"rid": str(run_id)} if run_id is not None else None
        kind = ping_kind(intent)

        if isinstance(intent, Started):
            method, body, headers = "GET", None, None
        else:
            method = "POST"
            body = format_report_body(intent, config) or None
            headers = {"Content-Type": "text/plain; charset=utf-8"} if body else None

        logger.debug(
            f"Sending request: {method} {url} params={params} "
            f"body={len(body) if body else 0} bytes"
        )
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                data=body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            handle_error(
                error=e,
                context=f"sending {kind} ping to {url}",
                severity=ErrorSeverity.WARNING,
                reraise=False,
                logger=logger
            )
            return False

        if not 200 <= response.status_code < 300:
            logger.warning(
                f"Ping service rejected {kind} ping to {url}: HTTP {response.status_code} "
                f"{truncate_str(response.text.strip(), 200)}"
            )
            return False

        logger.debug(f"{kind.capitalize()} ping delivered: HTTP {response.status_code}")
        return True

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "Reporter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
