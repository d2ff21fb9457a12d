"""
Pytest configuration and shared fixtures for the task-mon test suite.

This module provides common fixtures, fakes for the HTTP session, and a
local ping server for end-to-end runs.
"""

import logging
import shutil
import sys
import tempfile
import threading
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Dict, List, Optional
from unittest.mock import Mock

import pytest
import requests

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from taskmon.models import CaptureMode, CheckIdentity, DetailLevel, RunConfiguration  # noqa: E402
from taskmon.reporting import Reporter  # noqa: E402


CHECK_UUID = "5c9e2f0e-8d4a-4b7f-9a53-2f1d7d6c1e01"
BASE_URL = "https://hc.example.test"


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "e2e: mark test as an end-to-end test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers run_cli attached so they never outlive a test's captured stderr."""
    yield
    package_logger = logging.getLogger("taskmon")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def check_uuid():
    return CHECK_UUID


@pytest.fixture
def make_config():
    """Factory for RunConfiguration objects with test defaults."""

    def _make(command=("true",), **overrides) -> RunConfiguration:
        values = dict(
            identity=CheckIdentity(uuid=CHECK_UUID),
            command=tuple(command),
            base_url=BASE_URL,
            capture_mode=CaptureMode.TAIL,
            detail_level=DetailLevel.BASIC,
        )
        values.update(overrides)
        return RunConfiguration(**values)

    return _make


# ============================================================================
# Fake HTTP Session
# ============================================================================


@dataclass
class RecordedRequest:
    method: str
    url: str
    params: Optional[Dict[str, str]]
    data: Optional[bytes]
    headers: Optional[Dict[str, str]]
    timeout: Optional[float]


@dataclass
class FakeSession:
    """Stands in for requests.Session, recording every request."""

    status_code: int = 200
    error: Optional[Exception] = None
    headers: Dict[str, str] = field(default_factory=dict)
    calls: List[RecordedRequest] = field(default_factory=list)
    closed: bool = False

    def request(self, method, url, params=None, data=None, headers=None, timeout=None):
        self.calls.append(RecordedRequest(method, url, params, data, headers, timeout))
        if self.error is not None:
            raise self.error
        response = Mock(spec=requests.Response)
        response.status_code = self.status_code
        response.text = "OK" if self.status_code == 200 else "not found"
        return response

    def close(self):
        self.closed = True


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def fake_reporter(fake_session):
    """Reporter bound to the test check, sending through a FakeSession."""
    return Reporter(fake_session, f"{BASE_URL}/{CHECK_UUID}", timeout=10.0)


# ============================================================================
# Local Ping Server
# ============================================================================


@dataclass
class ReceivedPing:
    method: str
    path: str
    headers: Dict[str, str]
    body: bytes


class PingServer:
    """Minimal HTTP server recording pings, answering with a fixed status."""

    def __init__(self):
        self.pings: List[ReceivedPing] = []
        self.status_code = 200
        server = self

        class Handler(BaseHTTPRequestHandler):
            def _record(self):
                length = int(self.headers.get("Content-Length") or 0)
                body = self.rfile.read(length) if length else b""
                server.pings.append(
                    ReceivedPing(self.command, self.path, dict(self.headers), body)
                )
                self.send_response(server.status_code)
                self.send_header("Content-Length", "2")
                self.end_headers()
                self.wfile.write(b"OK")

            do_GET = _record
            do_POST = _record

            def log_message(self, format, *args):
                pass

        self._httpd = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
        self._thread = threading.Thread(target=self._httpd.serve_forever, daemon=True)

    @property
    def base_url(self) -> str:
        host, port = self._httpd.server_address[:2]
        return f"http://{host}:{port}"

    def start(self):
        self._thread.start()

    def stop(self):
        self._httpd.shutdown()
        self._httpd.server_close()


@pytest.fixture
def ping_server():
    server = PingServer()
    server.start()
    yield server
    server.stop()
