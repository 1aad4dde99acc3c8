"""
Pytest configuration and fixtures for httpdefer tests
"""

import os
import socket
import threading
from pathlib import Path

import pytest

from tests.fake_transport import FakeTransport

# Load .env file for local testing
# This allows HTTPDEFER_LIVE_URL and other env vars to be loaded from .env
try:
    from dotenv import load_dotenv

    env_path = Path(__file__).parent.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path)
except ImportError:
    # python-dotenv not installed, skip
    pass


@pytest.fixture
def http_server():
    """Create a test HTTP server"""
    from tests.test_server import MockHTTPServer

    server = MockHTTPServer()
    server.start()
    yield server
    server.stop()


@pytest.fixture
def transport():
    """Fake transport answering 200 "OK" """
    return FakeTransport()


@pytest.fixture
def gated_transport():
    """Fake transport that holds every exchange until the gate opens"""
    gate = threading.Event()
    fake = FakeTransport(gate=gate)
    yield fake
    # Never leave a worker blocked behind the gate
    gate.set()


@pytest.fixture
def unused_url():
    """URL of a local port nothing is listening on"""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return f"http://127.0.0.1:{port}"


@pytest.fixture(scope="session")
def live_url():
    """Live HTTP endpoint from HTTPDEFER_LIVE_URL, e.g. https://postman-echo.com"""
    url = os.environ.get("HTTPDEFER_LIVE_URL")
    if not url:
        pytest.skip("HTTPDEFER_LIVE_URL not set")
    return url


def pytest_configure(config):
    """Configure pytest"""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test (requires network)"
    )
    config.addinivalue_line("markers", "slow: mark test as slow running")


def pytest_collection_modifyitems(config, items):
    """Modify test collection"""
    for item in items:
        if "live_url" in item.fixturenames:
            item.add_marker(pytest.mark.integration)
        if "http_server" in item.fixturenames:
            item.add_marker(pytest.mark.slow)
