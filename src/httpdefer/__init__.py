"""
httpdefer - fire now, collect later

Embeddable HTTP client with blocking requests and a single background
request slot per client.
"""

import logging

__version__ = "0.1.0"
__license__ = "MIT"

from httpdefer._async import AsyncTask, SlotState, TaskSlot
from httpdefer._client import Client, request
from httpdefer._exceptions import (
    HttpDeferError,
    NoTaskOutstanding,
    TaskSlotBusy,
    TransportError,
)
from httpdefer._executor import execute
from httpdefer._headers import HeaderStore
from httpdefer._models import Failure, Method, RequestOutcome, RequestSpec, Success
from httpdefer._transport import Transport, Urllib3Transport
from httpdefer._url import compose_url

logging.getLogger(__name__).addHandler(logging.NullHandler())


def version():
    """Get library version"""
    return __version__


def info():
    """Library and transport versions"""
    return {
        "version": __version__,
        "transport": f"urllib3 {Urllib3Transport.version()}",
    }


__all__ = [
    "Client",
    "request",
    "TaskSlot",
    "AsyncTask",
    "SlotState",
    "HeaderStore",
    "compose_url",
    "execute",
    "Method",
    "RequestSpec",
    "RequestOutcome",
    "Success",
    "Failure",
    "Transport",
    "Urllib3Transport",
    "HttpDeferError",
    "TransportError",
    "TaskSlotBusy",
    "NoTaskOutstanding",
    "version",
    "info",
]
