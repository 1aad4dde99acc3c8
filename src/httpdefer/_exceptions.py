"""
Exceptions raised by httpdefer
"""


class HttpDeferError(Exception):
    """Base class for all httpdefer errors"""


class TransportError(HttpDeferError):
    """The network exchange could not be completed.

    Connection refused, DNS failure, timeout or a protocol violation. The
    message is passed through from the transport.
    """

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class TaskSlotBusy(HttpDeferError):
    """An async request was started while another is still outstanding"""

    def __init__(self, message="An async request is already in progress"):
        super().__init__(message)


class NoTaskOutstanding(HttpDeferError):
    """wait() was called with no async request pending"""

    def __init__(self, message="No async request in progress"):
        super().__init__(message)
