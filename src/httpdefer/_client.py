"""
HTTP client with blocking and deferred requests
"""

import logging
from typing import Mapping, Optional, Union

from ._async import TaskSlot
from ._exceptions import NoTaskOutstanding, TaskSlotBusy
from ._executor import execute
from ._headers import HeaderStore
from ._models import Method, RequestOutcome, RequestSpec
from ._transport import Transport, Urllib3Transport
from ._url import compose_url

logger = logging.getLogger(__name__)

Body = Union[str, bytes]


class Client:
    """HTTP client with a base URL, default headers and one async slot.

    Request methods return True or False and record what happened on the
    client. A completed exchange (any status code) stores the body and the
    status code and clears the last error. A failure stores only the error
    message, so ``status_code`` and ``response_body`` keep describing the
    last exchange that did complete.

    The recorded fields belong to this client. Requests should be issued
    from one thread; only the async worker runs concurrently.

    Example:
        >>> client = Client("https://api.github.com", {"Accept": "application/json"})
        >>> client.get_async("/users/github")
        True
        >>> client.wait()
        True
        >>> client.status_code
        200
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        headers: Optional[Mapping[str, object]] = None,
        *,
        transport: Optional[Transport] = None,
        slot: Optional[TaskSlot] = None,
        timeout: Optional[float] = None,
    ):
        """Create a client.

        Args:
            base_url: Prefix joined to every request path; "" means none
            headers: Default headers, appended in mapping order
            transport: Transport to send requests with (default: urllib3)
            slot: Async slot to use; pass one slot to several clients to
                allow a single outstanding async request between them
            timeout: Timeout in seconds for the default transport
        """
        self.base_url = base_url or None
        self._headers = HeaderStore(headers)

        self._owns_transport = transport is None
        self._transport = transport if transport is not None else Urllib3Transport(timeout=timeout)
        self._owns_slot = slot is None
        self._slot = slot if slot is not None else TaskSlot()

        self._status_code = 0
        self._response_body: Optional[str] = None
        self._last_error: Optional[str] = None
        self._last_outcome: Optional[RequestOutcome] = None

    # Recorded state

    @property
    def status_code(self) -> int:
        """Status of the last completed exchange, 0 if there was none"""
        return self._status_code

    @property
    def response_body(self) -> Optional[str]:
        """Body of the last completed exchange, None if there was none"""
        return self._response_body

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def last_outcome(self) -> Optional[RequestOutcome]:
        return self._last_outcome

    @property
    def headers(self):
        """Default header lines, in the order they were set"""
        return self._headers.to_list()

    @property
    def slot(self) -> TaskSlot:
        return self._slot

    @property
    def transport(self) -> Transport:
        return self._transport

    def set_header(self, key: str, value) -> bool:
        """Append a default header; an existing one with the same key is kept"""
        self._headers.append(key, value)
        return True

    def build_spec(self, method, path: str, body: Optional[Body] = None) -> RequestSpec:
        """Build the RequestSpec a request to ``path`` would send now"""
        method = Method.parse(method)
        return RequestSpec(
            method=method,
            url=compose_url(self.base_url, path),
            body=body if method.sends_body else None,
            headers=self._headers.snapshot(),
        )

    def _record(self, outcome: RequestOutcome) -> bool:
        self._last_outcome = outcome
        if outcome.ok:
            self._status_code = outcome.status_code
            self._response_body = outcome.body
            self._last_error = None
            return True
        self._last_error = outcome.message
        return False

    # Blocking requests

    def request(self, method, path: str, body: Optional[Body] = None) -> bool:
        """Execute a request and wait for it"""
        spec = self.build_spec(method, path, body)
        return self._record(execute(spec, self._transport))

    def get(self, path: str) -> bool:
        """Execute a GET request"""
        return self.request(Method.GET, path)

    def post(self, path: str, body: Optional[Body] = None) -> bool:
        """Execute a POST request"""
        return self.request(Method.POST, path, body)

    def put(self, path: str, body: Optional[Body] = None) -> bool:
        """Execute a PUT request"""
        return self.request(Method.PUT, path, body)

    def delete(self, path: str) -> bool:
        """Execute a DELETE request"""
        return self.request(Method.DELETE, path)

    # Deferred requests

    def request_async(self, method, path: str, body: Optional[Body] = None) -> bool:
        """Start a request on the async slot.

        Returns False, recording the reason in ``last_error``, when the slot
        already holds a request. Status and body are left alone.
        """
        spec = self.build_spec(method, path, body)
        try:
            self._slot.start(spec, self._transport)
        except TaskSlotBusy as e:
            logger.debug("Rejected async %s %s: %s", spec.method.value, spec.url, e)
            self._last_error = str(e)
            return False
        return True

    def get_async(self, path: str) -> bool:
        """Start a GET request in the background"""
        return self.request_async(Method.GET, path)

    def post_async(self, path: str, body: Optional[Body] = None) -> bool:
        """Start a POST request in the background"""
        return self.request_async(Method.POST, path, body)

    def put_async(self, path: str, body: Optional[Body] = None) -> bool:
        """Start a PUT request in the background"""
        return self.request_async(Method.PUT, path, body)

    def delete_async(self, path: str) -> bool:
        """Start a DELETE request in the background"""
        return self.request_async(Method.DELETE, path)

    def wait(self) -> bool:
        """Wait for the outstanding async request and record its outcome.

        Returns False if nothing was outstanding or the request failed.
        """
        try:
            outcome = self._slot.wait()
        except NoTaskOutstanding as e:
            self._last_error = str(e)
            return False
        return self._record(outcome)

    def close(self):
        """Reap a request still running on this client's own slot"""
        if self._owns_slot and self._slot.pending:
            self.wait()
        if self._owns_transport:
            self._transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self):
        return f"<Client base_url={self.base_url!r} slot={self._slot.state.value}>"


def request(
    method,
    url: str,
    body: Optional[Body] = None,
    headers: Optional[Mapping[str, object]] = None,
    timeout: Optional[float] = None,
) -> RequestOutcome:
    """Make a one-off blocking request.

    Creates a client, makes the request and cleans up. For several requests
    use a Client.

    Returns:
        Success with status and body, or Failure with the transport message
    """
    with Client(headers=headers, timeout=timeout) as client:
        client.request(method, url, body)
        return client.last_outcome
