"""
Network transports used by the request executor

A transport performs exactly one HTTP exchange. Everything protocol-level
(connections, TLS, chunked decoding) lives behind this seam.
"""

from typing import Callable, Optional, Sequence, Tuple

import urllib3
from urllib3.exceptions import HTTPError as Urllib3HTTPError

from ._exceptions import TransportError


HeaderPairs = Sequence[Tuple[str, str]]
WriteCallback = Callable[[bytes], None]

CHUNK_SIZE = 16 * 1024


def wire_value(value: str) -> str:
    """Header value as http.client will put it on the wire.

    http.client encodes values as latin-1; re-spelling the UTF-8 bytes as
    latin-1 sends them unchanged, as libcurl would.
    """
    return value.encode("utf-8").decode("latin-1")


class Transport:
    """Base class for transports"""

    name = "transport"

    def perform(
        self,
        method: str,
        url: str,
        body: Optional[bytes],
        headers: HeaderPairs,
        write: WriteCallback,
    ) -> int:
        """Perform one exchange.

        Args:
            method: Verb to put on the request line
            url: Absolute request URL
            body: Request entity, or None to send no body
            headers: (name, value) pairs, sent in order, duplicates kept
            write: Called with each chunk of the response body

        Returns:
            The response status code

        Raises:
            TransportError: When no complete response was received
        """
        raise NotImplementedError

    def close(self):
        """Release any resources held by the transport"""


class Urllib3Transport(Transport):
    """Transport backed by urllib3.

    Retries and redirects are disabled; a 3xx response is returned to the
    caller like any other status.
    """

    name = "urllib3"

    def __init__(self, timeout: Optional[float] = None):
        """
        Args:
            timeout: Connect/read timeout in seconds, None for no timeout
        """
        self.timeout = timeout
        self._pool = urllib3.PoolManager()

    def perform(self, method, url, body, headers, write):
        header_dict = urllib3.HTTPHeaderDict()
        for name, value in headers:
            header_dict.add(name, wire_value(value))

        kwargs = {}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout

        try:
            response = self._pool.urlopen(
                method,
                url,
                body=body,
                headers=header_dict,
                retries=False,
                redirect=False,
                preload_content=False,
                **kwargs,
            )
            try:
                for chunk in response.stream(CHUNK_SIZE, decode_content=True):
                    if chunk:
                        write(chunk)
            finally:
                response.release_conn()
        except Urllib3HTTPError as e:
            raise TransportError(str(e) or type(e).__name__) from e
        except ValueError as e:
            # http.client rejects header names it cannot encode and control characters
            raise TransportError(f"Invalid request header: {e}") from e

        return response.status

    def close(self):
        self._pool.clear()

    @staticmethod
    def version():
        return urllib3.__version__
