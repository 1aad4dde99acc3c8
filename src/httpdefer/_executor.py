"""
Request execution shared by the blocking and deferred paths
"""

import logging

from ._exceptions import TransportError
from ._headers import split_header_line
from ._models import Failure, RequestOutcome, RequestSpec, Success
from ._transport import Transport

logger = logging.getLogger(__name__)


def decode_body(data: bytes) -> str:
    """Decode a response body as UTF-8, falling back to latin-1"""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin-1", errors="replace")


def execute(spec: RequestSpec, transport: Transport) -> RequestOutcome:
    """Perform one HTTP call and report how it ended.

    The verb is always sent explicitly. GET and DELETE carry no body; POST
    and PUT send ``spec.body`` (text as UTF-8, bytes unchanged), an absent
    body being sent as empty. Header lines are sent in order with no
    deduplication.

    Any exchange that completes is a Success, 4xx and 5xx included. Only a
    transport failure produces a Failure. Blocks for as long as the
    transport does.
    """
    method = spec.method

    body = None
    if method.sends_body:
        body = spec.body or b""
        if isinstance(body, str):
            body = body.encode("utf-8")

    headers = [split_header_line(line) for line in spec.headers]
    chunks = []

    logger.debug("%s %s (%d headers)", method.value, spec.url, len(headers))
    try:
        status_code = transport.perform(method.value, spec.url, body, headers, chunks.append)
    except TransportError as e:
        logger.warning("%s %s failed: %s", method.value, spec.url, e.message)
        return Failure(e.message)

    logger.debug("%s %s -> %d", method.value, spec.url, status_code)
    return Success(status_code=int(status_code), body=decode_body(b"".join(chunks)))
