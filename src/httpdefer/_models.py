"""
Value types shared by the executor, the task slot and the client
"""

import enum
from dataclasses import dataclass
from typing import Optional, Tuple, Union


class Method(str, enum.Enum):
    """HTTP verbs the client can send"""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def sends_body(self) -> bool:
        """Whether the verb carries a request entity"""
        return self in (Method.POST, Method.PUT)

    @classmethod
    def parse(cls, value) -> "Method":
        """Accept a Method or a case-insensitive verb string"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ValueError(f"Unsupported HTTP method: {value!r}") from None


@dataclass(frozen=True)
class RequestSpec:
    """Immutable description of one HTTP call.

    ``headers`` is a tuple of ``"key: value"`` lines, copied out of the
    client's header store when the spec is built.
    """

    method: Method
    url: str
    body: Optional[Union[str, bytes]] = None
    headers: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "method", Method.parse(self.method))
        object.__setattr__(self, "headers", tuple(self.headers))


@dataclass(frozen=True)
class Success:
    """A completed exchange, whatever the status class"""

    status_code: int
    body: str

    ok = True


@dataclass(frozen=True)
class Failure:
    """A transport-level failure"""

    message: str

    ok = False


RequestOutcome = Union[Success, Failure]
