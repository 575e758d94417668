"""Authentication interfaces following Black Box Design principles."""
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Optional, Protocol, Sequence, Tuple, Union

import httpx

from ..api.models import AuthResult

HeaderSource = Union[httpx.Headers, Mapping[str, str], Sequence[Tuple[str, str]]]
Sleep = Callable[[float], Awaitable[Any]]
Clock = Callable[[], float]


@dataclass(frozen=True)
class InboundRequest:
    """
    Read-only view of the request being authenticated.

    Headers are held in an ``httpx.Headers`` so lookups are
    case-insensitive and repeated headers are joined with ", ".
    """
    url: str
    method: str
    headers: httpx.Headers
    remote_address: Optional[str] = None

    @classmethod
    def build(
        cls,
        url: str = "",
        method: str = "GET",
        headers: Optional[HeaderSource] = None,
        remote_address: Optional[str] = None,
    ) -> "InboundRequest":
        """Create a view from plain values."""
        return cls(
            url=url,
            method=method.upper(),
            headers=httpx.Headers(headers or {}),
            remote_address=remote_address,
        )

    @classmethod
    def from_request(cls, request: Any) -> "InboundRequest":
        """
        Adapt a framework request object.

        Works with Starlette/FastAPI requests (peer address from
        ``request.client.host``), httpx requests and any object exposing
        ``url``, ``method`` and ``headers``.

        Raises:
            TypeError: If the object does not look like an HTTP request
        """
        if isinstance(request, cls):
            return request

        headers = getattr(request, "headers", None)
        if headers is None:
            raise TypeError(f"Cannot authenticate object of type {type(request).__name__}: no headers")

        remote_address = getattr(request, "remote_address", None)
        client = getattr(request, "client", None)
        if remote_address is None and client is not None:
            remote_address = getattr(client, "host", None)

        return cls.build(
            url=str(getattr(request, "url", "") or ""),
            method=str(getattr(request, "method", "") or "GET"),
            headers=headers,
            remote_address=remote_address,
        )


class Authenticator(Protocol):
    """Protocol for anything that can authenticate an inbound request."""

    async def authenticate(self, request: Any) -> AuthResult[bool]:
        """
        Authenticate a request.

        Returns:
            AuthResult with either ``result=True`` or an error
        """
        ...
