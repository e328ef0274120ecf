"""Single HTTP exchanges with the Bitbucket API.

A :class:`Transport` turns one :class:`Request` into one :class:`Response`.
It never retries and never raises for HTTP status codes; connection-level
failures (refused connections, DNS errors, timeouts) come back as a
:class:`Response` whose ``status_code`` is ``None`` so that
:class:`~bitbucket_api.client.BitbucketClient` can decide whether to try
again. Exchanges that did reach the server but cannot be completed
(redirect loops, undecodable bodies) raise
:class:`~bitbucket_api.exceptions.InvalidResponseError` instead.

:class:`HttpTransport` is the production implementation on top of
:class:`httpx.Client`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

import httpx

from bitbucket_api.exceptions import InvalidResponseError
from bitbucket_api.models import API_URL, HTTPMethod


@dataclass(frozen=True)
class Request:
    """An outgoing request, immutable once built.

    Attributes:
        method: HTTP verb.
        path: Path relative to the transport's base URL. Also the cache key.
        parameters: Form fields, sent in the body (or query string for GET).
        headers: Extra request headers.
    """

    method: HTTPMethod
    path: str
    parameters: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        method: HTTPMethod,
        path: str,
        data: Optional[dict[str, str]] = None,
    ) -> Request:
        """Build a request, marking a PUT without data as zero-length.

        Some servers reject a PUT whose body length is ambiguous, so a PUT
        built with ``data=None`` carries an explicit ``Content-Length: 0``.
        """
        headers: dict[str, str] = {}
        if method is HTTPMethod.PUT and data is None:
            headers["Content-Length"] = "0"
        return cls(method=method, path=path, parameters=dict(data or {}), headers=headers)

    @property
    def is_zero_length(self) -> bool:
        """True when the request declares an empty body."""
        return self.headers.get("Content-Length") == "0"


@dataclass
class Response:
    """The outcome of one transport attempt.

    Attributes:
        status_code: HTTP status, or ``None`` when no response was received.
        content: Raw response body.
        error: The transport exception when ``status_code`` is ``None``.
    """

    status_code: Optional[int]
    content: bytes = b""
    content_type: str = ""
    error: Optional[Exception] = None

    @property
    def is_success(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class Transport(ABC):
    """Performs one HTTP exchange per :meth:`send` call."""

    @abstractmethod
    def send(self, request: Request) -> Response:
        """Send *request* once and return what came back.

        Implementations must not raise for HTTP error statuses or for
        connection failures; the latter are reported as a
        :class:`Response` with ``status_code=None``.
        """
        ...

    def close(self) -> None:
        """Release the underlying connection pool."""


class HttpTransport(Transport):
    """Transport backed by a long-lived :class:`httpx.Client`.

    Every request carries HTTP Basic credentials and ``Accept:
    application/json``. Redirects are followed.

    Args:
        username: Account name for Basic auth.
        password: Account password or app password.
        base_url: API root; relative request paths are joined onto it.
        timeout: Seconds allowed for each exchange.
        verify_ssl: Verify the server certificate.
        transport: Optional :class:`httpx.BaseTransport`, mainly for
            :class:`httpx.MockTransport` in tests.
    """

    def __init__(
        self,
        username: str,
        password: str,
        base_url: str = API_URL,
        timeout: float = 30,
        verify_ssl: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            auth=httpx.BasicAuth(username, password),
            timeout=timeout,
            verify=verify_ssl,
            follow_redirects=True,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    @property
    def timeout(self) -> httpx.Timeout:
        return self._client.timeout

    def send(self, request: Request) -> Response:
        kwargs: dict[str, object] = {
            "method": request.method.value,
            "url": request.path,
            "headers": request.headers,
        }
        if request.parameters:
            if request.method is HTTPMethod.GET:
                kwargs["params"] = request.parameters
            else:
                kwargs["data"] = request.parameters

        try:
            response = self._client.request(**kwargs)  # type: ignore[arg-type]
        except httpx.TransportError as exc:
            return Response(status_code=None, error=exc)
        except (httpx.TooManyRedirects, httpx.DecodingError) as exc:
            raise InvalidResponseError(
                f"Invalid response to {request.method.value} {request.path}: {exc}"
            ) from exc

        return Response(
            status_code=response.status_code,
            content=response.content,
            content_type=response.headers.get("content-type", ""),
        )

    def close(self) -> None:
        self._client.close()
