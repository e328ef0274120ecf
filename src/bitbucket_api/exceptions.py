"""Exception hierarchy for bitbucket_api.

All exceptions inherit from :class:`BitbucketError`. HTTP-level failures
derive from :class:`StatusCodeError`, which carries the original
``status_code`` so that callers can branch on it, and are built from the
classification table in :meth:`StatusCodeError.from_status`.

Subclass hierarchy::

    BitbucketError
    +-- InvalidArgumentError
    +-- NoConnectionError
    +-- DeserializationError
    +-- InvalidResponseError
    +-- ConfigError
    +-- StatusCodeError
        +-- BadRequestError          (400)
        +-- AuthError
        |   +-- UnauthorizedError    (401)
        |   +-- ForbiddenError       (403)
        +-- NotFoundError            (404)
        +-- MethodNotAllowedError    (405)
        +-- ConflictError            (409)
        +-- ServerError              (5xx)
            +-- InternalServerError  (500)
            +-- BadGatewayError      (502)
            +-- ServiceUnavailableError (503)
            +-- GatewayTimeoutError  (504)
"""

from __future__ import annotations

from typing import Optional


class BitbucketError(Exception):
    """Base exception for all bitbucket_api errors.

    Args:
        message: Human-readable error description.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgumentError(BitbucketError):
    """Raised when a request is built without a path."""


class NoConnectionError(BitbucketError):
    """Raised when every attempt of a request failed below the HTTP layer.

    Connection refused, DNS failures and timeouts leave the transport
    without a status code. Those are retried; once the retry budget is
    spent this error is raised.

    Args:
        message: Human-readable error description.
        attempts: Number of transport attempts that were made.
    """

    def __init__(self, message: str, attempts: int = 0):
        super().__init__(message)
        self.attempts = attempts


class DeserializationError(BitbucketError):
    """Raised when a response body does not match the expected result type."""


class InvalidResponseError(BitbucketError):
    """Raised when the server answered but the exchange cannot be completed.

    Redirect loops and bodies that fail to decode (bad ``Content-Encoding``)
    land here. They are not retried.
    """


class ConfigError(BitbucketError):
    """Raised for configuration problems (invalid JSON, bad credential sources)."""


class StatusCodeError(BitbucketError):
    """Raised when the API answers with a non-success HTTP status.

    Args:
        status_code: The HTTP status code returned by the server.
        message: Human-readable error description.
    """

    def __init__(self, status_code: int, message: Optional[str] = None):
        super().__init__(message or f"HTTP {status_code}")
        self.status_code = status_code

    @classmethod
    def from_status(cls, status_code: int, message: Optional[str] = None) -> StatusCodeError:
        """Build the error class registered for *status_code*.

        Unregistered 5xx codes become :class:`ServerError`; any other
        unregistered code becomes a plain :class:`StatusCodeError`.

        Args:
            status_code: The HTTP status code returned by the server.
            message: Optional description, defaults to ``"HTTP <code>"``.

        Returns:
            An instance of the matching subclass (not raised).
        """
        error_cls = _STATUS_ERRORS.get(status_code)
        if error_cls is None:
            error_cls = ServerError if 500 <= status_code < 600 else StatusCodeError
        return error_cls(status_code, message)


class BadRequestError(StatusCodeError):
    """HTTP 400 -- the server rejected the request parameters."""


class AuthError(StatusCodeError):
    """Raised when authentication or authorisation fails (401 / 403)."""


class UnauthorizedError(AuthError):
    """HTTP 401 -- the credentials were missing or rejected."""


class ForbiddenError(AuthError):
    """HTTP 403 -- the credentials do not grant access to the resource."""


class NotFoundError(StatusCodeError):
    """HTTP 404 -- the resource does not exist."""


class MethodNotAllowedError(StatusCodeError):
    """HTTP 405."""


class ConflictError(StatusCodeError):
    """HTTP 409 -- the resource already exists or was modified concurrently."""


class ServerError(StatusCodeError):
    """Raised when the API returns an HTTP 5xx server error."""


class InternalServerError(ServerError):
    """HTTP 500."""


class BadGatewayError(ServerError):
    """HTTP 502."""


class ServiceUnavailableError(ServerError):
    """HTTP 503."""


class GatewayTimeoutError(ServerError):
    """HTTP 504."""


_STATUS_ERRORS: dict[int, type[StatusCodeError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    405: MethodNotAllowedError,
    409: ConflictError,
    500: InternalServerError,
    502: BadGatewayError,
    503: ServiceUnavailableError,
    504: GatewayTimeoutError,
}
