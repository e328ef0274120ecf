"""Synchronous Bitbucket client with cache, retry, and error mapping.

This module provides :class:`BitbucketClient`, the request engine every
controller delegates to. It layers on top of a
:class:`~bitbucket_api.client.transport.Transport`:

- **Response caching** -- GET results are read from and written to a
  :class:`~bitbucket_api.cache.CacheProvider`, keyed by request path.
  The default provider caches nothing.
- **Retry** -- connection-level failures (no HTTP status at all) are
  retried immediately, up to ``retries`` extra attempts. HTTP error
  statuses are never retried.
- **Error mapping** -- every non-2xx status raises the
  :class:`~bitbucket_api.exceptions.StatusCodeError` subclass registered
  for it.
- **Deserialization** -- JSON bodies are validated into the result type
  the caller asks for.

The client never invalidates the cache on its own after a write; the
controllers call :meth:`BitbucketClient.invalidate` with the prefixes a
mutation affects.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, TypeVar, overload

from bitbucket_api.cache import CacheProvider, NullCacheProvider, create_cache_provider
from bitbucket_api.client.response import deserialize, error_message, from_cache
from bitbucket_api.client.transport import HttpTransport, Request, Response, Transport
from bitbucket_api.controllers import AccountController, RepositoriesController, UsersController
from bitbucket_api.exceptions import InvalidArgumentError, NoConnectionError, StatusCodeError
from bitbucket_api.models import API_URL, ClientConfig, HTTPMethod

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BitbucketClient:
    """Client for the Bitbucket 1.0 REST API.

    Owns one transport and one cache provider for its whole lifetime.
    Resource operations are reached through the :attr:`account`,
    :attr:`users` and :attr:`repositories` controllers; the
    :meth:`get` / :meth:`put` / :meth:`post` / :meth:`delete` methods are
    the engine they share.

    Args:
        username: Account name, sent as HTTP Basic credentials.
        password: Account password, sent as HTTP Basic credentials.
        base_url: API root.
        timeout: Seconds allowed for each transport call.
        retries: Extra attempts allowed after a connection-level failure.
        cache_provider: Where GET results are cached. ``None`` disables
            caching.
        transport: Replaces the default :class:`HttpTransport`; the
            credentials, ``base_url`` and ``timeout`` are then ignored.

    Example::

        with BitbucketClient("alice", "secret", cache_provider=MemoryCacheProvider()) as client:
            repo = client.repositories.get_repository("alice", "widget")
    """

    def __init__(
        self,
        username: str,
        password: str,
        base_url: str = API_URL,
        timeout: float = 30,
        retries: int = 3,
        cache_provider: Optional[CacheProvider] = None,
        transport: Optional[Transport] = None,
    ) -> None:
        self._username = username
        self._password = password
        self.retries = retries
        self._cache: CacheProvider = cache_provider if cache_provider is not None else NullCacheProvider()
        self._transport: Transport = transport or HttpTransport(
            username, password, base_url=base_url, timeout=timeout,
        )
        self.account = AccountController(self)
        self.users = UsersController(self)
        self.repositories = RepositoriesController(self)

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        password: Optional[str] = None,
        cache_provider: Optional[CacheProvider] = None,
    ) -> BitbucketClient:
        """Create a client from a :class:`~bitbucket_api.models.ClientConfig`.

        Args:
            config: Typically the result of
                :func:`~bitbucket_api.config.resolve_config`.
            password: Overrides ``config.credentials.password_source``.
            cache_provider: Overrides the provider built from
                ``config.cache``.

        Raises:
            ConfigError: If the password source cannot be resolved or the
                cache backend is unknown.
        """
        from bitbucket_api.config import resolve_credential

        if password is None:
            password = resolve_credential(config.credentials.password_source)
        if cache_provider is None:
            cache_provider = create_cache_provider(config.cache)
        transport = HttpTransport(
            config.credentials.username,
            password,
            base_url=config.base_url,
            timeout=config.request.timeout,
            verify_ssl=config.request.verify_ssl,
        )
        return cls(
            config.credentials.username,
            password,
            retries=config.request.retries,
            cache_provider=cache_provider,
            transport=transport,
        )

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> BitbucketClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the transport and the cache provider."""
        self._transport.close()
        self._cache.close()

    # ------------------------------------------------------------------ #
    # Properties
    # ------------------------------------------------------------------ #

    @property
    def retries(self) -> int:
        """Extra attempts allowed after a connection-level failure."""
        return self._retries

    @retries.setter
    def retries(self, value: int) -> None:
        if value < 0:
            raise InvalidArgumentError("retries must not be negative")
        self._retries = value

    @property
    def username(self) -> str:
        return self._username

    @property
    def password(self) -> str:
        return self._password

    @property
    def cache_provider(self) -> CacheProvider:
        return self._cache

    @property
    def transport(self) -> Transport:
        return self._transport

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    def invalidate(self, prefix: str) -> None:
        """Drop every cached result whose path starts with *prefix*."""
        logger.debug("Invalidating cache entries under %r", prefix)
        self._cache.delete_where_starting_with(prefix)

    def get(self, path: str, result_type: type[T], force_cache_invalidation: bool = False) -> T:
        """Send a GET request, reading through the cache.

        Args:
            path: Path relative to the API root; also the cache key.
            result_type: Type the JSON body is validated into.
            force_cache_invalidation: Skip the cache lookup. The fresh
                result still replaces the cached one.

        Returns:
            The cached or freshly deserialized value.
        """
        if not force_cache_invalidation:
            cached = from_cache(self._cache.get(path), result_type)
            if cached is not None:
                logger.debug("Cache hit: GET %s", path)
                return cached

        result = self.request(path, HTTPMethod.GET, result_type=result_type)
        self._cache.set(path, result)
        return result

    @overload
    def put(self, path: str, data: Optional[dict[str, str]] = None, result_type: None = None) -> None: ...

    @overload
    def put(self, path: str, data: Optional[dict[str, str]], result_type: type[T]) -> T: ...

    def put(
        self,
        path: str,
        data: Optional[dict[str, str]] = None,
        result_type: Optional[type[Any]] = None,
    ) -> Any:
        """Send a PUT request.

        Without *data* the request declares an empty body.

        Returns:
            The deserialized body, or ``None`` when *result_type* is ``None``.
        """
        return self.request(path, HTTPMethod.PUT, data, result_type)

    @overload
    def post(self, path: str, data: dict[str, str], result_type: None = None) -> None: ...

    @overload
    def post(self, path: str, data: dict[str, str], result_type: type[T]) -> T: ...

    def post(
        self,
        path: str,
        data: dict[str, str],
        result_type: Optional[type[Any]] = None,
    ) -> Any:
        """Send a POST request with form-encoded *data*.

        Returns:
            The deserialized body, or ``None`` when *result_type* is ``None``.
        """
        return self.request(path, HTTPMethod.POST, data, result_type)

    def delete(self, path: str) -> None:
        """Send a DELETE request. An empty success body is expected."""
        self.execute_request(path, HTTPMethod.DELETE)

    def request(
        self,
        path: str,
        method: HTTPMethod = HTTPMethod.GET,
        data: Optional[dict[str, str]] = None,
        result_type: Optional[type[Any]] = None,
    ) -> Any:
        """Execute a request and deserialize its body into *result_type*.

        The cache is not consulted; use :meth:`get` for cached reads.

        Returns:
            The deserialized body, or ``None`` when *result_type* is ``None``.

        Raises:
            DeserializationError: If the body does not match *result_type*.
        """
        response = self.execute_request(path, method, data)
        if result_type is None:
            return None
        return deserialize(response, result_type)

    def execute_request(
        self,
        path: str,
        method: HTTPMethod,
        data: Optional[dict[str, str]] = None,
    ) -> Response:
        """Send a request, retrying connection-level failures.

        At most ``retries + 1`` transport attempts are made. An attempt
        that produces no HTTP status is retried immediately; any 2xx
        status ends the loop; any other status raises at once.

        Args:
            path: Path relative to the API root.
            method: HTTP verb.
            data: Form fields. A PUT without data declares an empty body.

        Returns:
            The successful :class:`Response`.

        Raises:
            InvalidArgumentError: If *path* is ``None``.
            StatusCodeError: On any non-2xx status (subclass per code).
            NoConnectionError: When every attempt failed without a status.
            InvalidResponseError: When a response arrived but could not be
                completed (redirect loop, undecodable body). Not retried.
        """
        if path is None:
            raise InvalidArgumentError("path must not be None")

        request = Request.build(method, path, data)
        attempts = self.retries + 1
        last_error: Optional[Exception] = None

        for attempt in range(attempts):
            response = self._transport.send(request)

            if response.is_success:
                return response

            if response.status_code is None:
                last_error = response.error
                logger.debug(
                    "No response for %s %s (attempt %d/%d): %s",
                    method.value, path, attempt + 1, attempts, last_error,
                )
                continue

            raise StatusCodeError.from_status(response.status_code, error_message(response))

        logger.warning("Giving up on %s %s after %d attempts", method.value, path, attempts)
        raise NoConnectionError(
            f"Unable to execute {method.value} {path}: no connection available "
            f"after {attempts} attempts",
            attempts=attempts,
        ) from last_error
