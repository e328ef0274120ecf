"""Abstract base class for response cache providers.

A cache provider maps a request path to the object that was deserialized
from the response of that path. :class:`~bitbucket_api.client.BitbucketClient`
reads it before every GET, writes it after every successful GET, and
never inspects entries beyond that.

Entries are only ever removed in bulk, by path prefix, through
:meth:`CacheProvider.delete_where_starting_with`.

To implement a new backend, subclass :class:`CacheProvider` and implement
:meth:`~CacheProvider.get`, :meth:`~CacheProvider.set` and
:meth:`~CacheProvider.delete_where_starting_with`.

See Also:
    :mod:`bitbucket_api.cache.memory` and :mod:`bitbucket_api.cache.disk`
    for the bundled implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional


class CacheProvider(ABC):
    """Key-value store for deserialized responses with prefix invalidation.

    Providers are responsible for their own thread safety; the client
    imposes no locking around them.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the value stored under *key*, or ``None`` on a miss.

        Args:
            key: The request path the value was stored under.
        """
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*, replacing any previous entry.

        Args:
            key: The request path.
            value: The deserialized response object.
        """
        ...

    @abstractmethod
    def delete_where_starting_with(self, prefix: str) -> None:
        """Remove every entry whose key starts with *prefix*.

        Args:
            prefix: Exact, case-sensitive key prefix. A prefix equal to a
                full key removes that entry.
        """
        ...

    def close(self) -> None:
        """Release any resources held by the provider."""


class NullCacheProvider(CacheProvider):
    """Provider that caches nothing.

    Every lookup misses and writes and deletes are discarded. This is the
    default provider of a client, which makes caching strictly opt-in.
    """

    def get(self, key: str) -> Optional[Any]:
        return None

    def set(self, key: str, value: Any) -> None:
        return None

    def delete_where_starting_with(self, prefix: str) -> None:
        return None
