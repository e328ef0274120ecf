"""In-process cache provider backed by a plain ``dict``."""

from __future__ import annotations

import threading
from typing import Any, Optional

from bitbucket_api.cache.base import CacheProvider


class MemoryCacheProvider(CacheProvider):
    """Thread-safe in-memory cache that lives as long as the provider.

    Entries never expire on their own; they are dropped through
    :meth:`delete_where_starting_with` or :meth:`clear`.

    Example::

        cache = MemoryCacheProvider()
        client = BitbucketClient("user", "secret", cache_provider=cache)
    """

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._entries.get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = value

    def delete_where_starting_with(self, prefix: str) -> None:
        with self._lock:
            stale = [key for key in self._entries if key.startswith(prefix)]
            for key in stale:
                del self._entries[key]

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
