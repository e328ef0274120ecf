"""Disk-based cache provider.

Uses :mod:`diskcache` to persist deserialized responses on the filesystem
so that they survive the process. Entries are keyed by the raw request
path (no hashing) so that prefix invalidation can match on it, and expire
after :attr:`~bitbucket_api.models.CacheConfig.ttl_seconds`.

Values are pickled by :mod:`diskcache`; the resource models in
:mod:`bitbucket_api.models` pickle cleanly.

See Also:
    :class:`~bitbucket_api.models.CacheConfig` -- the Pydantic model that
    controls ``backend`` and ``ttl_seconds``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import diskcache

from bitbucket_api.cache.base import CacheProvider
from bitbucket_api.models import CacheConfig

logger = logging.getLogger(__name__)


class DiskCacheProvider(CacheProvider):
    """Persistent cache stored in a :class:`diskcache.Cache` directory.

    :mod:`diskcache` is safe to share between threads and processes, so
    no extra locking is done here.

    Args:
        cache_dir: Root directory for the cache. A ``responses/``
            subdirectory is created inside it.
        config: Cache configuration; only ``ttl_seconds`` is used.

    Example::

        from bitbucket_api.cache import DiskCacheProvider
        from bitbucket_api.models import CacheConfig

        cache = DiskCacheProvider("/tmp/bitbucket-cache", CacheConfig(ttl_seconds=600))
        cache.set("repositories/acme/widget", repo)
        hit = cache.get("repositories/acme/widget")
    """

    def __init__(self, cache_dir: str | Path, config: Optional[CacheConfig] = None) -> None:
        self._config = config or CacheConfig()
        self._directory = Path(cache_dir) / "responses"
        self._cache = diskcache.Cache(str(self._directory))

    @property
    def directory(self) -> Path:
        """Directory holding the cache database."""
        return self._directory

    def get(self, key: str) -> Optional[Any]:
        return self._cache.get(key)

    def set(self, key: str, value: Any) -> None:
        self._cache.set(key, value, expire=self._config.ttl_seconds)

    def delete_where_starting_with(self, prefix: str) -> None:
        stale = [key for key in self._cache.iterkeys() if isinstance(key, str) and key.startswith(prefix)]
        for key in stale:
            self._cache.delete(key)
        logger.debug("Removed %d cached entries under %r", len(stale), prefix)

    def clear(self) -> None:
        """Remove all entries from the cache."""
        self._cache.clear()

    def stats(self) -> dict[str, Any]:
        """Return cache statistics.

        Returns:
            A ``dict`` with ``size`` (number of entries), ``directory``
            (str path) and ``ttl_seconds``.
        """
        return {
            "size": len(self._cache),
            "directory": str(self._directory),
            "ttl_seconds": self._config.ttl_seconds,
        }

    def close(self) -> None:
        """Close the underlying :class:`diskcache.Cache` and release resources."""
        self._cache.close()
