"""Pluggable response caching for bitbucket_api.

A :class:`CacheProvider` stores deserialized GET results keyed by request
path and supports bulk invalidation by path prefix. Three providers ship
with the package:

- :class:`NullCacheProvider` -- the default; caches nothing.
- :class:`MemoryCacheProvider` -- thread-safe, per-process ``dict``.
- :class:`DiskCacheProvider` -- persistent, backed by :mod:`diskcache`.

:func:`create_cache_provider` picks one from a
:class:`~bitbucket_api.models.CacheConfig`.
"""

from bitbucket_api.cache.base import CacheProvider, NullCacheProvider
from bitbucket_api.cache.disk import DiskCacheProvider
from bitbucket_api.cache.factory import create_cache_provider
from bitbucket_api.cache.memory import MemoryCacheProvider

__all__ = [
    "CacheProvider",
    "DiskCacheProvider",
    "MemoryCacheProvider",
    "NullCacheProvider",
    "create_cache_provider",
]
