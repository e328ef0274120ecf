"""Build a cache provider from a :class:`~bitbucket_api.models.CacheConfig`."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from bitbucket_api.cache.base import CacheProvider, NullCacheProvider
from bitbucket_api.cache.disk import DiskCacheProvider
from bitbucket_api.cache.memory import MemoryCacheProvider
from bitbucket_api.exceptions import ConfigError
from bitbucket_api.models import CacheConfig


def create_cache_provider(
    config: CacheConfig,
    cache_dir: Optional[str | Path] = None,
) -> CacheProvider:
    """Return the provider selected by *config*.

    Args:
        config: Cache settings. When ``enabled`` is ``False`` a
            :class:`NullCacheProvider` is returned.
        cache_dir: Root directory for the ``disk`` backend. Defaults to
            :func:`~bitbucket_api.config.get_cache_dir`.

    Raises:
        ConfigError: If ``backend`` names an unknown backend.
    """
    if not config.enabled:
        return NullCacheProvider()
    if config.backend == "memory":
        return MemoryCacheProvider()
    if config.backend == "disk":
        if cache_dir is None:
            from bitbucket_api.config import get_cache_dir

            cache_dir = get_cache_dir()
        return DiskCacheProvider(cache_dir, config)
    raise ConfigError(f"Unknown cache backend '{config.backend}'. Available backends: disk, memory")
