"""Shared test fixtures for bitbucket_api.

Provides reusable fixtures for isolated config environments, cache
providers, and clients wired to an :class:`httpx.MockTransport`. These
fixtures are automatically discovered by pytest and available to all
test modules without explicit imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import httpx
import pytest

from bitbucket_api.cache import MemoryCacheProvider
from bitbucket_api.client import BitbucketClient, HttpTransport

BASE_URL = "https://api.example.com/1.0"

Handler = Callable[[httpx.Request], httpx.Response]


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_CACHE_HOME to subdirectories of tmp_path
    so that tests never touch real user config, and clears all
    BITBUCKET_* environment variables.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setattr("bitbucket_api.config._is_xdg_platform", lambda: True)

    for var in ["BITBUCKET_API_URL", "BITBUCKET_USERNAME", "BITBUCKET_PASSWORD"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Cache and client fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def memory_cache() -> MemoryCacheProvider:
    """An empty in-memory cache provider."""
    return MemoryCacheProvider()


@pytest.fixture
def make_client():
    """Factory for clients whose HTTP traffic goes to a handler function.

    Usage::

        client = make_client(handler, retries=2, cache_provider=cache)

    Every client created here is closed after the test.
    """
    created: list[BitbucketClient] = []

    def _make(
        handler: Handler,
        retries: int = 3,
        cache_provider: MemoryCacheProvider | None = None,
        username: str = "alice",
        password: str = "secret",
    ) -> BitbucketClient:
        transport = HttpTransport(
            username,
            password,
            base_url=BASE_URL,
            transport=httpx.MockTransport(handler),
        )
        client = BitbucketClient(
            username,
            password,
            retries=retries,
            cache_provider=cache_provider,
            transport=transport,
        )
        created.append(client)
        return client

    yield _make

    for client in created:
        client.close()
