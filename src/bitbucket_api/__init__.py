"""bitbucket_api -- typed client for the Bitbucket 1.0 REST API.

Remote resources (accounts, users, repositories, issues) are exposed as
typed operations returning Pydantic models. Authentication, response
caching, retry of connection failures and error mapping happen in one
request engine that every resource controller delegates to.

Typical usage::

    from bitbucket_api import BitbucketClient
    from bitbucket_api.cache import MemoryCacheProvider

    with BitbucketClient("alice", "secret", cache_provider=MemoryCacheProvider()) as client:
        repo = client.repositories.get_repository("alice", "widget")

Modules:
    client: The request engine and the HTTP transport.
    controllers: Resource façades over the engine.
    cache: Pluggable cache providers.
    models: Pydantic models for configuration and API resources.
    config: XDG-aware configuration and credential resolution.
    exceptions: Exception hierarchy with per-status-code errors.
"""

from bitbucket_api.client import BitbucketClient

__version__ = "0.1.0"

__all__ = ["BitbucketClient", "__version__"]
