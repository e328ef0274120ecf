"""HTTP client module for bitbucket_api.

Classes:
    :class:`BitbucketClient` -- the request engine: cache, retry, error
        mapping and deserialization on top of a transport.
    :class:`Transport` / :class:`HttpTransport` -- one HTTP exchange per
        call, backed by :class:`httpx.Client`.
    :class:`Request` / :class:`Response` -- what goes into and comes out
        of a transport.

Example::

    from bitbucket_api.client import BitbucketClient

    with BitbucketClient("alice", "secret") as client:
        issues = client.repositories.issues("alice", "widget").get_issues()
"""

from bitbucket_api.client.sync_client import BitbucketClient
from bitbucket_api.client.transport import HttpTransport, Request, Response, Transport

__all__ = ["BitbucketClient", "HttpTransport", "Request", "Response", "Transport"]
