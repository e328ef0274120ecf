"""Base class for resource controllers.

A controller is a thin façade over
:class:`~bitbucket_api.client.BitbucketClient`: each method fills a fixed
path template, names the result type and hands both to the client.
Controllers hold no state of their own beyond the client reference and
the identifiers baked into their paths.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bitbucket_api.client import BitbucketClient


class Controller:
    """Holds the client every controller method delegates to.

    Args:
        client: The client whose request engine is used.
    """

    def __init__(self, client: BitbucketClient) -> None:
        self._client = client

    @property
    def client(self) -> BitbucketClient:
        return self._client
