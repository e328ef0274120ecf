"""Operations on the account the client is authenticated as."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bitbucket_api.controllers.base import Controller
from bitbucket_api.models import AccountModel, EmailModel, RepositoryDetailedModel

if TYPE_CHECKING:
    from bitbucket_api.client import BitbucketClient


class EmailsController(Controller):
    """Email addresses registered on the authenticated account."""

    @property
    def uri(self) -> str:
        return f"users/{self._client.username}/emails"

    def get_emails(self, force_cache_invalidation: bool = False) -> list[EmailModel]:
        return self._client.get(self.uri, list[EmailModel], force_cache_invalidation)

    def get_email(self, address: str, force_cache_invalidation: bool = False) -> EmailModel:
        return self._client.get(f"{self.uri}/{address}", EmailModel, force_cache_invalidation)

    def add_email(self, address: str) -> None:
        """Register *address* on the account; Bitbucket sends a confirmation mail."""
        self._client.put(f"{self.uri}/{address}")
        self._client.invalidate(self.uri)


class AccountController(Controller):
    """A controller dedicated to the user logged in.

    Attributes:
        emails: The account's email addresses.
    """

    def __init__(self, client: BitbucketClient) -> None:
        super().__init__(client)
        self.emails = EmailsController(client)

    def get_info(self, force_cache_invalidation: bool = False) -> AccountModel:
        """Return the account's user record and owned repositories."""
        return self._client.get("user", AccountModel, force_cache_invalidation)

    def get_repositories(self, force_cache_invalidation: bool = False) -> list[RepositoryDetailedModel]:
        """Return the repositories the account follows."""
        return self._client.get("user/follows", list[RepositoryDetailedModel], force_cache_invalidation)
