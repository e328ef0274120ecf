"""Repository lookups and access to per-repository sub-resources."""

from __future__ import annotations

from bitbucket_api.controllers.base import Controller
from bitbucket_api.controllers.issues import IssuesController
from bitbucket_api.models import (
    AccountModel,
    BranchModel,
    EventsModel,
    FollowersModel,
    RepositoryDetailedModel,
    TagModel,
)


class RepositoriesController(Controller):
    """The repositories on Bitbucket, addressed by ``owner/slug``."""

    def get_repository(
        self,
        owner: str,
        slug: str,
        force_cache_invalidation: bool = False,
    ) -> RepositoryDetailedModel:
        return self._client.get(
            f"repositories/{owner}/{slug}", RepositoryDetailedModel, force_cache_invalidation,
        )

    def get_repositories(self, owner: str, force_cache_invalidation: bool = False) -> list[RepositoryDetailedModel]:
        """Return the repositories *owner* owns, as listed on their user record."""
        account = self._client.get(f"users/{owner}", AccountModel, force_cache_invalidation)
        return account.repositories

    def get_events(self, owner: str, slug: str, force_cache_invalidation: bool = False) -> EventsModel:
        return self._client.get(f"repositories/{owner}/{slug}/events", EventsModel, force_cache_invalidation)

    def get_followers(self, owner: str, slug: str, force_cache_invalidation: bool = False) -> FollowersModel:
        return self._client.get(
            f"repositories/{owner}/{slug}/followers", FollowersModel, force_cache_invalidation,
        )

    def get_branches(self, owner: str, slug: str, force_cache_invalidation: bool = False) -> dict[str, BranchModel]:
        """Return branch heads keyed by branch name."""
        return self._client.get(
            f"repositories/{owner}/{slug}/branches", dict[str, BranchModel], force_cache_invalidation,
        )

    def get_tags(self, owner: str, slug: str, force_cache_invalidation: bool = False) -> dict[str, TagModel]:
        """Return tagged changesets keyed by tag name."""
        return self._client.get(
            f"repositories/{owner}/{slug}/tags", dict[str, TagModel], force_cache_invalidation,
        )

    def issues(self, owner: str, slug: str) -> IssuesController:
        """Return the issue tracker controller of ``owner/slug``."""
        return IssuesController(self._client, owner, slug)
