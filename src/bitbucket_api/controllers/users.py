"""Operations on arbitrary Bitbucket users."""

from __future__ import annotations

from bitbucket_api.controllers.base import Controller
from bitbucket_api.models import AccountModel, EventsModel, FollowersModel


class UsersController(Controller):
    """The users on Bitbucket, addressed by username."""

    def get_user(self, username: str, force_cache_invalidation: bool = False) -> AccountModel:
        """Return a user and the public repositories they own."""
        return self._client.get(f"users/{username}", AccountModel, force_cache_invalidation)

    def get_events(self, username: str, force_cache_invalidation: bool = False) -> EventsModel:
        return self._client.get(f"users/{username}/events", EventsModel, force_cache_invalidation)

    def get_followers(self, username: str, force_cache_invalidation: bool = False) -> FollowersModel:
        return self._client.get(f"users/{username}/followers", FollowersModel, force_cache_invalidation)
