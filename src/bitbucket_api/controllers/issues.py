"""Issue tracker of a single repository.

Every mutation invalidates the cached results under the repository's
``issues`` path, which covers issue lists, single issues, comments and
the tracker metadata (components, versions, milestones).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bitbucket_api.controllers.base import Controller
from bitbucket_api.models import (
    CommentModel,
    ComponentModel,
    CreateIssueModel,
    IssueModel,
    IssuesModel,
    MilestoneModel,
    VersionModel,
    form_data,
)

if TYPE_CHECKING:
    from bitbucket_api.client import BitbucketClient


class IssuesController(Controller):
    """Issues of the repository ``owner/slug``.

    Obtain one through
    :meth:`~bitbucket_api.controllers.RepositoriesController.issues`.
    """

    def __init__(self, client: BitbucketClient, owner: str, slug: str) -> None:
        super().__init__(client)
        self.owner = owner
        self.slug = slug

    @property
    def uri(self) -> str:
        return f"repositories/{self.owner}/{self.slug}/issues"

    def get_issues(
        self,
        start: int = 0,
        limit: int = 15,
        force_cache_invalidation: bool = False,
    ) -> IssuesModel:
        """Return one page of issues; the API caps *limit* at 50."""
        return self._client.get(
            f"{self.uri}?start={start}&limit={limit}", IssuesModel, force_cache_invalidation,
        )

    def get_issue(self, issue_id: int, force_cache_invalidation: bool = False) -> IssueModel:
        return self._client.get(f"{self.uri}/{issue_id}", IssueModel, force_cache_invalidation)

    def create_issue(self, issue: CreateIssueModel) -> IssueModel:
        created = self._client.post(self.uri, form_data(issue), IssueModel)
        self._client.invalidate(self.uri)
        return created

    def update_issue(self, issue_id: int, issue: CreateIssueModel) -> IssueModel:
        updated = self._client.put(f"{self.uri}/{issue_id}", form_data(issue), IssueModel)
        self._client.invalidate(self.uri)
        return updated

    def delete_issue(self, issue_id: int) -> None:
        self._client.delete(f"{self.uri}/{issue_id}")
        self._client.invalidate(self.uri)

    def get_comments(self, issue_id: int, force_cache_invalidation: bool = False) -> list[CommentModel]:
        return self._client.get(
            f"{self.uri}/{issue_id}/comments", list[CommentModel], force_cache_invalidation,
        )

    def create_comment(self, issue_id: int, content: str) -> CommentModel:
        comment = self._client.post(f"{self.uri}/{issue_id}/comments", {"content": content}, CommentModel)
        self._client.invalidate(self.uri)
        return comment

    def get_components(self, force_cache_invalidation: bool = False) -> list[ComponentModel]:
        return self._client.get(f"{self.uri}/components", list[ComponentModel], force_cache_invalidation)

    def get_versions(self, force_cache_invalidation: bool = False) -> list[VersionModel]:
        return self._client.get(f"{self.uri}/versions", list[VersionModel], force_cache_invalidation)

    def get_milestones(self, force_cache_invalidation: bool = False) -> list[MilestoneModel]:
        return self._client.get(f"{self.uri}/milestones", list[MilestoneModel], force_cache_invalidation)
