"""Tests for the resource controllers.

Controllers are pure delegation: each test checks the path, result type
and payload handed to the client, plus the cache invalidation that
follows a mutation.
"""

from __future__ import annotations

from unittest.mock import MagicMock, call
from urllib.parse import parse_qs

import httpx
import pytest

from bitbucket_api.cache import MemoryCacheProvider
from bitbucket_api.client import BitbucketClient
from bitbucket_api.controllers import (
    AccountController,
    IssuesController,
    RepositoriesController,
    UsersController,
)
from bitbucket_api.models import (
    AccountModel,
    BranchModel,
    CommentModel,
    ComponentModel,
    CreateIssueModel,
    EmailModel,
    EventsModel,
    FollowersModel,
    IssueModel,
    IssuesModel,
    MilestoneModel,
    RepositoryDetailedModel,
    TagModel,
    VersionModel,
)


ISSUES = "repositories/acme/widget/issues"


@pytest.fixture
def client() -> MagicMock:
    mock = MagicMock(spec=BitbucketClient)
    mock.username = "alice"
    return mock


# ---------------------------------------------------------------------------
# Account
# ---------------------------------------------------------------------------


class TestAccountController:
    def test_get_info(self, client: MagicMock) -> None:
        result = AccountController(client).get_info()
        client.get.assert_called_once_with("user", AccountModel, False)
        assert result is client.get.return_value

    def test_get_repositories(self, client: MagicMock) -> None:
        AccountController(client).get_repositories(force_cache_invalidation=True)
        client.get.assert_called_once_with("user/follows", list[RepositoryDetailedModel], True)

    def test_get_emails(self, client: MagicMock) -> None:
        AccountController(client).emails.get_emails()
        client.get.assert_called_once_with("users/alice/emails", list[EmailModel], False)

    def test_get_email(self, client: MagicMock) -> None:
        AccountController(client).emails.get_email("a@example.com")
        client.get.assert_called_once_with("users/alice/emails/a@example.com", EmailModel, False)

    def test_add_email_puts_and_invalidates(self, client: MagicMock) -> None:
        AccountController(client).emails.add_email("b@example.com")
        client.put.assert_called_once_with("users/alice/emails/b@example.com")
        client.invalidate.assert_called_once_with("users/alice/emails")


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class TestUsersController:
    def test_get_user(self, client: MagicMock) -> None:
        UsersController(client).get_user("bob", force_cache_invalidation=True)
        client.get.assert_called_once_with("users/bob", AccountModel, True)

    def test_get_events(self, client: MagicMock) -> None:
        UsersController(client).get_events("bob")
        client.get.assert_called_once_with("users/bob/events", EventsModel, False)

    def test_get_followers(self, client: MagicMock) -> None:
        UsersController(client).get_followers("bob")
        client.get.assert_called_once_with("users/bob/followers", FollowersModel, False)


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


class TestRepositoriesController:
    def test_get_repository(self, client: MagicMock) -> None:
        RepositoriesController(client).get_repository("acme", "widget")
        client.get.assert_called_once_with("repositories/acme/widget", RepositoryDetailedModel, False)

    def test_get_repositories_reads_user_record(self, client: MagicMock) -> None:
        repos = [RepositoryDetailedModel(slug="widget")]
        client.get.return_value = AccountModel(repositories=repos)

        assert RepositoriesController(client).get_repositories("acme") == repos
        client.get.assert_called_once_with("users/acme", AccountModel, False)

    @pytest.mark.parametrize(
        ("method", "suffix", "result_type"),
        [
            ("get_events", "events", EventsModel),
            ("get_followers", "followers", FollowersModel),
            ("get_branches", "branches", dict[str, BranchModel]),
            ("get_tags", "tags", dict[str, TagModel]),
        ],
    )
    def test_sub_resources(self, client: MagicMock, method: str, suffix: str, result_type: object) -> None:
        getattr(RepositoriesController(client), method)("acme", "widget")
        client.get.assert_called_once_with(f"repositories/acme/widget/{suffix}", result_type, False)

    def test_issues_controller(self, client: MagicMock) -> None:
        issues = RepositoriesController(client).issues("acme", "widget")
        assert isinstance(issues, IssuesController)
        assert issues.client is client
        assert issues.uri == ISSUES


# ---------------------------------------------------------------------------
# Issues
# ---------------------------------------------------------------------------


class TestIssuesController:
    def test_get_issues(self, client: MagicMock) -> None:
        IssuesController(client, "acme", "widget").get_issues(start=30, limit=15)
        client.get.assert_called_once_with(f"{ISSUES}?start=30&limit=15", IssuesModel, False)

    def test_get_issue(self, client: MagicMock) -> None:
        IssuesController(client, "acme", "widget").get_issue(5, force_cache_invalidation=True)
        client.get.assert_called_once_with(f"{ISSUES}/5", IssueModel, True)

    def test_create_issue(self, client: MagicMock) -> None:
        result = IssuesController(client, "acme", "widget").create_issue(
            CreateIssueModel(title="Crash", kind="bug"),
        )
        assert client.method_calls == [
            call.post(ISSUES, {"title": "Crash", "kind": "bug"}, IssueModel),
            call.invalidate(ISSUES),
        ]
        assert result is client.post.return_value

    def test_update_issue(self, client: MagicMock) -> None:
        IssuesController(client, "acme", "widget").update_issue(5, CreateIssueModel(status="resolved"))
        assert client.method_calls == [
            call.put(f"{ISSUES}/5", {"status": "resolved"}, IssueModel),
            call.invalidate(ISSUES),
        ]

    def test_delete_issue(self, client: MagicMock) -> None:
        IssuesController(client, "acme", "widget").delete_issue(5)
        assert client.method_calls == [call.delete(f"{ISSUES}/5"), call.invalidate(ISSUES)]

    def test_get_comments(self, client: MagicMock) -> None:
        IssuesController(client, "acme", "widget").get_comments(5)
        client.get.assert_called_once_with(f"{ISSUES}/5/comments", list[CommentModel], False)

    def test_create_comment(self, client: MagicMock) -> None:
        IssuesController(client, "acme", "widget").create_comment(5, "Same here")
        assert client.method_calls == [
            call.post(f"{ISSUES}/5/comments", {"content": "Same here"}, CommentModel),
            call.invalidate(ISSUES),
        ]

    @pytest.mark.parametrize(
        ("method", "suffix", "result_type"),
        [
            ("get_components", "components", list[ComponentModel]),
            ("get_versions", "versions", list[VersionModel]),
            ("get_milestones", "milestones", list[MilestoneModel]),
        ],
    )
    def test_tracker_metadata(self, client: MagicMock, method: str, suffix: str, result_type: object) -> None:
        getattr(IssuesController(client, "acme", "widget"), method)()
        client.get.assert_called_once_with(f"{ISSUES}/{suffix}", result_type, False)


# ---------------------------------------------------------------------------
# End to end through the request engine
# ---------------------------------------------------------------------------


class TestThroughClient:
    def test_creating_an_issue_refreshes_cached_list(self, make_client, memory_cache: MemoryCacheProvider) -> None:
        issues: list[dict] = [{"local_id": 1, "title": "First"}]
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if request.method == "POST":
                form = parse_qs(request.content.decode())
                issue = {"local_id": len(issues) + 1, "title": form["title"][0]}
                issues.append(issue)
                return httpx.Response(200, json=issue)
            return httpx.Response(200, json={"count": len(issues), "issues": issues})

        client = make_client(handler, cache_provider=memory_cache)
        tracker = client.repositories.issues("acme", "widget")

        assert tracker.get_issues().count == 1
        assert tracker.get_issues().count == 1
        created = tracker.create_issue(CreateIssueModel(title="Second"))
        refreshed = tracker.get_issues()

        assert created.local_id == 2
        assert refreshed.count == 2
        assert [r.method for r in seen] == ["GET", "POST", "GET"]

    def test_add_email_sends_zero_length_put(self, make_client) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        client = make_client(handler)
        client.account.emails.add_email("b@example.com")

        assert seen[0].method == "PUT"
        assert seen[0].url.path == "/1.0/users/alice/emails/b@example.com"
        assert seen[0].headers["content-length"] == "0"

    def test_delete_issue_accepts_no_content(self, make_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(204)

        client = make_client(handler)
        client.repositories.issues("acme", "widget").delete_issue(5)
