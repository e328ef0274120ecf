"""Tests for resource models and form encoding."""

from __future__ import annotations

import pytest
from pydantic import BaseModel, ValidationError

from bitbucket_api.models import (
    ClientConfig,
    CreateIssueModel,
    EventModel,
    IssueModel,
    RepositoryDetailedModel,
    RequestConfig,
    form_data,
)


class TestFormData:
    def test_skips_unset_fields_and_keeps_order(self) -> None:
        issue = CreateIssueModel(title="Crash", kind="bug", priority="major")
        assert list(form_data(issue).items()) == [
            ("title", "Crash"),
            ("priority", "major"),
            ("kind", "bug"),
        ]

    def test_stringifies_values(self) -> None:
        class Payload(BaseModel):
            private: bool
            size: int

        assert form_data(Payload(private=True, size=3)) == {"private": "true", "size": "3"}

    def test_empty_model(self) -> None:
        assert form_data(CreateIssueModel()) == {}


class TestResourceModels:
    def test_issue_from_api_payload(self) -> None:
        issue = IssueModel.model_validate(
            {
                "local_id": 12,
                "title": "Crash on start",
                "status": "new",
                "reported_by": {"username": "alice", "is_team": False},
                "metadata": {"kind": "bug", "component": None},
            }
        )
        assert issue.local_id == 12
        assert issue.reported_by.username == "alice"
        assert issue.metadata.kind == "bug"
        assert issue.responsible is None

    def test_nested_fork(self) -> None:
        repo = RepositoryDetailedModel.model_validate({"slug": "w", "fork_of": {"slug": "base"}})
        assert repo.fork_of.slug == "base"

    @pytest.mark.parametrize(
        ("event", "name"),
        [("commit", "Commit"), ("wiki_created", "Wiki Created"), ("pushed", "pushed"), (None, "")],
    )
    def test_event_name(self, event, name: str) -> None:
        assert EventModel(event=event).event_name == name


class TestConfigModels:
    def test_defaults(self) -> None:
        config = ClientConfig()
        assert config.base_url == "https://api.bitbucket.org/1.0"
        assert config.request.retries == 3
        assert config.cache.enabled is False

    def test_negative_retries_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RequestConfig(retries=-1)
