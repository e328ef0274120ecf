"""Canonical Pydantic models shared across all bitbucket_api modules.

The models fall into two groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`RequestConfig`, :class:`CacheConfig`, :class:`CredentialsConfig`
    and :class:`ClientConfig`.

**Resource models** -- deserialised from Bitbucket 1.0 API responses and
returned by the controllers:
    :class:`UserModel`, :class:`AccountModel`, :class:`EmailModel`,
    :class:`RepositoryDetailedModel`, :class:`FollowersModel`,
    :class:`BranchModel`, :class:`TagModel`, :class:`EventModel`,
    :class:`EventsModel`, :class:`IssueModel`, :class:`IssuesModel`,
    :class:`CreateIssueModel`, :class:`CommentModel`,
    :class:`ComponentModel`, :class:`VersionModel` and
    :class:`MilestoneModel`.

Field names follow the API's snake_case JSON. Every resource field has a
default so that partial payloads validate, and unknown keys are kept in
``model_extra``.
"""

from __future__ import annotations

import enum
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

API_URL = "https://api.bitbucket.org/1.0"
"""Base URL of the Bitbucket 1.0 REST API."""


class HTTPMethod(str, enum.Enum):
    """HTTP verbs used by the Bitbucket 1.0 API."""

    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"


# --- Configuration ---


class RequestConfig(BaseModel):
    """HTTP settings applied to every transport call of a client."""

    timeout: float = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    retries: int = Field(
        default=3,
        ge=0,
        description="Extra attempts allowed after a connection-level failure",
    )


class CacheConfig(BaseModel):
    """Response cache settings. Caching is opt-in."""

    enabled: bool = Field(default=False, description="Enable response caching")
    backend: str = Field(default="memory", description="Cache backend: memory, disk")
    ttl_seconds: Optional[int] = Field(
        default=300, description="Entry lifetime for the disk backend (None = forever)"
    )


class CredentialsConfig(BaseModel):
    """Account used for HTTP Basic authentication."""

    username: str = ""
    password_source: str = Field(
        default="env:BITBUCKET_PASSWORD",
        description="Credential source: env:VAR, file:/path, prompt",
    )


class ClientConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/bitbucket-api/config.json``.

    Loaded and saved by :func:`~bitbucket_api.config.load_config` and
    :func:`~bitbucket_api.config.save_config`. See
    :func:`~bitbucket_api.config.resolve_config` for how environment
    variables and explicit arguments override it.
    """

    base_url: str = API_URL
    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig)
    request: RequestConfig = Field(default_factory=RequestConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)


# --- Resources ---


class _Resource(BaseModel):
    model_config = ConfigDict(extra="allow")


class UserModel(_Resource):
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    display_name: Optional[str] = None
    avatar: Optional[str] = None
    resource_uri: Optional[str] = None
    is_team: bool = False


class RepositoryDetailedModel(_Resource):
    """A repository as returned by ``repositories/{owner}/{slug}``."""

    name: Optional[str] = None
    slug: Optional[str] = None
    owner: Optional[str] = None
    scm: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    language: Optional[str] = None
    logo: Optional[str] = None
    size: int = 0
    state: Optional[str] = None
    is_private: bool = False
    is_fork: bool = False
    is_mq: bool = False
    read_only: bool = False
    has_issues: bool = False
    has_wiki: bool = False
    no_public_forks: bool = False
    forks_count: int = 0
    followers_count: int = 0
    creator: Optional[str] = None
    created_on: Optional[str] = None
    last_updated: Optional[str] = None
    utc_created_on: Optional[str] = None
    utc_last_updated: Optional[str] = None
    resource_uri: Optional[str] = None
    fork_of: Optional[RepositoryDetailedModel] = None
    mq_of: Optional[RepositoryDetailedModel] = None


class AccountModel(_Resource):
    """A user together with the repositories they own."""

    user: Optional[UserModel] = None
    repositories: list[RepositoryDetailedModel] = Field(default_factory=list)


class EmailModel(_Resource):
    email: Optional[str] = None
    primary: bool = False
    active: bool = False


class FollowersModel(_Resource):
    count: int = 0
    followers: list[UserModel] = Field(default_factory=list)


class BranchModel(_Resource):
    node: Optional[str] = None
    raw_node: Optional[str] = None
    author: Optional[str] = None
    raw_author: Optional[str] = None
    branch: Optional[str] = None
    message: Optional[str] = None
    timestamp: Optional[str] = None
    utctimestamp: Optional[str] = None
    size: int = 0
    revision: Optional[int] = None
    parents: list[str] = Field(default_factory=list)


class TagModel(BranchModel):
    """Tags share the shape of branch heads."""


class EventModel(_Resource):
    node: Optional[str] = None
    description: Optional[str] = None
    repository: Optional[RepositoryDetailedModel] = None
    created_on: Optional[str] = None
    utc_created_on: Optional[str] = None
    user: Optional[UserModel] = None
    event: Optional[str] = None

    EVENT_NAMES: ClassVar[dict[str, str]] = {
        "commit": "Commit",
        "wiki_created": "Wiki Created",
        "wiki_updated": "Wiki Updated",
    }

    @property
    def event_name(self) -> str:
        """Human-readable name of :attr:`event`, falling back to the raw value."""
        return self.EVENT_NAMES.get(self.event or "", self.event or "")


class EventsModel(_Resource):
    count: int = 0
    events: list[EventModel] = Field(default_factory=list)


class IssueMetadataModel(_Resource):
    kind: Optional[str] = None
    version: Optional[str] = None
    component: Optional[str] = None
    milestone: Optional[str] = None


class IssueModel(_Resource):
    local_id: int = 0
    title: Optional[str] = None
    content: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    comment_count: int = 0
    follower_count: int = 0
    is_spam: bool = False
    created_on: Optional[str] = None
    utc_created_on: Optional[str] = None
    utc_last_updated: Optional[str] = None
    resource_uri: Optional[str] = None
    reported_by: Optional[UserModel] = None
    responsible: Optional[UserModel] = None
    metadata: Optional[IssueMetadataModel] = None


class IssuesModel(_Resource):
    count: int = 0
    search: Optional[str] = None
    issues: list[IssueModel] = Field(default_factory=list)


class CreateIssueModel(BaseModel):
    """Payload for creating or updating an issue.

    Sent form-encoded via :func:`form_data`; unset fields are omitted.
    """

    title: Optional[str] = None
    content: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    responsible: Optional[str] = None
    kind: Optional[str] = None
    component: Optional[str] = None
    milestone: Optional[str] = None
    version: Optional[str] = None


class CommentModel(_Resource):
    comment_id: int = 0
    content: Optional[str] = None
    author_info: Optional[UserModel] = None
    is_spam: bool = False
    utc_created_on: Optional[str] = None
    utc_updated_on: Optional[str] = None


class ComponentModel(_Resource):
    id: int = 0
    name: Optional[str] = None


class VersionModel(_Resource):
    id: int = 0
    name: Optional[str] = None


class MilestoneModel(_Resource):
    id: int = 0
    name: Optional[str] = None


def form_data(model: BaseModel) -> dict[str, str]:
    """Flatten *model* into form fields for a POST or PUT body.

    Fields set to ``None`` are skipped, booleans become ``"true"`` /
    ``"false"`` and everything else goes through :func:`str`. Field
    declaration order is preserved.

    Args:
        model: The payload model to encode.

    Returns:
        An ordered ``dict`` of form field names to string values.
    """
    fields: dict[str, str] = {}
    for key, value in model.model_dump(exclude_none=True).items():
        fields[key] = _form_value(value)
    return fields


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
