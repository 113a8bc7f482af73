"""Pydantic models for the data that flows through the plugin.

The release host (semantic-release or a compatible pipeline) hands the plugin
two objects on every lifecycle call:
- the plugin configuration (static for the whole pipeline run)
- the release context (next release, commits, logger)

Both arrive as camelCase JSON-ish dicts, so the models accept the host's
field names through aliases while exposing snake_case attributes.

Key design decisions:
- Nothing here is persisted; every model is built and dropped per call
- Extra fields from the host are ignored rather than rejected
- TrackerConfig is resolved from the environment by config.py, not here
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Tracker
# ---------------------------------------------------------------------------


class TrackerConfig(BaseModel):
    """Credentials for the Jira REST API.

    Attributes:
        host: Jira site host name (e.g., "myorg.atlassian.net")
        email: Account email used for Basic auth
        token: API token paired with the email
    """

    host: str = Field("", description="Jira host, without scheme")
    email: str = Field("", description="Jira account email")
    token: str = Field("", description="Jira API token")


# ---------------------------------------------------------------------------
# Release Context (supplied by the host)
# ---------------------------------------------------------------------------


class Commit(BaseModel):
    """A single commit in the release. Only ``message`` is scanned."""

    model_config = ConfigDict(extra="ignore")

    hash: str = Field("", description="Commit SHA")
    message: str = Field("", description="Full commit message")
    subject: str = Field("", description="First line of the commit message")


class ReleaseInfo(BaseModel):
    """The release being published.

    Attributes:
        version: Semantic version of the release (e.g., "1.4.0")
        git_tag: Tag created for the release (e.g., "v1.4.0")
        git_head: Commit SHA the release points at
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    version: str = Field(..., description="Released version")
    git_tag: str = Field("", alias="gitTag", description="Release tag")
    git_head: str = Field("", alias="gitHead", description="Release commit SHA")


class ReleaseContext(BaseModel):
    """Per-invocation context passed by the release host.

    ``next_release`` is only known once the release is being published, so
    it is absent during verify_conditions.

    ``logger`` is anything exposing ``log(msg)`` and ``error(msg)``. None means
    the plugin runs without a host and reports through structlog instead.
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    next_release: ReleaseInfo | None = Field(None, alias="nextRelease")
    commits: list[Commit] = Field(default_factory=list)
    logger: Any = None


# ---------------------------------------------------------------------------
# Plugin Configuration
# ---------------------------------------------------------------------------


class PluginConfig(BaseModel):
    """Options set for the plugin in the release configuration.

    Attributes:
        comment_template: Comment text with {{token}} placeholders. Falls back
            to DEFAULT_COMMENT_TEMPLATE when unset. An empty string is kept.
        issue_pattern: Regular expression body for issue keys. Falls back to
            the extractor's default Jira key pattern when unset.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    comment_template: str | None = Field(
        None, alias="commentTemplate", description="Comment template"
    )
    issue_pattern: str | None = Field(
        None, alias="issuePattern", description="Custom issue key pattern"
    )


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class CommentReport(BaseModel):
    """Outcome of a success() run, one entry per processed issue key."""

    commented: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)
