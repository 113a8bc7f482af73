"""Jira release notifier for semantic-release style pipelines.

Scans the commits of a release for Jira issue keys and posts a comment to
each referenced issue once the release has been published.

Entry points:
- verify_conditions: validate credentials before the release
- success: comment on every referenced issue after the release
"""

__version__ = "0.1.0"

from semantic_release_jira.plugin import success, verify_conditions

__all__ = ["__version__", "success", "verify_conditions"]
