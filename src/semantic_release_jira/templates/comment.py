"""Comment template rendering.

Comments are plain text with ``{{token}}`` placeholders. Supported tokens:

    {{issueKey}}     the issue being commented on
    {{packageName}}  SEMANTIC_RELEASE_PACKAGE, or "Package"
    {{version}}      released version
    {{gitTag}}       release tag
    {{gitHead}}      release commit SHA

Substitution is literal and single-pass: a value containing something that
looks like a placeholder is inserted as-is, never expanded again. Unknown
tokens are left untouched.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from semantic_release_jira.schemas import ReleaseInfo

DEFAULT_COMMENT_TEMPLATE = (
    "The issue ({{issueKey}}) was included in version {{version}} of {{packageName}} 🎉"
)

TEMPLATE_TOKENS = ("issueKey", "packageName", "version", "gitTag", "gitHead")

_PLACEHOLDER = re.compile(r"\{\{(" + "|".join(TEMPLATE_TOKENS) + r")\}\}")


def render_comment(template: str, values: Mapping[str, str]) -> str:
    """Substitute every known placeholder that has a value.

    Args:
        template: Comment template
        values: Token name -> replacement text

    Returns:
        The rendered comment
    """

    def _replace(match: re.Match[str]) -> str:
        token = match.group(1)
        if token in values:
            return str(values[token])
        return match.group(0)

    return _PLACEHOLDER.sub(_replace, template)


def build_comment_values(
    issue_key: str, package_name: str, release: ReleaseInfo
) -> dict[str, str]:
    return {
        "issueKey": issue_key,
        "packageName": package_name,
        "version": release.version,
        "gitTag": release.git_tag,
        "gitHead": release.git_head,
    }
