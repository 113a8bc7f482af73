"""Issue key extraction from commit messages.

Jira keys look like ``ABC-123``: a project key (uppercase letter followed
by uppercase letters/digits), a dash, and the issue number. The default
pattern is case-sensitive and word-bounded so ``abc-123`` and ``XABC-1x``
are not picked up.

Callers can supply their own pattern. It is compiled verbatim, with no
implicit flags; matching always returns every non-overlapping match.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from semantic_release_jira.errors import InvalidPatternError

DEFAULT_ISSUE_PATTERN = r"\b[A-Z][A-Z0-9]*-\d+\b"


class IssueExtractor:
    """Finds distinct issue keys in commit messages.

    Usage:
        extractor = IssueExtractor()
        extractor.extract_from_text("fix: ABC-1 and ABC-2")  # ["ABC-1", "ABC-2"]
    """

    def __init__(self, pattern: str | None = None) -> None:
        """Compile the issue pattern.

        Args:
            pattern: Regular expression body. Uses DEFAULT_ISSUE_PATTERN if
                     None or empty.

        Raises:
            InvalidPatternError: If the pattern does not compile.
        """
        source = pattern or DEFAULT_ISSUE_PATTERN
        try:
            self._pattern = re.compile(source)
        except re.error as exc:
            raise InvalidPatternError(source, str(exc)) from exc

    @property
    def pattern(self) -> str:
        return self._pattern.pattern

    def extract_issue_keys(self, commits: Iterable[Any]) -> list[str]:
        """Collect the distinct issue keys referenced by a batch of commits.

        Args:
            commits: Commit models or mappings with a ``message`` field

        Returns:
            Keys in first-seen order, each exactly once
        """
        seen: dict[str, None] = {}
        for commit in commits:
            for key in self._matches(_message_of(commit)):
                seen.setdefault(key, None)
        return list(seen)

    def extract_from_text(self, text: str) -> list[str]:
        """Same as extract_issue_keys, for a single piece of text."""
        return list(dict.fromkeys(self._matches(text)))

    def _matches(self, text: str) -> Iterable[str]:
        # group(0): custom patterns may contain capture groups
        return (match.group(0) for match in self._pattern.finditer(text))


def _message_of(commit: Any) -> str:
    if isinstance(commit, Mapping):
        return commit.get("message") or ""
    return getattr(commit, "message", None) or ""
