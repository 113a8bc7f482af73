"""Exception types raised by the plugin.

Hierarchy:
    JiraPluginError
    ├── ConfigurationError      required settings missing or unreadable
    ├── InvalidPatternError     custom issue pattern does not compile
    ├── AuthenticationError     credential check failed in verify_conditions
    └── TrackerError            Jira answered with an HTTP error status
        ├── TrackerAuthError    GET /serverInfo failed
        └── TrackerRequestError GET /issue or POST /comment failed
"""

from __future__ import annotations


class JiraPluginError(Exception):
    """Base class for all plugin errors."""


class ConfigurationError(JiraPluginError):
    """One or more required settings are missing.

    Attributes:
        errors: The individual validation messages, in check order
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])


class InvalidPatternError(JiraPluginError, ValueError):
    """A caller-supplied issue pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid issue pattern {pattern!r}: {reason}")
        self.pattern = pattern


class AuthenticationError(JiraPluginError):
    """Jira rejected the configured credentials or could not be reached."""


class TrackerError(JiraPluginError):
    """Jira responded to a request with an HTTP error status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TrackerAuthError(TrackerError):
    """The server info check failed."""


class TrackerRequestError(TrackerError):
    """An issue lookup or comment post failed."""
