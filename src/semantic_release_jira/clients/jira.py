"""Jira Cloud REST client used to comment on released issues.

The plugin only needs three endpoints of the v3 API:
- GET  /serverInfo              credential / reachability check
- GET  /issue/{key}             existence check before commenting
- POST /issue/{key}/comment     the release comment itself

Design notes:
- Uses httpx for async HTTP requests, one client per call
- Authenticates with Basic auth built from email + API token
- Uses a Protocol so the orchestrator doesn't depend on the concrete class
- No retries: a failed request is final for that operation
- HTTP error responses become TrackerAuthError / TrackerRequestError with
  the status line; transport failures (DNS, timeouts) propagate unchanged

Jira API docs: https://developer.atlassian.com/cloud/jira/platform/rest/v3/
"""

from __future__ import annotations

import base64
from typing import Any, Protocol

import httpx

from semantic_release_jira.errors import (
    TrackerAuthError,
    TrackerError,
    TrackerRequestError,
)
from semantic_release_jira.logging_config import get_logger
from semantic_release_jira.schemas import TrackerConfig

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Protocol (Interface)
# ---------------------------------------------------------------------------


class TrackerClientProtocol(Protocol):
    """Interface the orchestrator uses to talk to the issue tracker."""

    async def get_server_info(self) -> Any:
        """Check the configured credentials against the tracker."""
        ...

    async def get_issue(self, issue_key: str) -> Any:
        """Fetch an issue; fails if it does not exist or is not visible."""
        ...

    async def add_comment(self, issue_key: str, comment_body: str) -> None:
        """Post a plain-text comment on an issue."""
        ...


# ---------------------------------------------------------------------------
# Concrete Implementation
# ---------------------------------------------------------------------------


class JiraClient:
    """Jira REST API v3 client using httpx.

    Usage:
        client = JiraClient(TrackerConfig(host="myorg.atlassian.net", ...))
        await client.add_comment("ABC-123", "Released in 1.2.0")
    """

    def __init__(
        self,
        config: TrackerConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Build the base request context.

        Args:
            config: Validated tracker credentials
            transport: Optional httpx transport (e.g., httpx.MockTransport
                       in tests). Uses the default network transport if None.
            timeout: Per-request timeout in seconds
        """
        self.config = config
        self.base_url = f"https://{config.host}/rest/api/3"
        credentials = base64.b64encode(
            f"{config.email}:{config.token}".encode()
        ).decode("ascii")
        self._headers: dict[str, str] = {
            "Authorization": f"Basic {credentials}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        self._transport = transport
        self._timeout = timeout

    async def get_server_info(self) -> Any:
        """Fetch /serverInfo.

        Returns:
            The decoded JSON body

        Raises:
            TrackerAuthError: If Jira answers with an error status
        """
        try:
            response = await self._request("GET", "/serverInfo")
        except Exception as exc:
            raise _translate(exc, "Failed to get server info", TrackerAuthError)
        return _decode(response)

    async def get_issue(self, issue_key: str) -> Any:
        """Fetch a single issue.

        The issue representation is returned untouched; the plugin only
        uses this call to confirm the issue exists.

        Raises:
            TrackerRequestError: If Jira answers with an error status
        """
        try:
            response = await self._request("GET", f"/issue/{issue_key}")
        except Exception as exc:
            raise _translate(exc, f"Failed to get issue {issue_key}", TrackerRequestError)
        return _decode(response)

    async def add_comment(self, issue_key: str, comment_body: str) -> None:
        """Post ``comment_body`` as a single plain-text paragraph.

        Raises:
            TrackerRequestError: If Jira answers with an error status
        """
        try:
            await self._request(
                "POST",
                f"/issue/{issue_key}/comment",
                json={"body": build_comment_document(comment_body)},
            )
        except Exception as exc:
            raise _translate(
                exc, f"Failed to add comment to {issue_key}", TrackerRequestError
            )

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._headers,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            logger.debug("jira_request", method=method, path=path)
            response = await client.request(method, path, **kwargs)
            response.raise_for_status()
            return response


def build_comment_document(text: str) -> dict[str, Any]:
    """Wrap text in an Atlassian Document Format body (one paragraph, one run)."""
    return {
        "type": "doc",
        "version": 1,
        "content": [
            {
                "type": "paragraph",
                "content": [{"type": "text", "text": text}],
            }
        ],
    }


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        # proxies and SSO gateways answer 2xx with HTML
        return response.text


def _http_status(exc: BaseException) -> tuple[int, str] | None:
    """Return (status_code, reason) if the failure carries an HTTP response."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if status_code is None:
        return None
    return status_code, getattr(response, "reason_phrase", "") or ""


def _translate(
    exc: Exception, prefix: str, error_cls: type[TrackerError]
) -> Exception:
    status = _http_status(exc)
    if status is None:
        logger.debug("jira_request_failed", error=str(exc))
        return exc
    status_code, reason = status
    logger.debug("jira_request_failed", status_code=status_code, reason=reason)
    error = error_cls(f"{prefix}: {status_code} {reason}", status_code=status_code)
    error.__cause__ = exc
    return error


# ---------------------------------------------------------------------------
# Mock Implementation (for testing)
# ---------------------------------------------------------------------------


class MockTrackerClient:
    """In-memory tracker that records comments instead of posting them.

    Usage:
        client = MockTrackerClient(missing_issues={"ABC-2"})
        await client.add_comment("ABC-1", "hello")
        client.comments  # [("ABC-1", "hello")]
    """

    def __init__(
        self,
        config: TrackerConfig | None = None,
        *,
        missing_issues: set[str] | None = None,
        failing_comments: set[str] | None = None,
        server_error: Exception | None = None,
    ) -> None:
        """Initialize with optional failure injection.

        Args:
            config: Ignored; accepted so the class works as a client factory
            missing_issues: Keys for which get_issue fails with a 404
            failing_comments: Keys for which add_comment fails with a 500
            server_error: Raised by get_server_info if set
        """
        self.config = config
        self._missing = set(missing_issues or ())
        self._failing = set(failing_comments or ())
        self._server_error = server_error
        self.requested_issues: list[str] = []
        self.comments: list[tuple[str, str]] = []

    async def get_server_info(self) -> Any:
        if self._server_error is not None:
            raise self._server_error
        return {"baseUrl": "https://mock.atlassian.net", "deploymentType": "Cloud"}

    async def get_issue(self, issue_key: str) -> Any:
        self.requested_issues.append(issue_key)
        if issue_key in self._missing:
            raise TrackerRequestError(
                f"Failed to get issue {issue_key}: 404 Not Found", status_code=404
            )
        return {"key": issue_key, "fields": {}}

    async def add_comment(self, issue_key: str, comment_body: str) -> None:
        if issue_key in self._failing:
            raise TrackerRequestError(
                f"Failed to add comment to {issue_key}: 500 Internal Server Error",
                status_code=500,
            )
        self.comments.append((issue_key, comment_body))
