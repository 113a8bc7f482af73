"""Release lifecycle entry points.

The release host calls two functions at fixed points of the pipeline:
- verify_conditions: before releasing, check credentials are present and
  accepted by Jira. Failing here stops the release.
- success: after the release is published, comment on every Jira issue
  referenced by the released commits. Never fails the release because of
  a single issue.

The flow for success():
1. Resolve plugin options and tracker credentials
2. Extract distinct issue keys from the commit messages
3. For every key, concurrently: confirm the issue exists, render the
   comment, post it
4. Report each outcome through the host logger

Environment variables are read once here and passed down as parameters.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from typing import Any

from semantic_release_jira.clients.jira import JiraClient, TrackerClientProtocol
from semantic_release_jira.config import (
    format_config_errors,
    resolve_package_name,
    resolve_tracker_config,
    validate_tracker_config,
)
from semantic_release_jira.errors import AuthenticationError, ConfigurationError
from semantic_release_jira.extractor import IssueExtractor
from semantic_release_jira.logging_config import HostLogger, setup_logging
from semantic_release_jira.schemas import (
    CommentReport,
    PluginConfig,
    ReleaseContext,
    ReleaseInfo,
    TrackerConfig,
)
from semantic_release_jira.templates.comment import (
    DEFAULT_COMMENT_TEMPLATE,
    build_comment_values,
    render_comment,
)

ClientFactory = Callable[[TrackerConfig], TrackerClientProtocol]

MISSING_CONFIG_MESSAGE = (
    "JIRA configuration is missing. Please set JIRA_HOST, JIRA_EMAIL, "
    "and JIRA_TOKEN environment variables."
)


async def verify_conditions(
    plugin_config: PluginConfig | Mapping[str, Any] | None,
    context: ReleaseContext | Mapping[str, Any],
    *,
    env: Mapping[str, str] | None = None,
    client_factory: ClientFactory = JiraClient,
) -> None:
    """Check that Jira credentials are configured and valid.

    Args:
        plugin_config: Plugin options (unused here, accepted for symmetry)
        context: Release context from the host
        env: Environment mapping. Defaults to os.environ.
        client_factory: Builds the tracker client from a TrackerConfig

    Raises:
        ConfigurationError: If any of JIRA_HOST, JIRA_EMAIL, JIRA_TOKEN is unset
        AuthenticationError: If the server info check fails
    """
    log = _host_logger(context, env)

    log.log("Verifying JIRA plugin conditions...")

    tracker_config = resolve_tracker_config(env)
    errors = validate_tracker_config(tracker_config)
    if errors:
        message = format_config_errors(errors)
        log.error(message)
        raise ConfigurationError(message, errors)

    try:
        client = client_factory(tracker_config)
        await client.get_server_info()
    except Exception as exc:
        message = f"Failed to authenticate with JIRA: {_error_message(exc)}"
        log.error(message)
        raise AuthenticationError(message) from exc

    log.log("JIRA credentials verified successfully")


async def success(
    plugin_config: PluginConfig | Mapping[str, Any] | None,
    context: ReleaseContext | Mapping[str, Any],
    *,
    env: Mapping[str, str] | None = None,
    client_factory: ClientFactory = JiraClient,
) -> CommentReport:
    """Comment on every Jira issue referenced by the released commits.

    Per-issue failures are logged and skipped. Missing credentials are
    logged and the step is skipped.

    Args:
        plugin_config: Plugin options (commentTemplate, issuePattern)
        context: Release context from the host
        env: Environment mapping. Defaults to os.environ.
        client_factory: Builds the tracker client from a TrackerConfig

    Returns:
        Which issue keys were commented and which failed

    Raises:
        Exception: Anything failing outside the per-issue work (e.g. an
            invalid issuePattern) is logged and re-raised.
    """
    log = _host_logger(context, env)

    tracker_config = resolve_tracker_config(env)
    if validate_tracker_config(tracker_config):
        log.error(MISSING_CONFIG_MESSAGE)
        return CommentReport()

    try:
        options = _load_plugin_config(plugin_config)
        release_context = _load_context(context)
        comment_template = options.comment_template
        if comment_template is None:
            comment_template = DEFAULT_COMMENT_TEMPLATE

        release = release_context.next_release
        if release is None:
            raise ValueError("nextRelease is required in the success step")

        client = client_factory(tracker_config)
        extractor = IssueExtractor(options.issue_pattern)

        issue_keys = extractor.extract_issue_keys(release_context.commits)
        if not issue_keys:
            log.log("No JIRA issues found in commits.")
            return CommentReport()

        log.log(f"Found {len(issue_keys)} JIRA issue(s): {', '.join(issue_keys)}")

        package_name = resolve_package_name(env)

        tasks = [
            _comment_on_issue(
                client,
                issue_key,
                comment_template,
                package_name,
                release,
                log,
            )
            for issue_key in issue_keys
        ]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        log.log("Finished processing JIRA comments.")
    except Exception as exc:
        log.error(f"Plugin error: {_error_message(exc)}")
        raise

    report = CommentReport()
    for issue_key, ok in zip(issue_keys, outcomes):
        if ok is True:
            report.commented.append(issue_key)
        else:
            report.failed.append(issue_key)
    return report


async def _comment_on_issue(
    client: TrackerClientProtocol,
    issue_key: str,
    template: str,
    package_name: str,
    release: ReleaseInfo,
    log: Any,
) -> bool:
    """Post the release comment on one issue. Never raises."""
    try:
        await client.get_issue(issue_key)
        comment = render_comment(
            template, build_comment_values(issue_key, package_name, release)
        )
        await client.add_comment(issue_key, comment)
    except Exception as exc:
        log.error(f"Failed to add comment to {issue_key}: {_error_message(exc)}")
        return False

    log.log(f"Successfully added comment to {issue_key}")
    return True


def _load_plugin_config(
    plugin_config: PluginConfig | Mapping[str, Any] | None,
) -> PluginConfig:
    if isinstance(plugin_config, PluginConfig):
        return plugin_config
    return PluginConfig.model_validate(dict(plugin_config or {}))


def _load_context(context: ReleaseContext | Mapping[str, Any]) -> ReleaseContext:
    if isinstance(context, ReleaseContext):
        return context
    return ReleaseContext.model_validate(dict(context))


def _host_logger(
    context: ReleaseContext | Mapping[str, Any], env: Mapping[str, str] | None
) -> Any:
    """Return the host logger, falling back to structlog when there is none.

    Read from the raw context so that a context failing validation still
    gets its errors reported through the host.
    """
    if isinstance(context, Mapping):
        logger = context.get("logger")
    else:
        logger = getattr(context, "logger", None)
    if logger is None:
        setup_logging(env)
        logger = HostLogger()
    return logger


def _error_message(exc: BaseException) -> str:
    return str(exc) or "Unknown error"
