"""Configuration resolution for the plugin.

Two kinds of configuration feed the plugin:
- Tracker credentials and the package display name, taken from environment
  variables. They are resolved once per entry-point call and then passed
  down explicitly; nothing below plugin.py reads the environment.
- Plugin options (comment template, issue pattern), normally handed over by
  the release host, or loaded from a YAML file with load_plugin_config().

Environment variables:
    JIRA_HOST                 Jira site host (e.g., "myorg.atlassian.net")
    JIRA_EMAIL                Account email for Basic auth
    JIRA_TOKEN                API token for Basic auth
    SEMANTIC_RELEASE_PACKAGE  Display name used in comments (default "Package")
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from semantic_release_jira.errors import ConfigurationError
from semantic_release_jira.schemas import PluginConfig, TrackerConfig

DEFAULT_PACKAGE_NAME = "Package"

# Checked in this order; validation messages follow it.
REQUIRED_ENV_VARS: tuple[tuple[str, str], ...] = (
    ("host", "JIRA_HOST"),
    ("email", "JIRA_EMAIL"),
    ("token", "JIRA_TOKEN"),
)


def resolve_tracker_config(env: Mapping[str, str] | None = None) -> TrackerConfig:
    """Build a TrackerConfig from environment variables.

    Args:
        env: Mapping to read from. Defaults to os.environ.

    Returns:
        A TrackerConfig; missing variables become empty strings.
    """
    source = os.environ if env is None else env
    return TrackerConfig(
        **{field: source.get(var) or "" for field, var in REQUIRED_ENV_VARS}
    )


def validate_tracker_config(config: TrackerConfig) -> list[str]:
    """Return one message per missing credential, in host/email/token order."""
    return [
        f"{var} environment variable is required"
        for field, var in REQUIRED_ENV_VARS
        if not getattr(config, field)
    ]


def format_config_errors(errors: list[str]) -> str:
    """Join validation messages into the multi-line report shown to users."""
    lines = "\n".join(f"  - {error}" for error in errors)
    return f"JIRA plugin configuration is invalid:\n{lines}"


def resolve_package_name(env: Mapping[str, str] | None = None) -> str:
    source = os.environ if env is None else env
    return source.get("SEMANTIC_RELEASE_PACKAGE") or DEFAULT_PACKAGE_NAME


def load_plugin_config(path: str | Path) -> PluginConfig:
    """Load plugin options from a YAML file.

    The options may sit at the top level or under a ``jira`` key:

        commentTemplate: "Released in {{version}}"
        issuePattern: "PROJ-\\d+"

    Args:
        path: Path to the YAML file.

    Returns:
        A validated PluginConfig. Returns defaults if the file doesn't exist.

    Raises:
        ConfigurationError: If the YAML is malformed or fails validation.
    """
    config_path = Path(path)
    if not config_path.exists():
        return PluginConfig()

    try:
        raw = yaml.safe_load(config_path.read_text()) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Invalid plugin config in {path}: expected a mapping")

    options = raw.get("jira", raw)
    try:
        return PluginConfig.model_validate(options)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid plugin config in {path}: {exc}") from exc
