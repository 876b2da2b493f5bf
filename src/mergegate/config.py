"""Policy configuration loading.

Configuration may come from a YAML file (``.mergegate.yaml``) or from the
inputs of the GitHub Action. The file looks like::

    workflow: [testing, production]
    hotfix_pattern: "hotfix/*"
    feature_pattern: "feature/*"
    remote: origin
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from mergegate.git.repository import DEFAULT_REMOTE
from mergegate.patterns import DEFAULT_FEATURE_PATTERN, DEFAULT_HOTFIX_PATTERN
from mergegate.types import ConfigurationError
from mergegate.workflow import Workflow

DEFAULT_CONFIG_FILENAME = ".mergegate.yaml"

_KNOWN_KEYS = {"workflow", "hotfix_pattern", "feature_pattern", "remote"}


@dataclass(frozen=True)
class PolicyConfig:
    """Everything a single evaluation needs besides the branches and repository."""

    workflow: Workflow
    hotfix_pattern: str = DEFAULT_HOTFIX_PATTERN
    feature_pattern: str = DEFAULT_FEATURE_PATTERN
    remote: str | None = DEFAULT_REMOTE

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PolicyConfig:
        """Parse and validate config dict into PolicyConfig."""
        if not isinstance(data, dict):
            raise ConfigurationError("Policy config must be a mapping")

        unknown = sorted(set(data) - _KNOWN_KEYS)
        if unknown:
            raise ConfigurationError(f"Unknown policy config keys: {', '.join(unknown)}")

        if "workflow" not in data:
            raise ConfigurationError("Policy config is missing `workflow`")

        return cls(
            workflow=coerce_workflow(data["workflow"]),
            hotfix_pattern=_as_pattern(data.get("hotfix_pattern", DEFAULT_HOTFIX_PATTERN), "hotfix_pattern"),
            feature_pattern=_as_pattern(data.get("feature_pattern", DEFAULT_FEATURE_PATTERN), "feature_pattern"),
            remote=_as_remote(data.get("remote", DEFAULT_REMOTE)),
        )


def coerce_workflow(value: Any) -> Workflow:
    """Accept a stage list or a whitespace-separated string."""
    if isinstance(value, Workflow):
        return value
    if isinstance(value, str):
        return Workflow.parse(value)
    if isinstance(value, (list, tuple)):
        if not all(isinstance(stage, str) for stage in value):
            raise ConfigurationError("Workflow stages must all be strings")
        return Workflow.of(value)
    raise ConfigurationError(f"Workflow must be a list or string, got {type(value).__name__}")


def _as_pattern(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"`{key}` must be a string")
    return value


def _as_remote(value: Any) -> str | None:
    if value is None or value is False:
        return None
    if not isinstance(value, str):
        raise ConfigurationError("`remote` must be a string or null")
    return value.strip() or None


def load_config_data(path: Path) -> dict[str, Any]:
    """Read raw config mapping from a YAML file.

    Raises:
        ConfigurationError: If the file is missing, unreadable or malformed
    """
    if not path.exists():
        raise ConfigurationError(f"Policy config not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Malformed YAML config at {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Unable to read config at {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Invalid config structure in {path}: expected a mapping")
    return data


def load_policy_config(path: Path) -> PolicyConfig:
    """Load and validate a YAML policy config file."""
    data = load_config_data(path)
    try:
        return PolicyConfig.from_dict(data)
    except ConfigurationError as e:
        raise ConfigurationError(f"Invalid config in {path}: {e}") from e


def resolve_policy_config(
    *,
    config_path: Path | None = None,
    workflow: str | None = None,
    hotfix_pattern: str | None = None,
    feature_pattern: str | None = None,
    remote: str | None = None,
    local: bool = False,
) -> PolicyConfig:
    """Layer explicit values over the config file over defaults.

    Explicit values are what the CLI received from options or action inputs.
    """
    data: dict[str, Any] = {}
    if config_path is not None:
        data = load_config_data(config_path)
        unknown = sorted(set(data) - _KNOWN_KEYS)
        if unknown:
            raise ConfigurationError(f"Unknown policy config keys in {config_path}: {', '.join(unknown)}")

    if workflow is not None:
        data["workflow"] = workflow
    if hotfix_pattern is not None:
        data["hotfix_pattern"] = hotfix_pattern
    if feature_pattern is not None:
        data["feature_pattern"] = feature_pattern
    if remote is not None:
        data["remote"] = remote
    if local:
        data["remote"] = None

    if "workflow" not in data:
        raise ConfigurationError("No workflow configured (use --workflow, INPUT_WORKFLOW or a config file)")
    return PolicyConfig.from_dict(data)
