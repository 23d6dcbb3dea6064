"""Configuration loader for graph building and report rendering.

Reads settings from a JSON or YAML file and validates the structure. All keys
are optional:

- ``rootId`` (default ``.root``): sentinel id of the synthetic project node
- ``unresolvedLabel`` (default ``0.0.0``): version shown for packages that are
  referenced but never resolved, e.g. ``<unknown>``
- ``targetFramework`` (default first target): target key or alias to graph
- ``validateSchema`` (default True): validate assets against the JSON schema

Environment variables ``ASSETS_GRAPH_UNRESOLVED_LABEL`` and
``ASSETS_GRAPH_TARGET_FRAMEWORK`` override the file values.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError
from .graph import get_root_package_id
from .models import PLACEHOLDER_VERSION

CONFIG_PATH_ENV_VAR = "ASSETS_GRAPH_CONFIG"
UNRESOLVED_LABEL_ENV_VAR = "ASSETS_GRAPH_UNRESOLVED_LABEL"
TARGET_FRAMEWORK_ENV_VAR = "ASSETS_GRAPH_TARGET_FRAMEWORK"

_KNOWN_KEYS = {"rootId", "unresolvedLabel", "targetFramework", "validateSchema"}


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    root_id: str = get_root_package_id()
    unresolved_label: str = PLACEHOLDER_VERSION
    target_framework: str | None = None
    validate_schema: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from a dictionary, validating every field."""
        unknown = sorted(set(data) - _KNOWN_KEYS)
        if unknown:
            raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")

        root_id = data.get("rootId", get_root_package_id())
        if not isinstance(root_id, str) or not root_id:
            raise ConfigError("'rootId' must be a non-empty string")

        label = data.get("unresolvedLabel", PLACEHOLDER_VERSION)
        if not isinstance(label, str) or not label:
            raise ConfigError("'unresolvedLabel' must be a non-empty string")

        framework = data.get("targetFramework")
        if framework is not None and (not isinstance(framework, str) or not framework):
            raise ConfigError("'targetFramework' must be a non-empty string")

        validate = data.get("validateSchema", True)
        if not isinstance(validate, bool):
            raise ConfigError("'validateSchema' must be boolean")

        return cls(
            root_id=root_id,
            unresolved_label=label,
            target_framework=framework,
            validate_schema=validate,
        )

    def with_env_overrides(self) -> Settings:
        overrides: dict[str, Any] = {}
        label = os.environ.get(UNRESOLVED_LABEL_ENV_VAR, "").strip()
        if label:
            overrides["unresolved_label"] = label
        framework = os.environ.get(TARGET_FRAMEWORK_ENV_VAR, "").strip()
        if framework:
            overrides["target_framework"] = framework
        return replace(self, **overrides) if overrides else self


def _resolve_config_path(path: Path | str | None = None) -> Path | None:
    """Resolve the configuration file path.

    Priority:
    1. Explicit path argument
    2. ASSETS_GRAPH_CONFIG environment variable
    3. None (built-in defaults)
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return None


def _parse_content(config_path: Path, content: str) -> Any:
    if config_path.suffix.lower() in {".yaml", ".yml"}:
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in configuration file: {exc}") from exc

    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc


def load_settings(path: Path | str | None = None) -> Settings:
    """Load and validate settings, then apply environment overrides.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path = _resolve_config_path(path)
    if config_path is None:
        return Settings().with_env_overrides()

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    data = _parse_content(config_path, content)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    return Settings.from_dict(data).with_env_overrides()
