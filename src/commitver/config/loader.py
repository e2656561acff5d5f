"""
Configuration loader for commitver.

An optional JSON file named ``.commitver.json`` in the repository root can
change the override file location and the commit message markers. When the
file is absent the built-in defaults apply.

If the file exists but is unreadable, malformed, or holds values of the
wrong type, a :class:`ConfigError` is raised.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path, PurePosixPath
from typing import Any, Dict

from commitver.history.override_locator import DEFAULT_OVERRIDE_PATH


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings in environments
# where logging is not configured. The CLI configures the root logger.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


CONFIG_FILENAME = ".commitver.json"

DEFAULTS: Dict[str, Any] = {
    "override_path": DEFAULT_OVERRIDE_PATH,
    "major_marker": "[major]",
    "minor_marker": "[minor]",
}


class ConfigError(Exception):
    """Raised when the configuration file is invalid."""

    pass


def _validate_override_path(value: str) -> None:
    path = PurePosixPath(value)
    if path.is_absolute() or value.startswith("\\") or ".." in path.parts:
        raise ConfigError(
            f"'override_path' must be relative to the repository root: {value}"
        )


def load_config(repo_root: Path) -> Dict[str, Any]:
    """Load the configuration for the repository at ``repo_root``.

    Args:
        repo_root: The repository root where ``.commitver.json`` may live.

    Returns:
        A dictionary with keys:
        - override_path (str): Override file path relative to the root
        - major_marker (str): Message substring that bumps major
        - minor_marker (str): Message substring that bumps minor

    Raises:
        ConfigError: If the configuration file is malformed or invalid.
    """
    config_path = repo_root / CONFIG_FILENAME
    config = dict(DEFAULTS)

    if not config_path.exists():
        logger.debug("No %s found, using defaults", config_path)
        return config

    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path.name} must contain a JSON object")

    for key in DEFAULTS:
        if key not in data:
            continue
        value = data[key]
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"'{key}' must be a non-empty string")
        config[key] = value

    _validate_override_path(config["override_path"])

    logger.debug("Loaded configuration from: %s", config_path)
    logger.debug("Configuration data: %s", config)
    return config
