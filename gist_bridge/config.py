"""Configuration loading for gitee-gist-bridge.

Settings come from an optional YAML file and are overridden by
environment variables. Blank credentials are accepted here; the client
validates them on every call.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from typing_extensions import TypedDict

from .gitee import DEFAULT_API_URL
from .redact import redact_token

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "app.json"
DEFAULT_TIMEOUT = 30

ENV_OVERRIDES = {
    "access_token": "GITEE_ACCESS_TOKEN",
    "gist_id": "GITEE_GIST_ID",
    "file_name": "GIST_FILE_NAME",
}


class GiteeConfig(TypedDict):
    """Gitee gist access settings."""

    access_token: str
    gist_id: str
    file_name: str
    api_url: str
    timeout: int


def default_config() -> GiteeConfig:
    """Return the built-in defaults."""
    return {
        "access_token": "",
        "gist_id": "",
        "file_name": DEFAULT_FILE_NAME,
        "api_url": DEFAULT_API_URL,
        "timeout": DEFAULT_TIMEOUT,
    }


def load_config(config_path: Optional[Path] = None) -> GiteeConfig:
    """Load configuration from YAML and the environment.

    Args:
        config_path: Optional path to a YAML file

    Returns:
        Merged configuration: defaults, then the file, then environment

    Raises:
        FileNotFoundError: If config_path is given but does not exist
        yaml.YAMLError: If the YAML is malformed
        ValueError: If a value has the wrong type

    Example:
        >>> config = load_config(Path("gist-bridge.yaml"))
        >>> config["file_name"]
        'app.json'
    """
    config = default_config()

    if config_path is not None:
        config.update(_load_yaml(config_path))  # type: ignore[typeddict-item]

    for key, env_name in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            config[key] = value  # type: ignore[literal-required]
            logger.debug(f"{key} taken from {env_name}")

    logger.info(
        f"Configuration loaded: gist_id={config['gist_id'] or '<unset>'} "
        f"file_name={config['file_name']} "
        f"token={redact_token(config['access_token'])}"
    )
    return config


def _load_yaml(config_path: Path) -> dict[str, Any]:
    """Read and validate the YAML configuration file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger.info(f"Loading configuration from {config_path}")

    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Failed to parse YAML configuration: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Configuration must be a dictionary")

    validated: dict[str, Any] = {}
    for key in ("access_token", "gist_id", "file_name", "api_url"):
        if key in data:
            if not isinstance(data[key], str):
                raise ValueError(f"'{key}' must be a string")
            validated[key] = data[key]

    if "timeout" in data:
        timeout = data["timeout"]
        if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
            raise ValueError("'timeout' must be a positive integer")
        validated["timeout"] = timeout

    unknown = set(data) - set(validated)
    if unknown:
        logger.warning(f"Ignoring unknown configuration keys: {sorted(unknown)}")

    return validated
