"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .models import ClientConfig

logger = logging.getLogger(__name__)

# Global cache to avoid reloading config multiple times per session
_config_cache: ClientConfig | None = None


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """
    Get path to user configuration file.

    Returns:
        Path to ~/.config/securetask/config.json (or XDG equivalent)
    """
    return get_xdg_config_home() / "securetask" / "config.json"


def get_default_token_path() -> Path:
    """Path of the token file written by `securetask login`."""
    return get_xdg_config_home() / "securetask" / "token"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """
    Get path to project configuration file.

    Args:
        cwd: Working directory to search from (defaults to current directory)

    Returns:
        Path to .securetask.json in the working directory
    """
    if cwd is None:
        cwd = Path.cwd()
    return cwd / ".securetask.json"


def merge_layers(*layers: dict[str, Any] | None) -> dict[str, Any]:
    """
    Merge config layers, later layers winning key by key.

    ClientConfig is flat, so a layer replaces whole values; None layers
    (missing or unreadable files) are skipped.

    Example:
        >>> merge_layers({"timeout": 30.0, "api_url": "http://a"}, None, {"timeout": 5})
        {'timeout': 5, 'api_url': 'http://a'}
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        if layer:
            merged.update(layer)
    return merged


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON as dict, or None if file doesn't exist or can't be parsed
    """
    if not path.exists():
        return None

    try:
        with path.open() as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            logger.warning("Ignoring config at %s: top level is not an object", path)
            return None
    except (json.JSONDecodeError, OSError) as e:
        # Config system should be resilient: warn and fall back to lower layers
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Env vars have the highest precedence and override all config files.

    Supported env vars:
        SECURETASK_API_URL - overrides api_url
        SECURETASK_TIMEOUT - overrides timeout (seconds, > 0)
        SECURETASK_TOKEN - overrides token
        SECURETASK_TOKEN_FILE - overrides token_file

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if api_url := os.environ.get("SECURETASK_API_URL"):
        result["api_url"] = api_url

    if timeout_str := os.environ.get("SECURETASK_TIMEOUT"):
        try:
            timeout = float(timeout_str)
            if timeout <= 0:
                logger.warning("SECURETASK_TIMEOUT must be > 0, got %s, ignoring", timeout_str)
            else:
                result["timeout"] = timeout
        except ValueError:
            logger.warning("Invalid SECURETASK_TIMEOUT value '%s', ignoring", timeout_str)

    if token := os.environ.get("SECURETASK_TOKEN"):
        result["token"] = token

    if token_file := os.environ.get("SECURETASK_TOKEN_FILE"):
        result["token_file"] = token_file

    return result


def get_default_config() -> dict[str, Any]:
    """
    Get hardcoded default configuration.

    Returns:
        Dictionary with default configuration values
    """
    return {
        "api_url": "http://localhost:5000/api",
        "timeout": 30.0,
    }


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> ClientConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (SECURETASK_*)
        2. Project config (.securetask.json)
        3. User config (~/.config/securetask/config.json)
        4. Hardcoded defaults

    Args:
        project_dir: Project directory to load .securetask.json from (defaults to cwd)
        use_cache: If True, return cached config from previous load

    Returns:
        Validated ClientConfig instance, with token_file always resolved

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged = merge_layers(
        get_default_config(),
        load_json_file(get_user_config_path()),
        load_json_file(get_project_config_path(project_dir)),
    )
    merged = apply_env_overrides(merged)

    config = ClientConfig(**merged)
    if config.token_file is None:
        config = config.model_copy(update={"token_file": get_default_token_path()})

    _config_cache = config

    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
