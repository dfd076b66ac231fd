"""
.env support for the SECURETASK_* settings.

A ``.env`` file may sit next to each JSON config file:

    ~/.config/securetask/.env    beside config.json (user)
    ./.env                       beside .securetask.json (project)

Only SECURETASK_* keys are taken from them; the project file wins over the
user file, and a variable already set in the process environment is never
replaced. The values then reach ClientConfig through apply_env_overrides().
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import dotenv_values

from .loader import get_project_config_path, get_user_config_path, merge_layers

logger = logging.getLogger(__name__)

ENV_PREFIX = "SECURETASK_"


def get_user_env_path() -> Path:
    """Path of the user .env, in the same directory as config.json."""
    return get_user_config_path().parent / ".env"


def get_project_env_path(project_dir: Path | None = None) -> Path:
    """Path of the project .env, in the same directory as .securetask.json."""
    return get_project_config_path(project_dir).parent / ".env"


def read_env_file(path: Path) -> dict[str, str] | None:
    """
    Read the SECURETASK_* entries of a .env file.

    Returns:
        The entries, or None if the file doesn't exist
    """
    if not path.exists():
        return None
    entries: dict[str, str] = {}
    for key, value in dotenv_values(path).items():
        if value is None:
            continue
        if not key.startswith(ENV_PREFIX):
            logger.debug("Ignoring %s in %s: not a %s* setting", key, path, ENV_PREFIX)
            continue
        entries[key] = value
    return entries


def load_layered_env(project_dir: Path | None = None) -> dict[str, str]:
    """
    Export settings from the user and project .env files.

    Args:
        project_dir: Directory holding .securetask.json (defaults to cwd)

    Returns:
        The variables that were actually set in os.environ
    """
    layered = merge_layers(
        read_env_file(get_user_env_path()),
        read_env_file(get_project_env_path(project_dir)),
    )

    applied: dict[str, str] = {}
    for key, value in layered.items():
        if key in os.environ:
            continue
        os.environ[key] = value
        applied[key] = value

    if applied:
        logger.debug("Loaded %s from .env files", ", ".join(sorted(applied)))
    return applied
