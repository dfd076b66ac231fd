"""
Configuration models and loading.

This module provides the Pydantic model for client configuration
with multi-layer merging: defaults < user < project < env vars.
"""

from .loader import (
    clear_cache,
    get_default_token_path,
    get_project_config_path,
    get_user_config_path,
    get_xdg_config_home,
    load_config,
)
from .models import ClientConfig

__all__ = [
    # Models
    "ClientConfig",
    # Loader functions
    "clear_cache",
    "get_default_token_path",
    "get_project_config_path",
    "get_user_config_path",
    "get_xdg_config_home",
    "load_config",
]
