"""
Configuration data models for securetask.

These models define the structure of .securetask.json and
~/.config/securetask/config.json files, with validation and type safety
via Pydantic.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ClientConfig(BaseModel):
    """
    Settings for talking to the task service.

    Example:
        >>> config = ClientConfig(api_url="https://tasks.example.com/api")
        >>> config.timeout
        30.0
    """
    api_url: str = Field(
        default="http://localhost:5000/api",
        description="Root URL of the task service REST API"
    )
    timeout: float = Field(
        default=30.0,
        gt=0.0,
        description="Per-request timeout in seconds"
    )
    token: Optional[str] = Field(
        default=None,
        description="Bearer token to use instead of the stored login token"
    )
    token_file: Optional[Path] = Field(
        default=None,
        description="Where `securetask login` stores the token (defaults to the user config dir)"
    )

    model_config = ConfigDict(
        extra="ignore",
    )

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Require an absolute http(s) URL and drop any trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"api_url must start with http:// or https://, got {v!r}")
        return v.rstrip("/")

    @field_validator("token")
    @classmethod
    def blank_token_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v
