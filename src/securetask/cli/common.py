"""
Shared plumbing for CLI commands.

Logging setup, running coroutines from Typer's sync context, and building
an ApiClient from the loaded configuration.
"""

import asyncio
import logging
import sys
from collections.abc import AsyncIterator, Coroutine
from contextlib import asynccontextmanager
from typing import Any, TypeVar

import typer
from pydantic import ValidationError

from securetask.cli.errors import ExitCode, print_error
from securetask.core.api.client import ApiClient
from securetask.core.api.credentials import (
    CredentialProvider,
    FileTokenStore,
    StaticCredentials,
)
from securetask.core.config import get_default_token_path, load_config
from securetask.core.config.models import ClientConfig

T = TypeVar("T")


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for CLI commands.

    Args:
        debug: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    # httpx logs every request at INFO; keep it quiet unless debugging
    logging.getLogger("httpx").setLevel(level)


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """
    Run a coroutine from a sync context.

    Uses asyncio.run() to execute async code from Typer's sync CLI context.
    """
    return asyncio.run(coro)


def get_config() -> ClientConfig:
    """
    Load configuration, exiting with a user error if it is invalid.

    Raises:
        typer.Exit: With USER_ERROR when the merged config fails validation
    """
    try:
        return load_config()
    except ValidationError as e:
        print_error(
            "Invalid configuration",
            reason=str(e),
            solution="Fix .securetask.json, ~/.config/securetask/config.json or SECURETASK_* env vars",
        )
        raise typer.Exit(ExitCode.USER_ERROR)


def get_token_store(config: ClientConfig) -> FileTokenStore:
    """Token file written by login and cleared by logout."""
    return FileTokenStore(config.token_file or get_default_token_path())


def get_credentials(config: ClientConfig) -> CredentialProvider:
    """
    Pick the credential provider for this invocation.

    An explicit token (SECURETASK_TOKEN or config ``token``) wins over the
    stored login token.
    """
    if config.token:
        return StaticCredentials(config.token)
    return get_token_store(config)


def build_client(config: ClientConfig) -> ApiClient:
    return ApiClient.from_config(config, get_credentials(config))


@asynccontextmanager
async def api_session(config: ClientConfig | None = None) -> AsyncIterator[ApiClient]:
    """Open an ApiClient for the duration of one command."""
    if config is None:
        config = get_config()
    async with build_client(config) as api:
        yield api
