"""
Credential providers for authenticating requests.

The HTTP client never looks up a token on its own. It is handed a
CredentialProvider at construction time and asks it for the current token
each time a request is built.

Providers:
- StaticCredentials: a fixed token (env var, tests)
- FileTokenStore: token persisted in a file under the user config dir,
  written by `securetask login` and cleared by `securetask logout`
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

TOKEN_FILE_MODE = 0o600


@runtime_checkable
class CredentialProvider(Protocol):
    """Protocol for anything that can supply a bearer token."""

    def get_token(self) -> str | None:
        """
        Return the current bearer token.

        Returns:
            Token string, or None when the user is not authenticated
        """
        ...


class StaticCredentials:
    """Credential provider returning a fixed token."""

    def __init__(self, token: str | None = None) -> None:
        self._token = token or None

    def get_token(self) -> str | None:
        return self._token


class FileTokenStore:
    """
    Token persisted as a single line in a file.

    The file is created with owner-only permissions. A missing or empty file
    means "not authenticated".

    Example:
        >>> store = FileTokenStore(Path("/tmp/securetask/token"))
        >>> store.save_token("abc123")
        >>> store.get_token()
        'abc123'
        >>> store.clear()
        >>> store.get_token() is None
        True
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def get_token(self) -> str | None:
        if not self.path.exists():
            return None
        try:
            token = self.path.read_text(encoding="utf-8").strip()
        except OSError as e:
            logger.warning("Failed to read token file %s: %s", self.path, e)
            return None
        return token or None

    def save_token(self, token: str) -> None:
        """
        Persist a token, replacing any previous one.

        Args:
            token: Bearer token returned by the auth endpoints

        Raises:
            ValueError: If token is empty
        """
        if not token or not token.strip():
            raise ValueError("token must be non-empty")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # O_CREAT mode only applies to new files; chmod covers an existing one
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, TOKEN_FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            os.chmod(self.path, TOKEN_FILE_MODE)
            f.write(token.strip() + "\n")
        logger.debug("Saved token to %s", self.path)

    def clear(self) -> bool:
        """
        Remove the stored token.

        Returns:
            True if a token file was removed, False if there was none
        """
        if not self.path.exists():
            return False
        self.path.unlink()
        logger.debug("Removed token file %s", self.path)
        return True


__all__ = [
    "CredentialProvider",
    "StaticCredentials",
    "FileTokenStore",
]
