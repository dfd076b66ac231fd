"""
Account gateway.

Wraps the auth and profile endpoints of the task service. How tokens are
issued or rotated is the server's business; this module only forwards
credentials and hands back what the server returns.

API Endpoints:
- POST /auth/register  body {name, email, password} -> {token, user?}
- POST /auth/login     body {email, password}       -> {token, user?}
- GET  /users/me                                    -> user
- PUT  /users/me       body = partial profile       -> user
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from securetask.core.api.client import ApiClient
from securetask.core.api.exceptions import ResponseError
from securetask.core.users.models import (
    AuthResult,
    Credentials,
    ProfileUpdate,
    Registration,
    User,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _parse(model: type[M], data: Any, url: str) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ResponseError(
            None,
            f"Unexpected response from {url}: {e.error_count()} validation error(s)",
            url=url,
        ) from e


class AccountGateway:
    """Gateway for registration, login, and the current user's profile."""

    def __init__(self, api: ApiClient) -> None:
        self.api = api

    async def register(self, registration: Registration) -> AuthResult:
        """
        Create an account.

        Raises:
            RemoteError: If the server rejects the registration (e.g. email taken)
        """
        data = await self.api.post("/auth/register", json=registration.model_dump())
        result = _parse(AuthResult, data, "/auth/register")
        logger.debug("Registered %s", registration.email)
        return result

    async def login(self, credentials: Credentials) -> AuthResult:
        """
        Exchange email and password for a token.

        Raises:
            RemoteError: On bad credentials (4xx) or transport failure
        """
        data = await self.api.post("/auth/login", json=credentials.model_dump())
        result = _parse(AuthResult, data, "/auth/login")
        logger.debug("Logged in as %s", credentials.email)
        return result

    async def get_profile(self) -> User:
        """Fetch the authenticated user's profile."""
        data = await self.api.get("/users/me")
        return _parse(User, data, "/users/me")

    async def update_profile(self, update: ProfileUpdate) -> User:
        """Change some of the authenticated user's profile fields."""
        data = await self.api.put("/users/me", json=update.to_payload())
        return _parse(User, data, "/users/me")


__all__ = ["AccountGateway"]
