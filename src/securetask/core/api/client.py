"""
HTTP client adapter for the SecureTask REST API.

Wraps an httpx.AsyncClient and provides:
- Bearer token injection from an injected CredentialProvider, read at the
  moment each request is built
- JSON request/response handling
- Translation of every failure (non-2xx status, timeout, connection error,
  undecodable body) into RemoteError

There is deliberately one network round trip per call: no retries, no
caching. Timeouts come from the configured client timeout.

Example:
    >>> from securetask.core.api.client import ApiClient
    >>> from securetask.core.api.credentials import StaticCredentials
    >>>
    >>> async with ApiClient("http://localhost:5000/api", StaticCredentials("tok")) as api:
    ...     tasks = await api.get("/tasks", params={"status": "pending"})
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from securetask.core.api.credentials import CredentialProvider, StaticCredentials
from securetask.core.api.exceptions import RemoteError, ResponseError
from securetask.core.config.models import ClientConfig

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def _extract_message(response: httpx.Response) -> str | None:
    """
    Pull the server's message out of an error response.

    The task service reports failures as ``{"message": "..."}``.

    Returns:
        The message, or None when the body carries none
    """
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None


class ApiClient:
    """
    Async JSON client for the task service.

    Attributes:
        base_url: API root, e.g. "http://localhost:5000/api"
        credentials: Provider consulted for the bearer token on every request
    """

    def __init__(
        self,
        base_url: str,
        credentials: CredentialProvider | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Create a client.

        Args:
            base_url: API root URL; request paths are resolved against it
            credentials: Token provider (defaults to no token)
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url
        self.credentials: CredentialProvider = credentials or StaticCredentials()
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        credentials: CredentialProvider,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> ApiClient:
        """Build a client from a loaded ClientConfig."""
        return cls(
            config.api_url,
            credentials,
            timeout=config.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    def _build_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        token = self.credentials.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
    ) -> Any:
        """
        Perform one request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Path relative to base_url (e.g. "/tasks/t1")
            params: Query parameters; only the given keys are sent
            json: Request body, serialized as JSON when not None

        Returns:
            Decoded JSON body, or None for an empty body

        Raises:
            RemoteError: On non-2xx status or transport failure
            ResponseError: If a 2xx body is not valid JSON
        """
        headers = self._build_headers()
        logger.debug("%s %s params=%s", method, path, params)

        try:
            response = await self._client.request(
                method, path, params=params, json=json, headers=headers
            )
        except httpx.TimeoutException as e:
            logger.warning("%s %s timed out", method, path)
            raise RemoteError(
                None,
                "Request to the task service timed out",
                method=method,
                url=path,
            ) from e
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise RemoteError(
                None,
                f"Network error while contacting the task service: {e}",
                method=method,
                url=path,
            ) from e

        if not response.is_success:
            server_message = _extract_message(response)
            message = server_message or (
                f"HTTP {response.status_code} {response.reason_phrase or 'error'}"
            )
            logger.warning("%s %s -> %d: %s", method, path, response.status_code, message)
            raise RemoteError(
                response.status_code,
                message,
                server_message=server_message,
                method=method,
                url=path,
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise ResponseError(
                response.status_code,
                "Failed to parse JSON response from the task service",
                method=method,
                url=path,
            ) from e

    async def get(self, path: str, *, params: dict[str, str] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)


__all__ = ["ApiClient", "DEFAULT_TIMEOUT"]
