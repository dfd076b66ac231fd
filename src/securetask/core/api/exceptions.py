"""
Custom exceptions for the SecureTask client.

This module defines a hierarchy of exceptions for talking to the task
service, providing structured error handling with context preservation.

Exception Hierarchy:
    SecureTaskError (base)
    ├── RemoteError (failed network or server call)
    │   └── ResponseError (2xx response with an unusable body)
    └── TaskValidationError (local validation, no network call made)

Example:
    >>> from securetask.core.api.exceptions import RemoteError
    >>> try:
    ...     raise RemoteError(404, "Task not found", url="/tasks/t1")
    ... except RemoteError as e:
    ...     print(f"{e.status_code}: {e}")
    ...     print(f"Context: {e.context}")
"""


class SecureTaskError(Exception):
    """
    Base exception for all SecureTask client errors.

    Attributes:
        message: Human-readable error message
        context: Optional dictionary of additional context
    """

    def __init__(self, message: str, **context: object) -> None:
        """
        Initialize an error with message and context.

        Args:
            message: Human-readable error message
            **context: Additional context as keyword arguments
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message


class RemoteError(SecureTaskError):
    """
    Exception for a failed call to the task service.

    Raised for any non-2xx response and for transport failures (connection
    refused, timeout). Transport failures carry ``status_code=None``.

    The original httpx exception is preserved via ``__cause__``.

    Example:
        >>> import httpx
        >>> try:
        ...     raise httpx.ConnectError("Connection refused")
        ... except httpx.ConnectError as e:
        ...     raise RemoteError(None, "Could not reach the task service") from e
    """

    def __init__(
        self,
        status_code: int | None,
        message: str,
        *,
        server_message: str | None = None,
        **context: object,
    ) -> None:
        """
        Initialize a remote error.

        Args:
            status_code: HTTP status code, or None for transport failures
            message: Human-readable error message
            server_message: The ``message`` field of the error body, if the
                server sent one
            **context: Additional context (url, method, etc.)
        """
        super().__init__(message, status_code=status_code, **context)
        self.status_code = status_code
        self.server_message = server_message

    @property
    def is_not_found(self) -> bool:
        """True when the server reported the resource as missing."""
        return self.status_code == 404

    @property
    def is_client_error(self) -> bool:
        """True for 4xx rejections (validation, auth, not found)."""
        return self.status_code is not None and 400 <= self.status_code < 500


class ResponseError(RemoteError):
    """
    Exception for a successful response whose body cannot be used.

    Raised when the JSON cannot be decoded or does not have the shape the
    gateway expects (e.g. a list endpoint returning an object).
    """


class TaskValidationError(SecureTaskError):
    """
    Exception for input rejected before any network call.

    Example:
        >>> raise TaskValidationError("Title is required", field="title")
    """


__all__ = [
    "SecureTaskError",
    "RemoteError",
    "ResponseError",
    "TaskValidationError",
]
