"""
HTTP access to the SecureTask REST API.

Provides the async client adapter, credential providers, and the exception
hierarchy shared by the task and account gateways.
"""

from .client import ApiClient
from .credentials import CredentialProvider, FileTokenStore, StaticCredentials
from .exceptions import RemoteError, ResponseError, SecureTaskError, TaskValidationError

__all__ = [
    "ApiClient",
    "CredentialProvider",
    "FileTokenStore",
    "StaticCredentials",
    "SecureTaskError",
    "RemoteError",
    "ResponseError",
    "TaskValidationError",
]
