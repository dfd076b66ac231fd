"""Account models and the gateway for the auth and profile endpoints."""

from .gateway import AccountGateway
from .models import AuthResult, Credentials, ProfileUpdate, Registration, User

__all__ = [
    "AccountGateway",
    "AuthResult",
    "Credentials",
    "ProfileUpdate",
    "Registration",
    "User",
]
