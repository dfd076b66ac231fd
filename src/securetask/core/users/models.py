"""
Account data models.

Pydantic models for the user profile and the auth endpoints' responses.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class User(BaseModel):
    """
    The authenticated user's profile as returned by ``/users/me``.

    Attributes:
        id: Server-assigned identifier (``_id`` on the wire)
        name: Display name
        email: Login email
    """

    id: str = Field(..., validation_alias=AliasChoices("id", "_id"))
    name: str = ""
    email: str = ""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        if isinstance(v, int):
            return str(v)
        return v


class AuthResult(BaseModel):
    """
    Response of ``/auth/login`` and ``/auth/register``.

    Some deployments return the user alongside the token, some only the
    token; ``user`` is None in the latter case.
    """

    token: str = Field(..., min_length=1)
    user: User | None = None

    model_config = ConfigDict(extra="ignore")


class Credentials(BaseModel):
    """Body of ``POST /auth/login``."""

    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=1)


class Registration(Credentials):
    """Body of ``POST /auth/register``."""

    name: str = Field(..., min_length=1)


class ProfileUpdate(BaseModel):
    """Partial body of ``PUT /users/me``; only set fields are sent."""

    name: str | None = Field(default=None, min_length=1)
    email: str | None = Field(default=None, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str | None = Field(default=None, min_length=1)

    model_config = ConfigDict(extra="forbid")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
