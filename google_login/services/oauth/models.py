"""User record returned by providers and the Google response schemas it is built from."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator


class User(BaseModel):
    """Normalized user, the same shape for every provider."""

    provider: str
    user_id: str = ""
    name: str = ""
    first_name: str = ""
    last_name: str = ""
    nick_name: str = ""
    email: str = ""
    avatar_url: str = ""
    access_token: str = ""
    refresh_token: str = ""
    id_token: str = ""
    expires_at: datetime | None = None
    raw_data: dict[str, Any] = Field(default_factory=dict)


class _UpstreamSchema(BaseModel):
    @field_validator("*", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        return "" if v is None else v


class GoogleUser(_UpstreamSchema):
    """Response of the v2 userinfo endpoint (access token)."""

    id: str = ""
    email: str = ""
    name: str = ""
    given_name: str = ""
    family_name: str = ""
    link: str = ""
    picture: str = ""


class IDTokenClaims(_UpstreamSchema):
    """Response of the v3 tokeninfo endpoint (ID token).

    Google serialises ``email_verified``, ``iat`` and ``exp`` as strings;
    native JSON types are accepted too. None of the verification claims
    are checked here.
    """

    sub: str = ""
    name: str = ""
    email: str = ""
    given_name: str = ""
    family_name: str = ""
    picture: str = ""
    email_verified: bool | str | None = None
    iss: str = ""
    aud: str | list[str] = ""
    iat: int | str | None = None
    exp: int | str | None = None
