"""Per-login session state for the Google provider."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import NoAuthURLError

if TYPE_CHECKING:
    from .providers.google import GoogleOAuthProvider

logger = logging.getLogger(__name__)


class GoogleSession(BaseModel):
    """
    Values carried between ``begin_auth`` and ``fetch_user``.

    Serialised with the field aliases so a stored session stays readable
    by other implementations of the same provider interface.
    """

    model_config = ConfigDict(populate_by_name=True)

    auth_url: str = Field(default="", alias="AuthURL")
    access_token: str = Field(default="", alias="AccessToken")
    refresh_token: str = Field(default="", alias="RefreshToken")
    id_token: str = Field(default="", alias="IDToken")
    expires_at: datetime | None = Field(default=None, alias="ExpiresAt")

    def get_auth_url(self) -> str:
        """
        Return the URL the user must visit to authorize the application.

        Raises:
            NoAuthURLError: If the session was not created by ``begin_auth``
        """
        if not self.auth_url:
            raise NoAuthURLError()
        return self.auth_url

    def authorize(self, provider: GoogleOAuthProvider, params: Mapping[str, Any]) -> str:
        """
        Exchange the callback's authorization code for tokens.

        Args:
            provider: Provider that created this session
            params: Callback query parameters; ``code`` is required

        Returns:
            The new access token
        """
        token = provider.oauth2_client.exchange(params.get("code", ""))

        self.access_token = token.get("access_token", "")
        self.refresh_token = token.get("refresh_token", "")
        self.id_token = token.get("id_token", "")
        self.expires_at = _token_expiry(token)
        logger.debug(
            "Authorization code exchanged",
            extra={
                "provider": provider.name,
                "has_refresh_token": bool(self.refresh_token),
                "has_id_token": bool(self.id_token),
            },
        )
        return self.access_token

    def marshal(self) -> str:
        return self.model_dump_json(by_alias=True)

    def __str__(self) -> str:
        return self.marshal()


def _token_expiry(token: Mapping[str, Any]) -> datetime | None:
    if token.get("expires_at"):
        return datetime.fromtimestamp(int(token["expires_at"]), tz=timezone.utc)
    if token.get("expires_in"):
        return datetime.now(timezone.utc) + timedelta(seconds=int(token["expires_in"]))
    return None
