"""OAuth2 client configuration and the narrow client interface the provider needs.

The provider never talks to the token endpoint itself. It builds the
authorization URL, exchanges codes and refreshes tokens through an
``OAuth2Client``; ``AuthlibOAuth2Client`` is the production implementation.
Its token requests go through the same ``httpx.Client`` the provider uses
for profile requests, so transport, proxy and timeout settings apply to both.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol, Sequence

import httpx
from authlib.common.urls import add_params_to_uri
from authlib.integrations.base_client import OAuthError
from authlib.integrations.httpx_client import OAuth2Auth, OAuth2ClientAuth
from authlib.oauth2.client import OAuth2Client as BaseOAuth2Client
from authlib.oauth2.rfc6749 import OAuth2Token

logger = logging.getLogger(__name__)

AuthURLParam = tuple[str, str]


@dataclass(frozen=True)
class Endpoint:
    auth_url: str
    token_url: str


GOOGLE_ENDPOINT = Endpoint(
    auth_url="https://accounts.google.com/o/oauth2/auth",
    token_url="https://accounts.google.com/o/oauth2/token",
)

DEFAULT_SCOPES = ("email",)


@dataclass(frozen=True)
class OAuth2Config:
    client_id: str
    client_secret: str
    redirect_url: str
    endpoint: Endpoint = GOOGLE_ENDPOINT
    scopes: tuple[str, ...] = field(default=DEFAULT_SCOPES)


def new_config(client_id: str, client_secret: str, redirect_url: str, *scopes: str) -> OAuth2Config:
    """Build a config bound to Google's endpoints; scopes default to ``email``."""
    return OAuth2Config(
        client_id=client_id,
        client_secret=client_secret,
        redirect_url=redirect_url,
        endpoint=GOOGLE_ENDPOINT,
        scopes=tuple(scopes) if scopes else DEFAULT_SCOPES,
    )


class OAuth2Client(Protocol):
    """What the provider needs from an OAuth2 library."""

    config: OAuth2Config

    def authorization_url(self, state: str, params: Sequence[AuthURLParam] = ()) -> str:
        ...

    def exchange(self, code: str) -> OAuth2Token:
        ...

    def refresh(self, refresh_token: str) -> OAuth2Token:
        ...


class _SessionBoundClient(BaseOAuth2Client):
    """Authlib's httpx flavour of the OAuth2 client, driving a caller-owned ``httpx.Client``."""

    client_auth_class = OAuth2ClientAuth
    token_auth_class = OAuth2Auth
    oauth_error_class = OAuthError


class AuthlibOAuth2Client:
    """``OAuth2Client`` backed by Authlib, sending token requests through ``session``."""

    def __init__(
        self,
        config: OAuth2Config,
        session: httpx.Client | None = None,
        timeout: float | None = None,
    ):
        """
        Args:
            config: Client credentials and endpoints
            session: Client used for the token endpoint; one is created when omitted
            timeout: Timeout for a client created here
        """
        self.config = config
        self._owns_session = session is None
        if session is None:
            session = httpx.Client(timeout=timeout) if timeout is not None else httpx.Client()
        self.session = session
        self._client = _SessionBoundClient(
            session,
            client_id=config.client_id,
            client_secret=config.client_secret,
            scope=list(config.scopes),
            redirect_uri=config.redirect_url,
        )

    def authorization_url(self, state: str, params: Sequence[AuthURLParam] = ()) -> str:
        # Authlib takes extra params as keywords, which cannot carry repeated keys.
        url, _ = self._client.create_authorization_url(self.config.endpoint.auth_url, state=state)
        if params:
            url = add_params_to_uri(url, list(params))
        return url

    def exchange(self, code: str) -> OAuth2Token:
        logger.debug("Exchanging authorization code", extra={"client_id": self.config.client_id})
        return self._client.fetch_token(
            self.config.endpoint.token_url,
            grant_type="authorization_code",
            code=code,
        )

    def refresh(self, refresh_token: str) -> OAuth2Token:
        logger.debug("Refreshing access token", extra={"client_id": self.config.client_id})
        return self._client.refresh_token(
            self.config.endpoint.token_url,
            refresh_token=refresh_token,
        )

    def close(self) -> None:
        if self._owns_session:
            self.session.close()
