"""Google OAuth 2.0 / OpenID Connect implementation."""
from __future__ import annotations

import json
import logging
from contextlib import ExitStack

import httpx
from authlib.oauth2.rfc6749 import OAuth2Token

from google_login.core.config import get_settings
from google_login.core.logger import set_debug

from ..client import AuthlibOAuth2Client, AuthURLParam, OAuth2Client, new_config
from ..exceptions import MissingTokenError, OAuthNotImplementedError, UserInfoStatusError
from ..models import GoogleUser, IDTokenClaims, User
from ..session import GoogleSession
from .base import OAuthProvider

logger = logging.getLogger(__name__)

PROFILE_URL = "https://www.googleapis.com/oauth2/v2/userinfo"
ID_TOKEN_INFO_URL = "https://www.googleapis.com/oauth2/v3/tokeninfo"


class GoogleOAuthProvider(OAuthProvider):
    """Google OAuth 2.0 / OpenID Connect implementation."""

    def __init__(
        self,
        client_key: str,
        secret: str,
        callback_url: str,
        *scopes: str,
        http_client: httpx.Client | None = None,
        oauth2_client: OAuth2Client | None = None,
        timeout: float | None = None,
    ):
        """
        Initialize Google provider.

        Args:
            client_key: OAuth client ID from Google
            secret: OAuth client secret from Google
            callback_url: Callback URL for OAuth flow
            scopes: Requested scopes; ``email`` when none given
            http_client: Client for every outbound request, token grants included
            oauth2_client: Client used for code exchange and refresh
            timeout: Timeout for a client created here; defaults to settings
        """
        super().__init__("google")
        self.client_key = client_key
        self.secret = secret
        self.callback_url = callback_url
        self.config = new_config(client_key, secret, callback_url, *scopes)
        if http_client is None:
            if timeout is None:
                timeout = get_settings().HTTP_TIMEOUT_SECONDS
            http_client = httpx.Client(timeout=timeout)
        self._http_client = http_client
        self.oauth2_client = oauth2_client or AuthlibOAuth2Client(self.config, session=http_client)
        # Offline access makes Google issue a refresh token
        self.auth_url_params: list[AuthURLParam] = [("access_type", "offline")]

    @property
    def http_client(self) -> httpx.Client:
        return self._http_client

    def get_client_id(self) -> str:
        return self.config.client_id

    def debug(self, enabled: bool) -> None:
        set_debug(enabled, __name__)

    def begin_auth(self, state: str) -> GoogleSession:
        url = self.oauth2_client.authorization_url(state, self.auth_url_params)
        return GoogleSession(auth_url=url)

    def unmarshal_session(self, data: str) -> GoogleSession:
        return GoogleSession.model_validate_json(data)

    def fetch_user(self, session: GoogleSession) -> User:
        """
        Fetch basic information about the user from Google.

        When the session's ID token equals its access token the caller only
        holds an ID token, so the tokeninfo endpoint is asked first; a 400
        from it falls back to the userinfo endpoint if an access token is
        available.

        Args:
            session: Session after the authorization code exchange

        Returns:
            Normalized user; provider-specific fields such as ``hd`` are
            left in ``raw_data``

        Raises:
            MissingTokenError: Session has neither access nor ID token
            UserInfoStatusError: Final response status is not 200
        """
        user = User(
            provider=self.name,
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            id_token=session.id_token,
            expires_at=session.expires_at,
        )

        if not user.access_token and not user.id_token:
            raise MissingTokenError(self.name)

        retrieved_via_id_token = False

        with ExitStack() as stack:
            if user.id_token and user.id_token == user.access_token:
                retrieved_via_id_token = True
                response = stack.enter_context(
                    self._get(ID_TOKEN_INFO_URL, {"id_token": session.id_token})
                )
                if response.status_code == httpx.codes.BAD_REQUEST and session.access_token:
                    logger.debug("tokeninfo rejected the ID token, retrying with userinfo", extra={"provider": self.name})
                    response.close()
                    response = stack.enter_context(
                        self._get(PROFILE_URL, {"access_token": session.access_token})
                    )
                    retrieved_via_id_token = False
            else:
                response = stack.enter_context(
                    self._get(PROFILE_URL, {"access_token": session.access_token})
                )

            if response.status_code != httpx.codes.OK:
                raise UserInfoStatusError(self.name, response.status_code)

            body = response.read()

        raw_data = json.loads(body)

        if retrieved_via_id_token:
            claims = IDTokenClaims.model_validate(raw_data)
            user.raw_data = raw_data
            user.user_id = claims.sub
            user.email = claims.email
            user.name = claims.name
            user.first_name = claims.given_name
            user.last_name = claims.family_name
            user.avatar_url = claims.picture
            return user

        profile = GoogleUser.model_validate(raw_data)
        user.raw_data = raw_data
        user.name = profile.name
        user.first_name = profile.given_name
        user.last_name = profile.family_name
        user.nick_name = profile.name
        user.email = profile.email
        user.avatar_url = profile.picture
        user.user_id = profile.id
        return user

    def _get(self, url: str, params: dict[str, str]):
        logger.debug("Fetching user information", extra={"provider": self.name, "url": url})
        return self.http_client.stream("GET", url, params=params)

    def fetch_user_with_token(self, token: str) -> User:
        raise OAuthNotImplementedError()

    def refresh_token_available(self) -> bool:
        return True

    def refresh_token(self, refresh_token: str) -> OAuth2Token:
        """Get a new access token based on the refresh token."""
        return self.oauth2_client.refresh(refresh_token)

    def set_prompt(self, *prompt: str) -> None:
        """
        Set the prompt values for the Google OAuth call.

        Pass "select_account" to force users to choose an account every time.
        See https://developers.google.com/identity/protocols/OpenIDConnect#authenticationuriparameters
        """
        if not prompt:
            return
        self.auth_url_params.append(("prompt", " ".join(prompt)))

    def set_hosted_domain(self, hd: str) -> None:
        """
        Set the hd parameter to restrict sign-in to one hosted domain.

        See https://developers.google.com/identity/protocols/oauth2/openid-connect#hd-param
        """
        if not hd:
            return
        self.auth_url_params.append(("hd", hd))

    def set_login_hint(self, login_hint: str) -> None:
        """
        Set the login_hint parameter to suggest a specific account.

        See https://developers.google.com/identity/protocols/oauth2/openid-connect#login-hint
        """
        if not login_hint:
            return
        self.auth_url_params.append(("login_hint", login_hint))

    def set_access_type(self, access_type: str) -> None:
        """
        Set the access_type parameter.

        Google only issues a refresh token for "offline".
        See https://developers.google.com/identity/protocols/oauth2/openid-connect#access-type-param
        """
        if not access_type:
            return
        self.auth_url_params.append(("access_type", access_type))
