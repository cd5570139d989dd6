from __future__ import annotations

import os

os.environ.setdefault("ENV", "test")

import logging  # noqa: E402
from types import SimpleNamespace  # noqa: E402
from urllib.parse import urlencode  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from authlib.oauth2.rfc6749 import OAuth2Token  # noqa: E402

from google_login.core.logger import HANDLER_NAME, PACKAGE_LOGGER  # noqa: E402
from google_login.services.oauth import GoogleOAuthProvider, OAuth2Config, new_config  # noqa: E402


class FakeOAuth2Client:
    """In-memory stand-in for the Authlib client; records every call."""

    def __init__(self, config: OAuth2Config):
        self.config = config
        self.token: dict = {"access_token": "fresh-access", "token_type": "Bearer", "expires_in": 3600}
        self.error: Exception | None = None
        self.exchanged: list[str] = []
        self.refreshed: list[str] = []

    def authorization_url(self, state, params=()):
        query = [
            ("response_type", "code"),
            ("client_id", self.config.client_id),
            ("redirect_uri", self.config.redirect_url),
            ("scope", " ".join(self.config.scopes)),
            ("state", state),
            *params,
        ]
        return f"{self.config.endpoint.auth_url}?{urlencode(query)}"

    def exchange(self, code):
        self.exchanged.append(code)
        if self.error is not None:
            raise self.error
        return OAuth2Token(dict(self.token))

    def refresh(self, refresh_token):
        self.refreshed.append(refresh_token)
        if self.error is not None:
            raise self.error
        return OAuth2Token(dict(self.token))


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers and levels that init_logging or debug() left behind."""
    yield
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def google_api():
    """Fake Google userinfo/tokeninfo endpoints.

    Queue responses per path on ``responses``; every request lands in ``calls``.
    Unqueued paths answer 404.
    """
    calls: list[httpx.Request] = []
    responses: dict[str, list[httpx.Response]] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        queued = responses.get(request.url.path)
        if queued:
            return queued.pop(0)
        return httpx.Response(404, json={"error": "not_found"})

    def queue(path: str, response: httpx.Response) -> None:
        responses.setdefault(path, []).append(response)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    yield SimpleNamespace(client=client, calls=calls, queue=queue)
    client.close()


@pytest.fixture
def provider(google_api):
    """Google provider wired to the fake Google API and a fake OAuth2 client."""
    args = ("client-123", "secret-456", "https://app.example.com/auth/oauth/google/callback")
    return GoogleOAuthProvider(
        *args,
        http_client=google_api.client,
        oauth2_client=FakeOAuth2Client(new_config(*args)),
    )
