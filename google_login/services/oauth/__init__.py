"""OAuth 2.0 / OpenID Connect login provider for Google.

Builds the authorization URL, exchanges codes through Authlib, and turns
either an access token or an ID token into a normalized ``User``.
"""
from .client import (
    GOOGLE_ENDPOINT,
    AuthlibOAuth2Client,
    Endpoint,
    OAuth2Client,
    OAuth2Config,
    new_config,
)
from .exceptions import (
    MissingTokenError,
    NoAuthURLError,
    OAuthConfigurationError,
    OAuthNotImplementedError,
    OAuthProviderError,
    UserInfoStatusError,
)
from .factory import create_google_provider
from .models import GoogleUser, IDTokenClaims, User
from .providers import (
    GoogleOAuthProvider,
    OAuthProvider,
)
from .session import GoogleSession

__all__ = [
    # Exceptions
    "OAuthProviderError",
    "MissingTokenError",
    "UserInfoStatusError",
    "OAuthNotImplementedError",
    "NoAuthURLError",
    "OAuthConfigurationError",
    # Client
    "OAuth2Client",
    "AuthlibOAuth2Client",
    "OAuth2Config",
    "Endpoint",
    "GOOGLE_ENDPOINT",
    "new_config",
    # Models
    "User",
    "GoogleUser",
    "IDTokenClaims",
    "GoogleSession",
    # Providers
    "OAuthProvider",
    "GoogleOAuthProvider",
    # Factory
    "create_google_provider",
]
