"""OAuth service exceptions."""
from __future__ import annotations

from google_login.core.exceptions import GoogleLoginException


class OAuthProviderError(GoogleLoginException):
    """Raised when OAuth provider communication fails."""


class MissingTokenError(OAuthProviderError):
    """Session holds neither an access token nor an ID token."""

    def __init__(self, provider: str):
        super().__init__(
            message=f"{provider} cannot get user information without accessToken AND idToken",
            code="OAUTH001",
            details={"provider": provider},
        )
        self.provider = provider


class UserInfoStatusError(OAuthProviderError):
    """Profile or tokeninfo endpoint answered with a non-200 status."""

    def __init__(self, provider: str, status_code: int):
        super().__init__(
            message=f"{provider} responded with a {status_code} trying to fetch user information",
            code="OAUTH002",
            details={"provider": provider, "status_code": status_code},
        )
        self.provider = provider
        self.status_code = status_code


class OAuthNotImplementedError(OAuthProviderError):
    def __init__(self, operation: str = "fetch_user_with_token"):
        super().__init__(
            message="not implemented",
            code="OAUTH003",
            details={"operation": operation},
        )


class NoAuthURLError(OAuthProviderError):
    """Session was not created by begin_auth."""

    def __init__(self):
        super().__init__(
            message="an AuthURL has not been set",
            code="OAUTH004",
        )


class OAuthConfigurationError(OAuthProviderError):
    """Provider credentials are missing from settings."""

    def __init__(self, missing: list[str]):
        super().__init__(
            message=f"Google OAuth not configured (missing {', '.join(missing)})",
            code="OAUTH005",
            details={"missing": missing},
        )
