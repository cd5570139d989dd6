"""Abstract base class for OAuth 2.0 login providers.

The embedding framework drives every provider through this interface:
``begin_auth`` produces the authorization URL, the framework redirects the
user, exchanges the returned code through the session, and finally calls
``fetch_user`` to obtain a normalized ``User``.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from authlib.oauth2.rfc6749 import OAuth2Token

from ..models import User


class OAuthProvider(ABC):
    """
    Abstract base class for OAuth 2.0 login providers.

    Subclasses must implement provider-specific details.
    """

    def __init__(self, provider_name: str):
        self._provider_name = provider_name

    @property
    def name(self) -> str:
        """Name used to retrieve this provider later."""
        return self._provider_name

    @name.setter
    def name(self, value: str) -> None:
        # Needed when several instances of the same provider are configured
        self._provider_name = value

    def set_name(self, name: str) -> None:
        self.name = name

    @abstractmethod
    def begin_auth(self, state: str) -> Any:
        """
        Start the authorization code flow.

        Args:
            state: CSRF protection token generated by the caller

        Returns:
            Provider session holding the authorization URL
        """

    @abstractmethod
    def unmarshal_session(self, data: str) -> Any:
        """Rebuild a session from ``session.marshal()`` output."""

    @abstractmethod
    def fetch_user(self, session: Any) -> User:
        """Fetch and normalize the authenticated user's profile."""

    @abstractmethod
    def fetch_user_with_token(self, token: str) -> User:
        """Fetch a user from a raw token string."""

    @abstractmethod
    def refresh_token(self, refresh_token: str) -> OAuth2Token:
        """Mint a new access token from a refresh token."""

    @abstractmethod
    def refresh_token_available(self) -> bool:
        """Whether this provider issues refresh tokens."""

    def debug(self, enabled: bool) -> None:
        """Toggle verbose logging for this provider; no-op by default."""
