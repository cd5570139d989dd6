"""OAuth providers module."""
from .base import OAuthProvider
from .google import GoogleOAuthProvider

__all__ = ["OAuthProvider", "GoogleOAuthProvider"]
