"""Base exception for google_login.

Error codes follow pattern: [CATEGORY][NUMBER]
- OAUTH: OAuth provider errors (001-099)
"""

from __future__ import annotations

from typing import Any


class GoogleLoginException(Exception):
    """Base exception for all google_login errors.

    Library errors (httpx transport failures, JSON decode errors, Authlib
    token errors) are not wrapped and never derive from this class.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ):
        """Initialize exception with message and metadata.

        Args:
            message: Human-readable error message
            code: Unique error code (e.g., "OAUTH001")
            details: Optional additional context
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response format."""
        return {
            "error": {
                "message": self.message,
                "code": self.code,
                "details": self.details,
            }
        }
