"""Factory function for creating a configured Google provider."""
from __future__ import annotations

import logging

from google_login.core.config import BaseAppSettings, get_settings
from google_login.core.logger import init_logging

from .exceptions import OAuthConfigurationError
from .providers import GoogleOAuthProvider

logger = logging.getLogger(__name__)


def create_google_provider(
    app_settings: BaseAppSettings | None = None,
    required: bool = False,
) -> GoogleOAuthProvider | None:
    """
    Factory function to create a Google provider from settings.

    Applies the configured prompt, hosted domain, login hint and access type
    in that order, and sets up package logging from the same settings.

    Args:
        app_settings: Settings to read; the cached application settings by default
        required: Raise instead of returning None when credentials are missing

    Returns:
        Configured GoogleOAuthProvider, or None if Google OAuth is not configured

    Raises:
        OAuthConfigurationError: If ``required`` and credentials are missing
    """
    cfg = app_settings or get_settings()
    init_logging(app_settings=cfg)

    missing = [
        name
        for name in ("GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET")
        if not getattr(cfg, name)
    ]
    if missing:
        if required:
            raise OAuthConfigurationError(missing)
        logger.warning("Google OAuth not configured (missing client ID/secret)")
        return None

    provider = GoogleOAuthProvider(
        cfg.GOOGLE_CLIENT_ID,
        cfg.GOOGLE_CLIENT_SECRET,
        cfg.redirect_url,
        *cfg.GOOGLE_SCOPES,
        timeout=cfg.HTTP_TIMEOUT_SECONDS,
    )
    provider.set_prompt(*cfg.GOOGLE_PROMPT)
    provider.set_hosted_domain(cfg.GOOGLE_HOSTED_DOMAIN or "")
    provider.set_login_hint(cfg.GOOGLE_LOGIN_HINT or "")
    provider.set_access_type(cfg.GOOGLE_ACCESS_TYPE or "")

    logger.info("Google OAuth provider enabled", extra={"provider": provider.name, "redirect_url": cfg.redirect_url})
    return provider
