from __future__ import annotations

import json
import os
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "google-login"
    ENV: str = "dev"
    BACKEND_URL: str = "http://localhost:8000"  # Used to derive the default OAuth callback URL

    # Google OAuth 2.0 / OpenID Connect
    GOOGLE_CLIENT_ID: str | None = None
    GOOGLE_CLIENT_SECRET: str | None = None
    GOOGLE_REDIRECT_URL: str | None = None
    GOOGLE_SCOPES: Annotated[list[str], NoDecode] = ["email"]

    # Extra authorization URL parameters, appended in this order when set
    GOOGLE_PROMPT: Annotated[list[str], NoDecode] = []  # e.g. ["select_account", "consent"]
    GOOGLE_HOSTED_DOMAIN: str | None = None
    GOOGLE_LOGIN_HINT: str | None = None
    GOOGLE_ACCESS_TYPE: str | None = None

    HTTP_TIMEOUT_SECONDS: float = 10.0
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["text", "json"] = "text"

    @field_validator("GOOGLE_SCOPES", "GOOGLE_PROMPT", mode="before")
    @classmethod
    def split_space_separated(cls, v):
        """Accept "openid email" as well as a JSON list."""
        if isinstance(v, str):
            if v.lstrip().startswith("["):
                return json.loads(v)
            return v.split()
        return v

    @model_validator(mode="after")
    def _validate_required_fields(self) -> BaseAppSettings:
        if self.HTTP_TIMEOUT_SECONDS <= 0:
            raise ValueError("HTTP_TIMEOUT_SECONDS must be positive")

        required_in_prod = (
            "GOOGLE_CLIENT_ID",
            "GOOGLE_CLIENT_SECRET",
        )
        if self.ENV.lower() in ("prod", "production"):
            missing = [name for name in required_in_prod if not getattr(self, name)]
            if missing:
                raise ValueError(f"Missing required production settings: {', '.join(missing)}")
            if self.redirect_url.startswith("http://"):
                raise ValueError("OAuth callback URL must use https in production")
        return self

    @property
    def redirect_url(self) -> str:
        if self.GOOGLE_REDIRECT_URL:
            return self.GOOGLE_REDIRECT_URL
        return f"{self.BACKEND_URL.rstrip('/')}/auth/oauth/google/callback"


class DevSettings(BaseAppSettings):
    ENV: str = "dev"
    LOG_LEVEL: str = "DEBUG"


class TestSettings(BaseAppSettings):
    ENV: str = "test"
    GOOGLE_CLIENT_ID: str | None = "test-client-id"
    GOOGLE_CLIENT_SECRET: str | None = "test-client-secret"


class ProdSettings(BaseAppSettings):
    ENV: str = "prod"
    LOG_FORMAT: Literal["text", "json"] = "json"


_ENV_TO_SETTINGS: dict[str, type[BaseAppSettings]] = {
    "dev": DevSettings,
    "development": DevSettings,
    "test": TestSettings,
    "testing": TestSettings,
    "prod": ProdSettings,
    "production": ProdSettings,
}


@lru_cache
def get_settings() -> BaseAppSettings:
    env_name = os.getenv("APP_ENV") or os.getenv("ENV") or "dev"
    env = env_name.lower()
    settings_cls = _ENV_TO_SETTINGS.get(env, DevSettings)
    return settings_cls()

