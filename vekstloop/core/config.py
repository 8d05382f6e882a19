"""Configuration module for the Vekstloop CRM backend."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlparse

from dotenv import load_dotenv

from vekstloop.core.exceptions import ConfigurationError

load_dotenv()

SCOPE_MODES = {"workspace", "global"}


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Config:
    """Runtime configuration with validation."""

    APP_NAME: str
    APP_VERSION: str
    ENV: str
    DEBUG: bool
    DATABASE_URL: str
    DB_CONNECTIVITY_REQUIRED: bool
    SCOPE_MODE: str
    SESSION_COOKIE_NAME: str
    GOOGLE_CLIENT_ID: str | None
    GOOGLE_CLIENT_SECRET: str | None
    MICROSOFT_CLIENT_ID: str | None
    MICROSOFT_CLIENT_SECRET: str | None
    GOOGLE_USERINFO_URL: str
    GOOGLE_TOKEN_URL: str
    GMAIL_API_URL: str
    MICROSOFT_GRAPH_URL: str
    MICROSOFT_TOKEN_URL: str
    PROVIDER_CONNECT_TIMEOUT_SECONDS: float
    PROVIDER_TIMEOUT_SECONDS: float
    API_HOST: str
    API_PORT: int
    API_PREFIX: str
    LOG_LEVEL: str
    LOG_FILE: str

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"

    @property
    def is_workspace_scoped(self) -> bool:
        return self.SCOPE_MODE == "workspace"

    @property
    def provider_timeout(self) -> tuple[float, float]:
        """(connect, read) timeout tuple for outbound provider calls."""
        return (self.PROVIDER_CONNECT_TIMEOUT_SECONDS, self.PROVIDER_TIMEOUT_SECONDS)


def _build_config(env: str | None = None) -> Config:
    resolved_env = (env or os.getenv("ENV", "development")).strip().lower()
    debug = _as_bool(os.getenv("DEBUG"), default=False)

    config = Config(
        APP_NAME="Vekstloop CRM",
        APP_VERSION=os.getenv("APP_VERSION", "1.0.0"),
        ENV=resolved_env,
        DEBUG=debug if resolved_env != "production" else False,
        DATABASE_URL=os.getenv("DATABASE_URL", "sqlite:///./vekstloop.db"),
        DB_CONNECTIVITY_REQUIRED=_as_bool(
            os.getenv("DB_CONNECTIVITY_REQUIRED"), default=(resolved_env == "production")
        ),
        SCOPE_MODE=os.getenv("SCOPE_MODE", "workspace").strip().lower(),
        SESSION_COOKIE_NAME=os.getenv("SESSION_COOKIE_NAME", "vekstloop.session_token"),
        GOOGLE_CLIENT_ID=os.getenv("GOOGLE_CLIENT_ID"),
        GOOGLE_CLIENT_SECRET=os.getenv("GOOGLE_CLIENT_SECRET"),
        MICROSOFT_CLIENT_ID=os.getenv("MICROSOFT_CLIENT_ID"),
        MICROSOFT_CLIENT_SECRET=os.getenv("MICROSOFT_CLIENT_SECRET"),
        GOOGLE_USERINFO_URL=os.getenv("GOOGLE_USERINFO_URL", "https://www.googleapis.com/oauth2/v1/userinfo"),
        GOOGLE_TOKEN_URL=os.getenv("GOOGLE_TOKEN_URL", "https://oauth2.googleapis.com/token"),
        GMAIL_API_URL=os.getenv("GMAIL_API_URL", "https://gmail.googleapis.com/gmail/v1"),
        MICROSOFT_GRAPH_URL=os.getenv("MICROSOFT_GRAPH_URL", "https://graph.microsoft.com/v1.0"),
        MICROSOFT_TOKEN_URL=os.getenv(
            "MICROSOFT_TOKEN_URL", "https://login.microsoftonline.com/common/oauth2/v2.0/token"
        ),
        PROVIDER_CONNECT_TIMEOUT_SECONDS=float(os.getenv("PROVIDER_CONNECT_TIMEOUT_SECONDS", "5")),
        PROVIDER_TIMEOUT_SECONDS=float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "15")),
        API_HOST=os.getenv("API_HOST", "0.0.0.0"),
        API_PORT=int(os.getenv("API_PORT", "8000")),
        API_PREFIX=os.getenv("API_PREFIX", "/api/v1"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        LOG_FILE=os.getenv("LOG_FILE", "vekstloop.log"),
    )
    _validate_config(config)
    return config


def _validate_database_url(database_url: str) -> None:
    parsed = urlparse(database_url)
    if parsed.scheme not in {"sqlite", "postgresql", "postgresql+psycopg2", "postgresql+psycopg"}:
        raise ConfigurationError(
            "DATABASE_URL must use sqlite:// or postgresql:// style URL."
        )
    if parsed.scheme.startswith("postgresql") and not parsed.hostname:
        raise ConfigurationError("PostgreSQL DATABASE_URL is missing hostname.")


def _validate_config(config: Config) -> None:
    _validate_database_url(config.DATABASE_URL)

    if config.SCOPE_MODE not in SCOPE_MODES:
        raise ConfigurationError("SCOPE_MODE must be one of workspace/global.")
    if not config.SESSION_COOKIE_NAME.strip():
        raise ConfigurationError("SESSION_COOKIE_NAME must not be empty.")
    if config.PROVIDER_CONNECT_TIMEOUT_SECONDS <= 0:
        raise ConfigurationError("PROVIDER_CONNECT_TIMEOUT_SECONDS must be > 0.")
    if config.PROVIDER_TIMEOUT_SECONDS <= 0:
        raise ConfigurationError("PROVIDER_TIMEOUT_SECONDS must be > 0.")
    if config.LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ConfigurationError("LOG_LEVEL must be one of DEBUG/INFO/WARNING/ERROR/CRITICAL.")
    if config.is_production and "change_me" in config.DATABASE_URL.lower():
        raise ConfigurationError("Production DATABASE_URL uses placeholder credentials.")


@lru_cache(maxsize=8)
def get_config(env: str | None = None) -> Config:
    """Get validated configuration for the requested environment."""
    return _build_config(env)
