"""Startup validation and bootstrap helpers."""

from __future__ import annotations

import logging

from vekstloop.core.config import get_config
from vekstloop.core.logging_config import configure_logging
from vekstloop.database.db import get_active_database_url, verify_database_connection

logger = logging.getLogger(__name__)


def _providers_without_credentials(config) -> list[str]:
    """Providers whose client id/secret pair is incomplete; their token refresh will fail."""
    missing = []
    if not (config.GOOGLE_CLIENT_ID and config.GOOGLE_CLIENT_SECRET):
        missing.append("google")
    if not (config.MICROSOFT_CLIENT_ID and config.MICROSOFT_CLIENT_SECRET):
        missing.append("microsoft")
    return missing


def validate_startup_config() -> None:
    """Fail-fast config and connectivity checks."""
    config = get_config()
    database_ok = verify_database_connection()
    active_database_url = get_active_database_url()
    if not database_ok and config.DB_CONNECTIVITY_REQUIRED:
        raise RuntimeError("Database connectivity check failed.")
    if not database_ok:
        logger.warning(
            "startup.database.connectivity_optional_failed",
            extra={"event": "startup.database.connectivity_optional_failed"},
        )

    if config.is_production:
        if active_database_url.startswith("sqlite"):
            logger.warning(
                "startup.production.sqlite_detected",
                extra={"event": "startup.production.sqlite_detected"},
            )
        if config.SCOPE_MODE == "global":
            logger.warning(
                "startup.production.global_scope",
                extra={"event": "startup.production.global_scope"},
            )

    missing = _providers_without_credentials(config)
    if missing:
        logger.warning(
            "startup.oauth.credentials_missing",
            extra={"event": "startup.oauth.credentials_missing", "providers": missing},
        )

    logger.info(
        "startup.config.validated",
        extra={
            "event": "startup.config.validated",
            "env": config.ENV,
            "scope_mode": config.SCOPE_MODE,
            "database_url_scheme": active_database_url.split("://", 1)[0],
            "db_connectivity_required": config.DB_CONNECTIVITY_REQUIRED,
        },
    )


def bootstrap() -> None:
    """Initialize logging and validate runtime configuration."""
    configure_logging()
    validate_startup_config()
