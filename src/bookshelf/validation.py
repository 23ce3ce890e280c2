"""
Configuration validation for the Bookshelf application.

Checks run once during startup so misconfiguration shows up in the logs
before the first request does.
"""

from __future__ import annotations

from typing import Any

from .config import DEV_JWT_SECRET, Settings
from .database.connection import test_database_connection
from .logging import get_logger

logger = get_logger(__name__)


class ConfigurationError(Exception):
    """Raised when application validation fails."""

    pass


async def validate_database_connection() -> dict[str, Any]:
    """Check that the database is accessible and responsive."""
    results: dict[str, Any] = {"valid": True, "warnings": [], "errors": []}

    success, error_message = await test_database_connection()

    if success:
        logger.info("Database connection validation successful")
    else:
        results["valid"] = False
        results["errors"].append(error_message)
        logger.error("Database connection validation failed", error=error_message)

    return results


def validate_auth_configuration(settings: Settings) -> dict[str, Any]:
    """Check the token signing configuration."""
    results: dict[str, Any] = {"valid": True, "warnings": [], "errors": []}

    if not settings.jwt_secret:
        results["valid"] = False
        results["errors"].append("BOOKSHELF_JWT_SECRET is empty")
    elif settings.jwt_secret == DEV_JWT_SECRET:
        if settings.is_production:
            results["valid"] = False
            results["errors"].append("Development JWT secret used in production")
        else:
            results["warnings"].append("Using the development JWT secret")

    if settings.token_expiry_minutes <= 0:
        results["valid"] = False
        results["errors"].append("BOOKSHELF_TOKEN_EXPIRY_MINUTES must be positive")

    for warning in results["warnings"]:
        logger.warning(warning)
    for error in results["errors"]:
        logger.error(error)

    return results


async def validate_startup_configuration(settings: Settings) -> dict[str, Any]:
    """Run every startup check and combine the results."""
    logger.info("Starting application configuration validation")

    db_results = await validate_database_connection()
    auth_results = validate_auth_configuration(settings)

    combined = {
        "overall_valid": db_results["valid"] and auth_results["valid"],
        "database": db_results,
        "auth": auth_results,
        "environment": {
            "environment": settings.environment,
            "debug": settings.debug,
        },
    }

    if combined["overall_valid"]:
        logger.info("Application configuration validation completed successfully")
    else:
        logger.error(
            "Application configuration validation failed",
            errors=db_results["errors"] + auth_results["errors"],
        )

    return combined
