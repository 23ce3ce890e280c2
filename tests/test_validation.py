"""
Tests for startup configuration validation
"""

from unittest.mock import AsyncMock, patch

import pytest

from bookshelf.config import DEV_JWT_SECRET, Settings
from bookshelf.validation import validate_auth_configuration, validate_startup_configuration


class TestAuthConfiguration:
    def test_dev_secret_warns_outside_production(self):
        results = validate_auth_configuration(Settings(jwt_secret=DEV_JWT_SECRET))

        assert results["valid"] is True
        assert results["warnings"]

    def test_dev_secret_fails_in_production(self):
        settings = Settings(jwt_secret=DEV_JWT_SECRET, environment="production")

        results = validate_auth_configuration(settings)

        assert results["valid"] is False

    def test_empty_secret_fails(self):
        assert validate_auth_configuration(Settings(jwt_secret=""))["valid"] is False

    def test_non_positive_expiry_fails(self):
        settings = Settings(jwt_secret="real-secret", token_expiry_minutes=0)

        assert validate_auth_configuration(settings)["valid"] is False

    def test_custom_secret_is_clean(self):
        results = validate_auth_configuration(Settings(jwt_secret="real-secret"))

        assert results == {"valid": True, "warnings": [], "errors": []}


class TestStartupConfiguration:
    @pytest.mark.asyncio
    async def test_database_failure_marks_invalid(self):
        with patch(
            "bookshelf.validation.test_database_connection",
            new=AsyncMock(return_value=(False, "connection refused")),
        ):
            results = await validate_startup_configuration(Settings(jwt_secret="real-secret"))

        assert results["overall_valid"] is False
        assert results["database"]["errors"] == ["connection refused"]

    @pytest.mark.asyncio
    async def test_all_checks_pass(self):
        with patch(
            "bookshelf.validation.test_database_connection",
            new=AsyncMock(return_value=(True, None)),
        ):
            results = await validate_startup_configuration(Settings(jwt_secret="real-secret"))

        assert results["overall_valid"] is True
        assert results["environment"]["environment"] == "development"
