"""
Tests for environment-driven settings
"""

from bookshelf.config import Settings, get_database_url


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("BOOKSHELF_API_PORT", "BOOKSHELF_TOKEN_EXPIRY_MINUTES", "BOOKSHELF_GRAPHQL_PATH"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.api_port == 4000
        assert settings.token_expiry_minutes == 120
        assert settings.graphql_path == "/graphql"

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("BOOKSHELF_API_PORT", "8088")
        monkeypatch.setenv("BOOKSHELF_ENVIRONMENT", "production")

        settings = Settings(_env_file=None)

        assert settings.api_port == 8088
        assert settings.is_production is True

    def test_database_url_env_override(self, monkeypatch):
        monkeypatch.setenv("BOOKSHELF_DATABASE_URL", "postgresql://u:p@db:5432/books")

        assert get_database_url() == "postgresql://u:p@db:5432/books"
