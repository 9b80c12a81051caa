"""Tests for settings parsing and backend selection."""

import pytest
from pydantic import ValidationError

from staybook.config import Settings
from staybook.repositories import build_repositories


class TestSettings:
    def test_memory_only_overrides_backend(self):
        config = Settings(storage_backend="database", use_memory_only=True, jwt_secret_key="k")
        assert config.storage_backend == "memory"
        assert config.uses_memory

    def test_env_selects_database(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "database")
        monkeypatch.setenv("JWT_SECRET_KEY", "k")
        assert Settings().uses_memory is False

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValidationError):
            Settings(storage_backend="redis", jwt_secret_key="k")

    def test_async_database_url_rewrite(self):
        config = Settings(database_url="postgresql://u:p@db:5432/staybook", jwt_secret_key="k")
        assert config.async_database_url == "postgresql+asyncpg://u:p@db:5432/staybook"

    def test_frontend_url_added_to_cors(self):
        config = Settings(frontend_url="https://staybook.example", jwt_secret_key="k")
        assert "https://staybook.example" in config.cors_origins

    def test_default_secret_rejected_in_production(self):
        with pytest.raises(ValidationError):
            Settings(environment="production")


class TestBuildRepositories:
    def test_memory(self):
        repos = build_repositories(Settings(storage_backend="memory", jwt_secret_key="k"))
        assert repos.backend == "memory"
        assert repos.engine is None

    async def test_database(self):
        repos = build_repositories(
            Settings(storage_backend="database", database_url="sqlite+aiosqlite://", jwt_secret_key="k")
        )
        try:
            assert repos.backend == "database"
            assert repos.engine is not None
        finally:
            await repos.close()
