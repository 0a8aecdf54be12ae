"""Tests for application settings."""

import pytest

from vanzone.config import Settings


class TestSettingsDefaults:
    """Test default values and parsing of settings."""

    def test_default_radius(self):
        """Nearby queries default to 50 km."""
        s = Settings()
        assert s.default_radius_km == 50.0

    def test_default_radius_must_be_positive(self):
        """A zero or negative default radius is rejected."""
        with pytest.raises(Exception):
            Settings(default_radius_km=0)

    def test_cors_origins_comma_separated(self):
        """CORS origins can be given as a comma-separated string."""
        s = Settings(cors_origins="https://app.example.com, https://m.example.com,")
        assert s.cors_origins == ["https://app.example.com", "https://m.example.com"]

    def test_cors_origins_list(self):
        """CORS origins can be given as a list."""
        s = Settings(cors_origins=["https://app.example.com"])
        assert s.cors_origins == ["https://app.example.com"]

    def test_log_level_normalized(self):
        """Log level is upper-cased."""
        s = Settings(log_level=" debug ")
        assert s.log_level == "DEBUG"

    def test_log_level_unknown_rejected(self):
        """Unknown log levels are rejected."""
        with pytest.raises(Exception, match="Unknown log level"):
            Settings(log_level="chatty")

    def test_database_url_override(self, monkeypatch):
        """DATABASE_URL from the environment wins over the default."""
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db/vanzone_test")
        s = Settings()
        assert s.database_url == "postgresql+asyncpg://u:p@db/vanzone_test"
