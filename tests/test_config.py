"""
Unit tests for application settings.
"""

import pytest
from pydantic import ValidationError

from core.config import Settings


class TestSettings:
    """Tests for Settings defaults and validation."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("SENSCRITIQUE_PROFILE_URL", raising=False)
        settings = Settings(_env_file=None)

        assert settings.SENSCRITIQUE_PROFILE_URL is None
        assert settings.OUTPUT_FILE == "letterboxd-import.csv"
        assert settings.MAX_PAGES == 50
        assert settings.HEADLESS is False
        assert settings.ESTIMATED_TOTAL_PAGES == 30
        assert settings.ITEMS_PER_PAGE == 18

    def test_profile_url_from_environment(self, monkeypatch):
        monkeypatch.setenv("SENSCRITIQUE_PROFILE_URL", "https://www.senscritique.com/someone/collection")
        settings = Settings(_env_file=None)
        assert settings.SENSCRITIQUE_PROFILE_URL == "https://www.senscritique.com/someone/collection"

    def test_profile_url_from_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SENSCRITIQUE_PROFILE_URL", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text('SENSCRITIQUE_PROFILE_URL="https://www.senscritique.com/me"\nHEADLESS=true\n')

        settings = Settings(_env_file=env_file)

        assert settings.SENSCRITIQUE_PROFILE_URL == "https://www.senscritique.com/me"
        assert settings.HEADLESS is True

    def test_invalid_profile_url(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, SENSCRITIQUE_PROFILE_URL="senscritique.com/someone")

    def test_base_url_trailing_slash_stripped(self):
        settings = Settings(_env_file=None, SENSCRITIQUE_BASE_URL="https://www.senscritique.com/")
        assert settings.SENSCRITIQUE_BASE_URL == "https://www.senscritique.com"

    def test_max_pages_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, MAX_PAGES=0)

    def test_log_level_normalized(self):
        assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"
        with pytest.raises(ValidationError):
            Settings(_env_file=None, LOG_LEVEL="chatty")
