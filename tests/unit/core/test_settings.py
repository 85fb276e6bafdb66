"""Tests for settings configuration module."""

from __future__ import annotations

import os
from unittest.mock import patch

from telcmate.core.settings import Settings, get_settings, has_firestore_config


class TestSettings:
    """Test Settings configuration class."""

    @patch.dict(os.environ, {}, clear=True)
    def test_settings_default_values(self) -> None:
        """Test default values are set correctly."""
        settings = Settings(_env_file=None)

        assert settings.store_backend == "sql"
        assert settings.database_url == "sqlite:///data/telcmate.db"
        assert settings.database_echo is False
        assert settings.firebase_project_id == ""
        assert settings.firestore_database == "(default)"
        assert settings.admin_code == ""
        assert settings.log_level == "INFO"

    @patch.dict(
        os.environ,
        {
            "TELCMATE_STORE_BACKEND": "firestore",
            "TELCMATE_DATABASE_URL": "sqlite:///tmp/other.db",
            "TELCMATE_DATABASE_ECHO": "true",
            "FIREBASE_PROJECT_ID": "telc-mate",
            "FIRESTORE_DATABASE": "staging",
            "TELCMATE_ADMIN_CODE": "admin123",
            "TELCMATE_LOG_LEVEL": "DEBUG",
        },
        clear=True,
    )
    def test_settings_from_environment(self) -> None:
        """Test settings loaded from environment variables."""
        settings = Settings(_env_file=None)

        assert settings.store_backend == "firestore"
        assert settings.database_url == "sqlite:///tmp/other.db"
        assert settings.database_echo is True
        assert settings.firebase_project_id == "telc-mate"
        assert settings.firestore_database == "staging"
        assert settings.admin_code == "admin123"
        assert settings.log_level == "DEBUG"

    def test_get_settings_returns_instance(self) -> None:
        """Test get_settings returns Settings instance."""
        assert isinstance(get_settings(), Settings)


class TestHasFirestoreConfig:
    """Test Firestore configuration detection."""

    @patch.dict(os.environ, {}, clear=True)
    def test_requires_project_id(self) -> None:
        settings = Settings(_env_file=None, GOOGLE_APPLICATION_CREDENTIALS="key.json")
        assert has_firestore_config(settings) is False

    @patch.dict(os.environ, {}, clear=True)
    def test_project_and_credentials(self) -> None:
        settings = Settings(
            _env_file=None,
            FIREBASE_PROJECT_ID="telc-mate",
            GOOGLE_APPLICATION_CREDENTIALS="key.json",
        )
        assert has_firestore_config(settings) is True

    @patch.dict(os.environ, {}, clear=True)
    def test_project_without_credentials(self) -> None:
        settings = Settings(_env_file=None, FIREBASE_PROJECT_ID="telc-mate")
        assert has_firestore_config(settings) is False

    @patch.dict(os.environ, {"FIRESTORE_EMULATOR_HOST": "localhost:8080"}, clear=True)
    def test_emulator_needs_no_credentials(self) -> None:
        settings = Settings(_env_file=None, FIREBASE_PROJECT_ID="telc-mate")
        assert has_firestore_config(settings) is True
