"""Application settings and configuration management."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Look for .env file in the project root, then the working directory
env_file = Path(__file__).parent.parent.parent / ".env"
if env_file.exists():
    load_dotenv(env_file)
else:
    load_dotenv(".env", verbose=False)


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Document store selection
    store_backend: str = Field(default="sql", alias="TELCMATE_STORE_BACKEND")

    # SQL document store
    database_url: str = Field(
        default="sqlite:///data/telcmate.db", alias="TELCMATE_DATABASE_URL"
    )
    database_echo: bool = Field(default=False, alias="TELCMATE_DATABASE_ECHO")

    # Firestore document store
    firebase_project_id: str = Field(default="", alias="FIREBASE_PROJECT_ID")
    firestore_database: str = Field(default="(default)", alias="FIRESTORE_DATABASE")
    google_application_credentials: str = Field(
        default="", alias="GOOGLE_APPLICATION_CREDENTIALS"
    )

    # Admin CLI
    admin_code: str = Field(default="", alias="TELCMATE_ADMIN_CODE")

    # Logging Configuration
    log_level: str = Field(default="INFO", alias="TELCMATE_LOG_LEVEL")

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


def has_firestore_config(settings: Settings | None = None) -> bool:
    """Check if Firestore configuration is available."""
    settings = settings or get_settings()
    if not settings.firebase_project_id:
        return False
    # The emulator needs no credentials
    if os.getenv("FIRESTORE_EMULATOR_HOST"):
        return True
    return bool(
        settings.google_application_credentials
        or os.getenv("GOOGLE_APPLICATION_CREDENTIALS")
    )
