"""Pydantic Settings model for application configuration."""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Token settings; the token injected into GitHub Actions jobs is accepted as a fallback
    GITHUB_PAT_TOKEN: str | None = Field(default=None, validation_alias=AliasChoices("GITHUB_PAT_TOKEN", "GITHUB_TOKEN"))

    # GitHub Actions step outputs file
    GITHUB_OUTPUT: Path | None = None


def get_settings() -> Settings:
    """Read settings from the environment and the .env file."""
    return Settings()
