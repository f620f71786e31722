"""Pydantic Settings model for application configuration."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from issue_sync.utils.constants import DEFAULT_GITHUB_API_URL, MAX_PER_PAGE


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False

    # GitHub API settings
    GITHUB_API_URL: str = DEFAULT_GITHUB_API_URL
    PER_PAGE: int = Field(default=MAX_PER_PAGE, ge=1, le=MAX_PER_PAGE)

    # GitHub token settings; GITHUB_TOKEN wins when both are set
    GITHUB_TOKEN: str | None = None
    GITHUB_PAT_TOKEN: str | None = None


def get_settings() -> Settings:
    """Read settings from the environment and the local .env file."""
    return Settings()
