"""Configuration for lint2hub."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support.

    Every field can be set through ``LINT2HUB_<NAME>`` or a ``.env`` file.
    Command line flags take precedence over these values.
    """

    model_config = SettingsConfigDict(
        env_prefix="LINT2HUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    environment: str = Field(default="development")
    debug: bool = Field(default=False)

    # GitHub
    github_access_token: Optional[str] = Field(default=None)
    github_base_url: str = Field(default="https://api.github.com")
    per_page: int = Field(default=100, ge=1, le=100)

    # Pull request
    owner: Optional[str] = Field(default=None)
    repo: Optional[str] = Field(default=None)
    pull_request: int = Field(default=0, ge=0)
    sha: Optional[str] = Field(default=None)

    # Session
    timeout: float = Field(default=30.0, gt=0)
    batch: bool = Field(default=False)
    pattern: Optional[str] = Field(default=None)

    # Single comment
    file: Optional[str] = Field(default=None)
    line: Optional[int] = Field(default=None)
    body: Optional[str] = Field(default=None)


settings = Settings()
