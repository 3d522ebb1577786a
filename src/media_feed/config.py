"""Configuration helpers for the feed-to-Markdown pipeline."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    feed_url: str = Field(
        "https://letterboxd.com/funkylarma/rss/",
        alias="FEED_URL",
        description="RSS feed to convert.",
    )
    template_path: str = Field(
        "includes/templates/letterboxd.md",
        alias="TEMPLATE_PATH",
        description="Template with [ID], [DATE], [TITLE]... placeholders.",
    )
    output_dir: str = Field(
        "src/media/",
        alias="MEDIA_OUTPUT_DIR",
        description="Root of the <year>/<month>/<slug>.md tree.",
    )
    feed_timeout: float | None = Field(
        None,
        alias="FEED_TIMEOUT",
        description="Seconds to wait for the feed; unset means wait indefinitely.",
    )
    log_level: str = Field("INFO", alias="LOG_LEVEL")


def get_settings() -> Settings:
    """Return a settings instance built from the current environment."""
    return Settings()
