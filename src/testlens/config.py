"""Configuration settings for testlens."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from ``TESTLENS_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TESTLENS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Stack trace links
    project_root_name: str = "berry"
    placeholder_root: str = "/path/to/berry"
    source_marker: str = "packages"
    source_url_template: str = "https://github.com/yarnpkg/berry/blob/master/{path}#L{line}"
    link_class: str = "text-red-800 underline"
    escape_html: bool = False

    # Logging
    log_level: str = "WARNING"
    log_json_format: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
