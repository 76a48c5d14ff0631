"""Application settings for the custom icon badges relay."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralised configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_prefix="ICONBADGES_", case_sensitive=False)

    app_name: str = "Custom Icon Badges"

    # Database
    data_dir: Path = Field(default_factory=lambda: Path.cwd() / "instance")
    database_url: str | None = None

    # Upstream badge service
    upstream_base_url: str = "https://img.shields.io"
    upstream_timeout: float | None = None
    user_agent: str = "custom-icon-badges/1.0"
    default_content_type: str = "image/svg+xml"

    # Curated icons
    octicons_path: Path | None = None

    # Logging / monitoring
    log_level: str = "INFO"
    enable_prometheus: bool = True
    metrics_namespace: str = "iconbadges"

    @property
    def resolved_database_url(self) -> str:
        """Return the configured database URL defaulting to a local SQLite file."""
        if self.database_url:
            return self.database_url

        self.data_dir.mkdir(parents=True, exist_ok=True)
        return f"sqlite:///{(self.data_dir / 'icons.db').as_posix()}"

    @property
    def resolved_octicons_path(self) -> Path:
        if self.octicons_path:
            return self.octicons_path
        return Path(__file__).resolve().parent.parent / "data" / "octicons.json"

    @property
    def resolved_upstream_base_url(self) -> str:
        return self.upstream_base_url.rstrip("/")


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()


__all__ = ["Settings", "get_settings"]
