"""Application settings loaded from environment variables."""
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Settings for the on-demand catalog service."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    app_name: str = "station-ondemand"
    app_version: str = "0.1.0"
    api_prefix: str = "/api"

    log_level: str = "INFO"
    log_format: str = "json"  # json or console

    database_url: str = "sqlite+aiosqlite:///./ondemand.db"
    database_echo: bool = False

    # Public base URL used to absolutize links; falls back to the request's base URL.
    base_url: Optional[str] = None

    default_per_page: int = 25

    meilisearch_url: Optional[str] = None
    meilisearch_api_key: Optional[str] = None
    meilisearch_index_prefix: str = "station_media"
    search_enabled: bool = True
    search_max_hits: int = 1000

    default_album_art_url: str = "/static/img/generic_song.jpg"

    @property
    def search_configured(self) -> bool:
        """Check if a search backend URL is set and non-empty."""
        return self.meilisearch_url is not None and len(self.meilisearch_url) > 0


# Global settings instance
app_settings = AppSettings()
