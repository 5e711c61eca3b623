"""Application configuration."""
from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).parent.parent.parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API
    app_name: str = "Mod Recipe Browser API"
    api_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Storage
    database_path: str = "database/recipes.db"
    database_url: Optional[str] = None  # Any SQLAlchemy URL, overrides database_path

    # Extraction
    mods_dir: Optional[str] = None  # Default folder for /mods/scan
    batch_size: int = 100
    progress_every: int = 50

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # CORS - accepts comma-separated string from env
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    @property
    def cors_origins_list(self) -> list[str]:
        """Return CORS origins as a list."""
        if not self.cors_origins:
            return ["http://localhost:5173", "http://localhost:3000"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Pagination
    default_page_size: int = 50
    max_page_size: int = 500

    # Response caches. Writes made through the API drop them at once; writes from
    # another process (run_extractor.py on the same database) show up only
    # once cached entries expire, so keep this short.
    cache_ttl_seconds: float = 30.0


settings = Settings()
