"""Application settings and configuration."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.cwd() / "data"


def get_default_exchanges_path() -> Path:
    """Return the exchange reference file shipped with the package."""
    return Path(__file__).resolve().parent.parent / "data" / "exchanges.json"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Holdings Valuation Service"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # Data directory (holdings database lives here)
    data_dir: Optional[Path] = None

    # Database URL (derived from data_dir if not set explicitly)
    database_url: Optional[str] = None

    # Exchange reference data (falls back to built-in defaults if unreadable)
    exchanges_path: Optional[Path] = None

    # Quote provider
    finnhub_api_key: str = ""
    finnhub_base_url: str = "https://finnhub.io/api/v1"
    http_timeout_seconds: float = Field(default=10.0, gt=0)

    # Valuation
    target_currency: str = "GBP"
    price_cache_ttl_seconds: float = Field(default=900.0, gt=0)
    fx_cache_ttl_seconds: float = Field(default=900.0, gt=0)
    fallback_usd_to_target: float = Field(default=0.78, gt=0)
    fallback_usd_to_eur: float = Field(default=0.92, gt=0)
    price_fetch_workers: int = Field(default=8, ge=1)
    price_cache_maxsize: int = Field(default=1024, ge=1)

    # Requests per client across all /api routes
    api_rate_limit: str = "300 per 15 minutes"

    # Admin routes
    admin_token: str = "change-this-token"

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "holdings.db"
        return f"sqlite:///{db_path}"

    def get_exchanges_path(self) -> Path:
        return self.exchanges_path or get_default_exchanges_path()


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
