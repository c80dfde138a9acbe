"""Application settings using Pydantic."""

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Detection parameters
    MIN_PROFIT_PCT: Decimal = Decimal("0.5")
    MAX_AGE_SECONDS: int = 60

    # Cadence
    SCAN_INTERVAL_MS: int = 1000

    # Reference data and tick feeds (empty = built-in defaults)
    EXCHANGES_FILE: str = ""
    ASSETS_FILE: str = ""
    TICKS_FILE: str = "data/ticks.csv"

    # Export
    EXPORT_DIR: str = "exports"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/arbitrage.log"


# Global settings instance
settings = Settings()
