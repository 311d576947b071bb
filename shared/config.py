"""
Centralized Configuration for the Alpaca trading service
Uses Pydantic Settings with .env loading.
"""

from datetime import time
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class AlpacaSettings(BaseSettings):
    """Alpaca REST API settings."""
    model_config = SettingsConfigDict(env_prefix="APCA_", env_file=".env", extra="ignore")
    
    api_key_id: str = ""
    api_secret_key: str = ""
    paper: bool = True
    data_url: str = "https://data.alpaca.markets/v2"
    data_feed: str = "iex"
    request_timeout: float = 10.0  # seconds, per HTTP call
    max_retries: int = Field(default=3, ge=0)  # retries after the first attempt on idempotent reads
    retry_backoff: float = 0.5  # seconds, doubled per attempt
    
    @property
    def trading_url(self) -> str:
        """Get appropriate trading API base URL."""
        if self.paper:
            return "https://paper-api.alpaca.markets/v2"
        return "https://api.alpaca.markets/v2"
    
    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key_id and self.api_secret_key)


class StrategySettings(BaseSettings):
    """Indicator windows, signal thresholds and order sizing."""
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    
    sma_window: int = Field(default=10, ge=1, alias="SMA_WINDOW")
    rsi_window: int = Field(default=50, ge=1, alias="RSI_WINDOW")
    rsi_oversold: float = Field(default=30.0, ge=0, le=100, alias="RSI_OVERSOLD")
    rsi_overbought: float = Field(default=70.0, ge=0, le=100, alias="RSI_OVERBOUGHT")
    bar_timeframe: str = Field(default="1Min", alias="BAR_TIMEFRAME")
    bar_limit: int = Field(default=50, ge=1, alias="BAR_LIMIT")
    order_quantity: float = Field(default=1.0, gt=0, alias="ORDER_QUANTITY")
    max_workers: int = Field(default=1, ge=1, alias="MAX_WORKERS")
    dry_run: bool = Field(default=False, alias="DRY_RUN")


class SessionSettings(BaseSettings):
    """Weekday trading window, in exchange-local time."""
    model_config = SettingsConfigDict(env_prefix="SESSION_", env_file=".env", extra="ignore")
    
    enabled: bool = True
    timezone: str = "America/New_York"
    notice_time: time = time(9, 30)
    start_time: time = time(10, 0)
    stop_time: time = time(16, 30)
    weekdays: Annotated[list[int], NoDecode] = Field(default_factory=lambda: [0, 1, 2, 3, 4])  # Monday=0
    poll_seconds: float = 30.0
    
    @field_validator("weekdays", mode="before")
    @classmethod
    def parse_weekdays(cls, v):
        """Accept a comma separated string such as "0,1,2,3,4"."""
        if isinstance(v, str):
            return [int(part) for part in v.split(",") if part.strip()]
        return v


class ServerSettings(BaseSettings):
    """HTTP server settings."""
    model_config = SettingsConfigDict(env_prefix="SERVER_", env_file=".env", extra="ignore")
    
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class LoggingSettings(BaseSettings):
    """Logging settings."""
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="text", alias="LOG_FORMAT")
    
    @field_validator("log_format", mode="before")
    @classmethod
    def validate_format(cls, v: str) -> str:
        v = str(v).lower()
        if v not in {"text", "json"}:
            raise ValueError(f"LOG_FORMAT must be 'text' or 'json', got {v!r}")
        return v


class TradingSettings(BaseSettings):
    """Main trading service settings."""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    # Sub-settings (loaded from same .env)
    alpaca: AlpacaSettings = Field(default_factory=AlpacaSettings)
    strategy: StrategySettings = Field(default_factory=StrategySettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache()
def get_settings() -> TradingSettings:
    """Get cached settings instance."""
    return TradingSettings()


def reload_settings() -> TradingSettings:
    """Force reload settings (clears cache)."""
    get_settings.cache_clear()
    return get_settings()
