"""Application configuration."""

from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from core.models.config import CorrelatorConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Telegram (notifications are disabled when token or chat id is empty)
    telegram_bot_token: str = ""
    telegram_chat_id: str = ""
    telegram_api_url: str = "https://api.telegram.org"
    telegram_timeout: float = 10.0

    # Correlation
    max_signals_per_session: int = 3
    fvg_window_minutes: int = 60
    condition_update_policy: Literal["overwrite", "latch"] = "overwrite"

    # Seconds to wait for pending notifications on shutdown
    notify_shutdown_timeout: float = 5.0

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = False
    log_level: str = "INFO"

    @property
    def telegram_enabled(self) -> bool:
        return bool(self.telegram_bot_token and self.telegram_chat_id)

    def correlator_config(self) -> CorrelatorConfig:
        """Build the correlation engine configuration."""
        return CorrelatorConfig(
            max_emissions_per_session=self.max_signals_per_session,
            fvg_window=timedelta(minutes=self.fvg_window_minutes),
            update_policy=self.condition_update_policy,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
