"""Desk configuration loaded from the environment and an optional .env file."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DeskSettings(BaseSettings):
    """Settings for one trading session.

    Every field can be overridden with a ``CRYPTOMIND_`` prefixed environment
    variable, e.g. ``CRYPTOMIND_SEED_BALANCE=25000``.
    """

    model_config = SettingsConfigDict(
        env_prefix="CRYPTOMIND_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    seed_balance: float = Field(default=50_000.0, gt=0)
    dust_threshold: float = Field(default=1e-6, ge=0)
    autotrade_period_seconds: float = Field(default=20.0, gt=0)
    autotrade_top_n: int = Field(default=20, gt=0)
    quote_refresh_seconds: float = Field(default=60.0, gt=0)
    notification_history: int = Field(default=50, gt=0)
    min_confidence: float = Field(default=60.0, ge=0, le=100)
    log_level: str = "INFO"
    random_seed: Optional[int] = None
