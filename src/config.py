from __future__ import annotations

from decimal import Decimal
from functools import cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    # Stalk grown per seed per elapsed epoch.
    stalk_per_seed_per_epoch: Decimal = Decimal("0.0001")
    stalk_decimals: int = 10
    seeds_decimals: int = 6
    bdv_decimals: int = 6
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(env_prefix="SILO_", env_file=".env", env_file_encoding="utf-8", extra="ignore")


@cache
def config() -> AppSettings:
    return AppSettings()
