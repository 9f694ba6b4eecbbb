# auditguard/config/settings.py

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DataSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_name: str = "auditguard"
    environment: Literal["dev", "test", "prod"] = "dev"
    version: str = "0.1.0"

    # --- Database ---
    database_url: str = "sqlite://"
    database_echo: bool = False

    # --- Queries ---
    default_page_size: int = Field(50, ge=1, le=1000)

    # --- Observability ---
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@lru_cache
def get_settings() -> DataSettings:
    return DataSettings()
