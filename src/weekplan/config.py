"""Application settings.

Values are read from ``WEEKPLAN_*`` environment variables or a ``.env``
file. The arithmetic core never reads settings; policies built with
``from_settings()`` and the command-line interface do.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="WEEKPLAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Weeks the schedule screens allow browsing
    min_year: int = 2020
    max_year: int = 2050

    # Week range labels
    locale: str = "fr"

    # "core" = draft/approved, "approval" adds pending/rejected
    status_workflow: Literal["core", "approval"] = "core"

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
