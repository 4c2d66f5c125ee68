from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    log_level: str = Field("WARNING", alias="CASHFLOW_LOG_LEVEL")
    log_json: bool = Field(True, alias="CASHFLOW_LOG_JSON")
    treasurer: Optional[str] = Field(None, alias="CASHFLOW_TREASURER")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
