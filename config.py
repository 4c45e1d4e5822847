from functools import lru_cache
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings, read from PORT, LOG_LEVEL, LOG_FORMAT, SEED_PATH and REGION_NAME."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    port: int = 8000
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["text", "json"] = "text"
    # Unset means the built-in seed record
    seed_path: Optional[str] = None
    region_name: str = "Kabupaten Gowa"

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator("log_format", mode="before")
    @classmethod
    def lower_format(cls, v):
        return v.lower() if isinstance(v, str) else v

    @field_validator("seed_path", mode="before")
    @classmethod
    def empty_seed_path(cls, v):
        return v or None


@lru_cache()
def get_settings() -> Settings:
    return Settings()
