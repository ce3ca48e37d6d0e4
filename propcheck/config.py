"""Library configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """propcheck settings loaded from ``PROPCHECK_*`` environment variables."""

    # Schema registration
    STRICT: bool = True

    # Messages
    MESSAGE_PREFIX: str = ""

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "warning"

    model_config = {
        "env_prefix": "PROPCHECK_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    return Settings()
