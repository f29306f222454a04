"""Settings: every tunable read from the environment (or .env) by pydantic-settings.

Invariants:
    - get_settings() builds Settings once per process
    - A bare postgresql:// URL is rewritten to the asyncpg driver form
    - conversation_pair_uniqueness defaults on; turning it off makes direct
      conversation uniqueness best effort under concurrent first contact
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "postgresql+asyncpg://matchbox:matchbox@db:5432/matchbox"
    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_echo: bool = False

    # Conversations
    conversation_pair_uniqueness: bool = True

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_asyncpg_driver(cls, v):
        if isinstance(v, str) and v.startswith("postgresql://"):
            return "postgresql+asyncpg://" + v[len("postgresql://"):]
        return v

    @field_validator("log_format")
    @classmethod
    def known_log_format(cls, v: str) -> str:
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
