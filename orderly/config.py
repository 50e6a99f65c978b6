"""
Configuration — read once from the environment (and a .env file if present).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta

from dotenv import load_dotenv


@dataclass(frozen=True, slots=True)
class Settings:
    database_url: str = "sqlite+aiosqlite:///orders.db"
    redis_host: str = "127.0.0.1"
    redis_port: int = 6379
    cache_ttl_seconds: int = 300
    api_key: str = "1234567"
    log_file: str | None = "logs/server.log"
    log_level: str = "INFO"

    @property
    def cache_ttl(self) -> timedelta:
        return timedelta(seconds=self.cache_ttl_seconds)

    @classmethod
    def from_env(cls) -> Settings:
        load_dotenv()
        defaults = cls()
        return cls(
            database_url=os.getenv("ORDERLY_DATABASE_URL", defaults.database_url),
            redis_host=os.getenv("REDIS_HOST", defaults.redis_host),
            redis_port=int(os.getenv("REDIS_PORT", str(defaults.redis_port))),
            cache_ttl_seconds=int(os.getenv("ORDERLY_CACHE_TTL", str(defaults.cache_ttl_seconds))),
            api_key=os.getenv("ORDERLY_API_KEY", defaults.api_key),
            # Empty ORDERLY_LOG_FILE disables the file handler
            log_file=os.getenv("ORDERLY_LOG_FILE", defaults.log_file or "") or None,
            log_level=os.getenv("ORDERLY_LOG_LEVEL", defaults.log_level).upper(),
        )


__all__ = ("Settings",)
