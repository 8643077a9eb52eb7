# worldcache/src/worldcache/core/config.py

from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings

from worldcache.core.settings import (
    DEFAULT_CACHE_HISTORY,
    DEFAULT_CACHE_LIFETIME,
    DEFAULT_TIME_UNIT,
)


class Settings(BaseSettings):
    # Cache location; each world gets <temp_dir>/<world name>
    temp_dir: Path = Field(default=Path("cache"))
    backup_dir: Path = Field(default=Path("backups"))
    worlds: List[str] = Field(default_factory=lambda: ["world"])

    # Cache policy
    cache_lifetime: int = Field(default=DEFAULT_CACHE_LIFETIME, ge=0)
    time_unit: str = Field(default=DEFAULT_TIME_UNIT)
    cache_history: int = Field(default=DEFAULT_CACHE_HISTORY, ge=0)
    force: bool = Field(default=False)

    log_level: str = Field(default="INFO")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "WORLDCACHE_",
        "extra": "ignore"
    }

    def cache_dir_for(self, world_name: str) -> Path:
        return self.temp_dir / world_name


def get_settings() -> Settings:
    """Build a fresh Settings instance from the current environment."""
    return Settings()


# Instantiate settings
settings = Settings()
