"""
Schemas for the cache control layer.

This module defines the time units a cache lifetime can be expressed in, the
immutable cache policy, and the lifecycle states of a cache directory.
"""

import logging
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from worldcache.core.settings import (
    DEFAULT_CACHE_HISTORY,
    DEFAULT_CACHE_LIFETIME,
    DEFAULT_TIME_UNIT,
)

logger = logging.getLogger(__name__)


_SECONDS_PER_UNIT = {
    "NANOSECONDS": 1e-9,
    "MICROSECONDS": 1e-6,
    "MILLISECONDS": 1e-3,
    "SECONDS": 1.0,
    "MINUTES": 60.0,
    "HOURS": 3600.0,
    "DAYS": 86400.0,
}


class TimeUnit(str, Enum):
    """Units a cache lifetime can be configured in."""
    NANOSECONDS = "NANOSECONDS"
    MICROSECONDS = "MICROSECONDS"
    MILLISECONDS = "MILLISECONDS"
    SECONDS = "SECONDS"
    MINUTES = "MINUTES"
    HOURS = "HOURS"
    DAYS = "DAYS"

    def to_seconds(self, amount: Union[int, float]) -> float:
        return amount * _SECONDS_PER_UNIT[self.value]

    def to_millis(self, amount: Union[int, float]) -> float:
        return self.to_seconds(amount) * 1000.0

    @classmethod
    def parse(cls, value: Union[str, "TimeUnit", None], default: Optional["TimeUnit"] = None) -> "TimeUnit":
        """
        Parse a time unit name, falling back to ``default`` when it is not recognized.

        Args:
            value: A unit name such as "MINUTES" (case-insensitive) or a TimeUnit
            default: Unit returned for unrecognized input (MINUTES if omitted)

        Returns:
            The parsed TimeUnit, or the default
        """
        if default is None:
            default = cls(DEFAULT_TIME_UNIT)
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            logger.warning(f"Failed to parse time-unit '{value}', using default ({default.value}).")
            return default


class CacheState(str, Enum):
    """Lifecycle states of a cache directory."""
    ABSENT = "absent"          # No cache directory on disk
    REBUILDING = "rebuilding"  # Copy of the world in progress
    PRESENT = "present"        # Complete copy, readable without further I/O
    DELETING = "deleting"      # Removal in progress (expiry or rebuild)


class CacheConfig(BaseModel):
    """Immutable cache policy: how long a cache lives and how many archives are kept."""
    model_config = ConfigDict(frozen=True)

    lifetime: int = Field(default=DEFAULT_CACHE_LIFETIME, ge=0)
    time_unit: TimeUnit = TimeUnit(DEFAULT_TIME_UNIT)
    history: int = Field(default=DEFAULT_CACHE_HISTORY, ge=0)  # 0 disables rotation

    @property
    def lifetime_seconds(self) -> float:
        return self.time_unit.to_seconds(self.lifetime)
