"""
Cache control for world snapshots: staleness policy, locking, expiry and
archive rotation.
"""

from worldcache.cache.cache_control import CacheController
from worldcache.cache.exceptions import CacheError, SourceMissingError
from worldcache.cache.expiry import ExpiryScheduler
from worldcache.cache.registry import CacheRegistry
from worldcache.cache.schemas import CacheConfig, CacheState, TimeUnit

__all__ = [
    "CacheController",
    "CacheRegistry",
    "ExpiryScheduler",
    "CacheConfig",
    "CacheState",
    "TimeUnit",
    "CacheError",
    "SourceMissingError",
]
