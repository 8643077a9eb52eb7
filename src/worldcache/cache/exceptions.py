"""Errors raised inside the cache layer. None of them escape CacheController."""


class CacheError(Exception):
    """Base class for cache control errors."""


class SourceMissingError(CacheError):
    """The world directory a cache should be built from does not exist."""

    def __init__(self, world_path):
        self.world_path = world_path
        super().__init__(f"World path '{world_path}' doesn't exist")
