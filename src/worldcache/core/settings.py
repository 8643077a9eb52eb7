"""
Project-wide constants or "settings" that are unlikely to change at runtime.
"""

DEFAULT_CACHE_LIFETIME = 30  # in DEFAULT_TIME_UNIT
DEFAULT_TIME_UNIT = "MINUTES"
DEFAULT_CACHE_HISTORY = 5  # archives kept per world, 0 disables rotation
ARCHIVE_SUFFIX = ".zip"
ARCHIVE_NAME_SEPARATOR = "-"  # <world><sep><timestamp><suffix>
FILENAME_TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"
BUILDING_SUFFIX = ".building"
PARTIAL_SUFFIX = ".part"
LOG_FORMAT = "%(levelname)s %(name)s - %(message)s"
