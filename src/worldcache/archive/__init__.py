"""
Archive side of worldcache: the directory/zip I/O collaborator, history
rotation, and read-only inspection of written backups.
"""

from worldcache.archive.archive_accessor import BackupArchive, list_backups
from worldcache.archive.base_io import DirectoryTransform
from worldcache.archive.io_helper import IOHelper
from worldcache.archive.rotation import ArchiveRotator, archive_prefix, select_for_deletion

__all__ = [
    "BackupArchive",
    "list_backups",
    "DirectoryTransform",
    "IOHelper",
    "ArchiveRotator",
    "select_for_deletion",
    "archive_prefix",
]
