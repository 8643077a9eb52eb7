"""Read-only access to backup archives.

This module provides functionality to inspect and verify the zip files written
by the cache controller without extracting them.
"""

import os
import zipfile
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from worldcache.archive.rotation import archive_prefix, matching_files
from worldcache.core.settings import ARCHIVE_SUFFIX


class BackupArchive:
    """Class for inspecting a single backup archive."""

    def __init__(self, archive_path: str):
        """Initialize with path to archive ZIP file.

        Args:
            archive_path: Path to the archive zip file

        Raises:
            FileNotFoundError: If the archive file doesn't exist
            zipfile.BadZipFile: If the file is not a valid ZIP file
        """
        self.archive_path = str(archive_path)

        if not os.path.exists(self.archive_path):
            raise FileNotFoundError(f"Archive file '{self.archive_path}' not found")

        # Validate it's a zip file
        try:
            with zipfile.ZipFile(self.archive_path, 'r'):
                pass
        except zipfile.BadZipFile:
            raise zipfile.BadZipFile(f"'{self.archive_path}' is not a valid ZIP file")

    def members(self) -> List[str]:
        """Names of all entries in the archive, in archive order."""
        with zipfile.ZipFile(self.archive_path, 'r') as zipf:
            return zipf.namelist()

    def root_folders(self) -> List[str]:
        """Top-level folder names, normally just the world name."""
        roots = set()
        for name in self.members():
            head, sep, _ = name.partition('/')
            if sep:
                roots.add(head)
        return sorted(roots)

    def stats(self) -> Dict[str, Any]:
        """Get summary statistics of the archive.

        Returns:
            Dictionary with file/directory counts, sizes in bytes, root
            folders and the archive's modification time
        """
        files = 0
        directories = 0
        uncompressed = 0
        compressed = 0

        with zipfile.ZipFile(self.archive_path, 'r') as zipf:
            for info in zipf.infolist():
                if info.is_dir():
                    directories += 1
                    continue
                files += 1
                uncompressed += info.file_size
                compressed += info.compress_size

        return {
            'files': files,
            'directories': directories,
            'uncompressed_size': uncompressed,
            'compressed_size': compressed,
            'archive_size': os.path.getsize(self.archive_path),
            'roots': self.root_folders(),
            'modified': datetime.fromtimestamp(os.path.getmtime(self.archive_path)),
        }

    def verify(self) -> Optional[str]:
        """Check the CRC of every member.

        Returns:
            Name of the first corrupt member, or None if the archive is intact
        """
        with zipfile.ZipFile(self.archive_path, 'r') as zipf:
            return zipf.testzip()


def list_backups(directory: str, world: Optional[str] = None, suffix: str = ARCHIVE_SUFFIX) -> List[Path]:
    """List backup archives in a directory, newest first.

    Args:
        directory: Directory holding the archives
        world: Only include archives of this world
        suffix: Archive file extension

    Returns:
        Archive paths sorted by modification time, newest first
    """
    candidates = [p for p in matching_files(Path(directory), archive_prefix(world) if world else "") if p.name.endswith(suffix)]
    return sorted(candidates, key=lambda p: (p.stat().st_mtime, p.name), reverse=True)
