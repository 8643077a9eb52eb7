"""
Bounded archive history.

After every successful archive write the archives of a world are grouped by
their filename prefix and all but the most recently modified ones are removed.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Tuple

from worldcache.core.settings import ARCHIVE_NAME_SEPARATOR

logger = logging.getLogger(__name__)


def archive_prefix(world_name: str) -> str:
    """Filename prefix shared by all archives of ``world_name`` and no other world."""
    return f"{world_name}{ARCHIVE_NAME_SEPARATOR}"


def matching_files(directory: Path, name_prefix: str) -> List[Path]:
    """Regular files in ``directory`` whose name starts with ``name_prefix``."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return [p for p in directory.iterdir() if p.is_file() and p.name.startswith(name_prefix)]


def select_for_deletion(paths: Iterable[Path], keep: int) -> List[Path]:
    """
    Pick the files that fall outside the ``keep`` most recently modified.

    Ties in modification time are broken by filename, higher names are kept.
    A ``keep`` of 0 or less selects nothing.

    Args:
        paths: Candidate files
        keep: Number of newest files to retain

    Returns:
        Files to delete, newest first
    """
    if keep <= 0:
        return []

    stamped: List[Tuple[float, str, Path]] = []
    for path in paths:
        try:
            stamped.append((path.stat().st_mtime, path.name, path))
        except OSError:
            # Vanished between listing and stat
            continue

    stamped.sort(key=lambda item: (item[0], item[1]), reverse=True)
    return [path for _, _, path in stamped[keep:]]


class ArchiveRotator:
    """Keeps at most ``history`` archives per world in an output directory."""

    def __init__(self, io_helper, history: int):
        self.io_helper = io_helper
        self.history = history

    def rotate(self, directory: Path, name_prefix: str) -> List[Path]:
        """
        Delete all but the ``history`` newest archives sharing ``name_prefix``.

        Only call after an archive was written successfully.

        Returns:
            The archives that were removed
        """
        if self.history <= 0:
            logger.debug("Archive rotation disabled.")
            return []

        removed = self.io_helper.delete_all_but_newest(Path(directory), name_prefix, self.history)
        if removed:
            logger.info(f"Removed {len(removed)} old archive(s) for '{name_prefix}'.")
        return removed
