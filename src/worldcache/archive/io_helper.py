"""
Filesystem and zip operations used by the cache controller.

IOHelper is stateless. Failures surface as OSError (copy, compress) or as a
False return (delete); callers decide how to report them.
"""

import logging
import os
import shutil
import zipfile
from pathlib import Path
from typing import List, Optional

from worldcache.archive.base_io import DirectoryTransform
from worldcache.archive.rotation import matching_files, select_for_deletion
from worldcache.core.settings import PARTIAL_SUFFIX

logger = logging.getLogger(__name__)


class IOHelper(DirectoryTransform):
    """Directory copy/delete, directory to zip compression and history cleanup."""

    def copy_directory(self, src: Path, dst: Path) -> None:
        src, dst = Path(src), Path(dst)
        if not src.is_dir():
            raise FileNotFoundError(f"Source directory '{src}' not found")
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copytree(src, dst)
        logger.debug(f"Copied {src} -> {dst}")

    def delete_directory(self, path: Path) -> bool:
        path = Path(path)
        if not path.exists():
            return True
        try:
            shutil.rmtree(path)
        except OSError as e:
            logger.error(f"Failed to delete directory {path}: {e}")
            return False
        return True

    def compress_directory(self, src: Path, dst_file: Path, root_name: Optional[str] = None) -> None:
        """
        Zip the contents of ``src`` into ``dst_file``.

        The archive is written next to the destination with a ``.part`` suffix and
        renamed into place once complete, so an existing archive is never left
        half-written. Members are stored under ``root_name`` when given.

        Args:
            src: Directory to compress
            dst_file: Path of the zip file to produce
            root_name: Optional top-level folder name inside the archive

        Raises:
            FileNotFoundError: If ``src`` is not a directory
            OSError: If reading the source or writing the archive fails
        """
        src, dst_file = Path(src), Path(dst_file)
        if not src.is_dir():
            raise FileNotFoundError(f"Directory '{src}' not found")

        dst_file.parent.mkdir(parents=True, exist_ok=True)
        partial = dst_file.with_name(dst_file.name + PARTIAL_SUFFIX)
        root = Path(root_name) if root_name else Path()

        try:
            # Files older than 1980 are stored with the 1980-01-01 timestamp
            with zipfile.ZipFile(partial, "w", compression=zipfile.ZIP_DEFLATED, strict_timestamps=False) as zipf:
                for dirpath, dirnames, filenames in os.walk(src):
                    dirnames.sort()
                    rel_dir = Path(dirpath).relative_to(src)
                    if not filenames and not dirnames and rel_dir != Path("."):
                        # Keep empty directories
                        zipf.writestr((root / rel_dir).as_posix() + "/", "")
                    for filename in sorted(filenames):
                        full_path = Path(dirpath) / filename
                        zipf.write(full_path, (root / rel_dir / filename).as_posix())
            os.replace(partial, dst_file)
        except BaseException:
            if partial.exists():
                partial.unlink()
            raise

        logger.debug(f"Compressed {src} -> {dst_file}")

    def delete_all_but_newest(self, directory: Path, name_prefix: str, keep: int) -> List[Path]:
        removed = []
        for path in select_for_deletion(matching_files(directory, name_prefix), keep):
            try:
                path.unlink()
                removed.append(path)
                logger.debug(f"Deleted old file {path}")
            except OSError as e:
                logger.warning(f"Could not delete old file {path}: {e}")
        return removed
