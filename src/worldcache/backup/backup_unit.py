"""
Backup run over all registered worlds.

A BackupUnit asks the cache registry to archive each world into the work
directory, one archive per world per run. Optional hooks run before and after
the backup, e.g. to pause and resume saving of the live world.
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Union

from worldcache.cache.registry import CacheRegistry
from worldcache.archive.rotation import archive_prefix
from worldcache.core.settings import ARCHIVE_SUFFIX, FILENAME_TIMESTAMP_FORMAT

logger = logging.getLogger(__name__)


class BackupUnit:
    """Creates a backup archive for every world in a CacheRegistry."""

    name = "BackupUnit"

    def __init__(
        self,
        registry: CacheRegistry,
        work_dir: Union[str, os.PathLike],
        force: bool = False,
        before_backup: Optional[Callable[[], None]] = None,
        after_backup: Optional[Callable[[], None]] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Args:
            registry: Registry holding one cache controller per world
            work_dir: Directory the archives are written to
            force: Rebuild every cache regardless of its age
            before_backup: Called once before the first world is archived
            after_backup: Called once after the run, even if it failed
            clock: Source of the timestamp used in archive names
        """
        self.registry = registry
        self.work_dir = Path(work_dir)
        self.force = force
        self.before_backup = before_backup
        self.after_backup = after_backup
        self._clock = clock

    def generate_filename(self, world_name: str, suffix: str = ARCHIVE_SUFFIX) -> str:
        """Archive name for ``world_name``: ``<world>-<timestamp><suffix>``."""
        stamp = self._clock().strftime(FILENAME_TIMESTAMP_FORMAT)
        return f"{archive_prefix(world_name)}{stamp}{suffix}"

    def run(self, worlds: Optional[Iterable[str]] = None) -> Dict[str, bool]:
        """
        Archive each world and report per-world success.

        Args:
            worlds: World names to back up; all registered worlds if omitted

        Returns:
            Mapping of world name to whether its archive was written
        """
        results: Dict[str, bool] = {}
        logger.info("Starting backup process..")

        try:
            if self.before_backup is not None:
                self.before_backup()

            for world_name in (worlds if worlds is not None else self.registry.worlds()):
                output_file = self.work_dir / self.generate_filename(world_name)
                if self.registry.persist(world_name, output_file, self.force):
                    logger.info(f"Backup ({world_name}) successful: {output_file}")
                    results[world_name] = True
                else:
                    logger.warning(f"Backup ({world_name}) failed")
                    results[world_name] = False
        except Exception:
            logger.error("Error during backup: ", exc_info=True)
        finally:
            if self.after_backup is not None:
                self.after_backup()

        return results
