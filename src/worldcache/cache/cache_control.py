"""
Cache controller for a single world.

The cache is a copy of the world directory on disk. It is rebuilt when it is
missing, older than the configured lifetime, or a rebuild is forced, and it is
deleted again by a one-shot expiry timer once its lifetime has elapsed.

Two locks are involved:

* the rebuild guard serializes the whole staleness-check-and-rebuild sequence
  of ``get_cache``, so at most one rebuild is in flight per controller;
* the structural lock (re-entrant) is held around every delete, copy, archive
  and rotation step, and by the expiry callback.

The guard is always taken before the structural lock, never the other way round.
"""

import logging
import os
import threading
import time
import zipfile
from pathlib import Path
from typing import Callable, Optional, Union

from worldcache.archive.io_helper import IOHelper
from worldcache.archive.rotation import ArchiveRotator, archive_prefix
from worldcache.cache.exceptions import CacheError, SourceMissingError
from worldcache.cache.expiry import ExpiryScheduler
from worldcache.cache.schemas import CacheConfig, CacheState, TimeUnit
from worldcache.core.settings import BUILDING_SUFFIX

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


class CacheController:
    """
    Owns the cache directory of one world.

    Configure it once with ``configure()`` before any worker thread uses it.
    """

    def __init__(
        self,
        io_helper=None,
        config: Optional[CacheConfig] = None,
        clock: Callable[[], float] = time.time,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ):
        self.io_helper = io_helper or IOHelper()
        self.config = config or CacheConfig()
        self.cache: Optional[Path] = None
        self.world: Optional[Path] = None

        self._clock = clock
        self._lock = threading.RLock()
        self._rebuild_guard = threading.Lock()
        self._transient_state: Optional[CacheState] = None
        self._expiry = ExpiryScheduler(self._on_expiry, timer_factory=timer_factory)

    def configure(
        self,
        temp_dir: PathLike,
        world_path: PathLike,
        lifetime: Optional[int] = None,
        time_unit: Union[str, TimeUnit, None] = None,
        history: Optional[int] = None,
    ) -> None:
        """
        Set the cache location, the world it mirrors and the cache policy.

        Args:
            temp_dir: Directory the cache is kept in (owned by this controller)
            world_path: The live world directory
            lifetime: Cache lifetime, in ``time_unit``
            time_unit: Unit name; unrecognized names keep the current unit
            history: Archives kept per world, 0 disables rotation
        """
        policy = self.config.model_dump()
        if lifetime is not None:
            policy["lifetime"] = lifetime
        if time_unit is not None:
            policy["time_unit"] = TimeUnit.parse(time_unit, default=self.config.time_unit)
        if history is not None:
            policy["history"] = history

        self.config = CacheConfig(**policy)
        self.cache = Path(temp_dir)
        self.world = Path(world_path)

    @property
    def world_name(self) -> str:
        self._require_configured()
        return self.world.name or self.world.resolve().name

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def expiry(self) -> ExpiryScheduler:
        return self._expiry

    @property
    def state(self) -> CacheState:
        transient = self._transient_state
        if transient is not None:
            return transient
        if self.cache is not None and self.cache.exists():
            return CacheState.PRESENT
        return CacheState.ABSENT

    def cache_age(self) -> Optional[float]:
        """Seconds since the cache was last rebuilt, or None if there is no cache."""
        self._require_configured()
        try:
            return self._clock() - self.cache.stat().st_mtime
        except FileNotFoundError:
            return None

    def is_cache_obsolete(self) -> bool:
        """
        True if the cache is missing or older than its lifetime.

        Not synchronized with the structural lock: an expiry running at the same
        moment can at worst cause one redundant rebuild.
        """
        age = self.cache_age()
        return age is None or age > self.config.lifetime_seconds

    def get_cache(self, force: bool = False) -> Optional[Path]:
        """
        Return a ready-to-read cache directory, rebuilding it when needed.

        Args:
            force: Rebuild even if the current cache is still fresh

        Returns:
            The cache path, or None if the cache couldn't be rebuilt
        """
        self._require_configured()
        with self._rebuild_guard:
            if not force and not self.is_cache_obsolete():
                logger.debug("Cache still up to date!")
                return self.cache

            with self._lock:
                self._expiry.cancel()
                try:
                    self._rebuild_cache()
                except SourceMissingError as e:
                    logger.warning(f"{e}, cache couldn't be rebuilt!")
                    return None
                except OSError:
                    logger.error("Error rebuilding cache: ", exc_info=True)
                    logger.warning("Cache couldn't be rebuilt!")
                    return None

                if self.config.lifetime_seconds > 0:
                    self._expiry.arm(self.config.lifetime_seconds)
                return self.cache

    def delete_cache(self) -> bool:
        """
        Delete the cache directory.

        Returns:
            True if there is no cache afterwards
        """
        self._require_configured()
        if not self.cache.exists():
            return True

        logger.debug("delete_cache() obtaining lock..")
        with self._lock:
            logger.info("Deleting cache, might be obsolete.")
            self._transient_state = CacheState.DELETING
            try:
                deleted = self.io_helper.delete_directory(self.cache)
            except OSError:
                logger.warning("Failed to delete cache folder.", exc_info=True)
                return False
            finally:
                self._transient_state = None

            if not deleted:
                logger.warning("Failed to delete cache folder.")
                return False
        logger.debug("delete_cache() unlocked..")
        return True

    def persist_cache(self, output_file: PathLike, force: bool = False) -> bool:
        """
        Archive a fresh cache into ``output_file`` and rotate old archives.

        Args:
            output_file: Zip file to write; its directory holds the archive history
            force: Rebuild the cache first even if it is still fresh

        Returns:
            True if the archive was written
        """
        logger.debug("Persisting cache / creating zip file..")
        current_cache = self.get_cache(force)
        if current_cache is None:
            logger.warning(f"No cache available for '{self.world_name}', nothing to archive.")
            return False

        output_file = Path(output_file)
        logger.debug("persist_cache() got cache, obtaining lock..")
        with self._lock:
            logger.debug("persist_cache() got lock, starting zip operation..")
            try:
                self.io_helper.compress_directory(current_cache, output_file, root_name=self.world_name)
            except (OSError, ValueError, zipfile.LargeZipFile):
                logger.error("Error while zipping cache folder!", exc_info=True)
                return False
            logger.debug("persist_cache() finished zip operation..")

            # The archive is written, old ones are cleaned up best effort
            try:
                ArchiveRotator(self.io_helper, self.config.history).rotate(
                    output_file.parent, archive_prefix(self.world_name)
                )
            except OSError:
                logger.warning(f"Failed to rotate old archives in {output_file.parent}.", exc_info=True)
        logger.debug("persist_cache() unlocked..")
        return True

    def shutdown(self) -> None:
        """Cancel the pending expiry. The cache directory is left as it is."""
        self._expiry.cancel()

    def _staging_path(self) -> Path:
        return self.cache.with_name(f".{self.cache.name}{BUILDING_SUFFIX}")

    def _rebuild_cache(self) -> None:
        # Caller holds the rebuild guard and the structural lock
        logger.info("Rebuilding cache. This can take several minutes, depending on the world size.")

        if self.cache.exists() and not self.delete_cache():
            raise OSError(f"Could not remove old cache at {self.cache}")

        if not self.world.exists():
            raise SourceMissingError(self.world)

        staging = self._staging_path()
        self._transient_state = CacheState.REBUILDING
        try:
            if staging.exists() and not self.io_helper.delete_directory(staging):
                raise OSError(f"Could not remove leftover build directory {staging}")

            logger.debug("rebuild_cache() got lock, copy dir..")
            self.io_helper.copy_directory(self.world, staging)

            # The cache age is read from the directory mtime
            now = self._clock()
            os.utime(staging, (now, now))
            os.replace(staging, self.cache)
        except OSError:
            if staging.exists():
                self.io_helper.delete_directory(staging)
            raise
        finally:
            self._transient_state = None

    def _on_expiry(self) -> None:
        with self._lock:
            if self._expiry.armed:
                # Rebuilt while this callback waited for the lock
                logger.debug("Cache was rebuilt before it expired, keeping it.")
                return
            if self.delete_cache():
                logger.info("Cache lifetime ended.")
            else:
                logger.warning("Cache lifetime ended, but the cache could not be deleted.")

    def _require_configured(self) -> None:
        if self.cache is None or self.world is None:
            raise CacheError("CacheController is not configured, call configure() first")
