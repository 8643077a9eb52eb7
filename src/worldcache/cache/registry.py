"""
Per-world cache controllers.

Each world gets its own CacheController, so worlds never contend for the same
lock, timer or cache directory.
"""

import logging
import os
import threading
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from worldcache.archive.io_helper import IOHelper
from worldcache.cache.cache_control import CacheController
from worldcache.cache.schemas import CacheConfig, TimeUnit
from worldcache.core.config import Settings

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


class CacheRegistry:
    """Maps world names to independent CacheController instances."""

    def __init__(
        self,
        temp_dir: PathLike,
        config: Optional[CacheConfig] = None,
        io_helper=None,
        clock: Callable[[], float] = time.time,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ):
        self.temp_dir = Path(temp_dir)
        self.config = config or CacheConfig()
        self.io_helper = io_helper or IOHelper()
        self._clock = clock
        self._timer_factory = timer_factory
        self._controllers: Dict[str, CacheController] = {}
        self._guard = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings, worlds: Optional[List[str]] = None, **kwargs) -> "CacheRegistry":
        """
        Build a registry from Settings and register its worlds.

        Args:
            settings: Loaded configuration
            worlds: World paths to register instead of ``settings.worlds``
        """
        config = CacheConfig(
            lifetime=settings.cache_lifetime,
            time_unit=TimeUnit.parse(settings.time_unit),
            history=settings.cache_history,
        )
        registry = cls(settings.temp_dir, config=config, **kwargs)
        for world_path in worlds or settings.worlds:
            registry.register(world_path)
        return registry

    def register(self, world_path: PathLike) -> CacheController:
        """Return the controller for ``world_path``, creating it on first use."""
        world_path = Path(world_path)
        name = world_path.name or world_path.resolve().name
        with self._guard:
            controller = self._controllers.get(name)
            if controller is not None:
                if controller.world != world_path:
                    logger.warning(
                        f"World '{name}' is already registered for {controller.world}, ignoring {world_path}"
                    )
                return controller

            controller = CacheController(
                io_helper=self.io_helper,
                config=self.config,
                clock=self._clock,
                timer_factory=self._timer_factory,
            )
            controller.configure(self.temp_dir / name, world_path)
            self._controllers[name] = controller
            logger.debug(f"Registered world '{name}' ({world_path})")
            return controller

    def get(self, world_name: str) -> Optional[CacheController]:
        with self._guard:
            return self._controllers.get(world_name)

    def worlds(self) -> List[str]:
        with self._guard:
            return list(self._controllers)

    def get_cache(self, world_name: str, force: bool = False) -> Optional[Path]:
        controller = self.get(world_name)
        if controller is None:
            logger.warning(f"Unknown world '{world_name}'")
            return None
        return controller.get_cache(force)

    def persist(self, world_name: str, destination: PathLike, force: bool = False) -> bool:
        """Archive the cache of ``world_name`` into ``destination``."""
        controller = self.get(world_name)
        if controller is None:
            logger.warning(f"Unknown world '{world_name}', nothing to persist.")
            return False
        return controller.persist_cache(destination, force)

    def shutdown(self) -> None:
        """Cancel every pending expiry timer."""
        with self._guard:
            controllers = list(self._controllers.values())
        for controller in controllers:
            controller.shutdown()
