"""
One-shot deferred deletion of a cache directory.

An ExpiryScheduler holds at most one pending timer. Arming it again cancels
the previous timer first; once a timer has fired the scheduler stays inert
until it is armed again.
"""

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ExpiryScheduler:
    """Cancellable one-shot timer owned by a single CacheController."""

    def __init__(
        self,
        callback: Callable[[], None],
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
        name: str = "cache-expiry",
    ):
        """
        Args:
            callback: Invoked on the timer thread when the delay elapses
            timer_factory: Builds the timer, called as ``factory(delay, fn, args=...)``
            name: Thread name given to armed timers
        """
        self._callback = callback
        self._timer_factory = timer_factory
        self._name = name
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self._guard = threading.Lock()

    @property
    def armed(self) -> bool:
        with self._guard:
            return self._timer is not None

    def arm(self, delay: float) -> None:
        """Schedule the callback ``delay`` seconds from now, replacing any pending one."""
        with self._guard:
            self._cancel_locked()
            generation = self._generation
            timer = self._timer_factory(delay, self._fire, args=(generation,))
            timer.daemon = True
            timer.name = f"{self._name}-{generation}"
            self._timer = timer
            timer.start()
        logger.debug(f"Cache cleaner scheduled in {delay:.1f}s.")

    def cancel(self) -> None:
        """Cancel the pending timer, if any."""
        with self._guard:
            self._cancel_locked()

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            logger.debug("Cache cleaner cancelled.")
        # Invalidates a timer that already fired but has not reached _fire yet
        self._generation += 1

    def _fire(self, generation: int) -> None:
        with self._guard:
            if generation != self._generation:
                return
            self._timer = None

        try:
            self._callback()
        except Exception:
            logger.warning("Cache cleaner failed.", exc_info=True)
