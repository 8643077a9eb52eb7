"""Shared fixtures for the worldcache test-suite."""

import threading
import time
from pathlib import Path

import pytest


class FakeTimer:
    """Stand-in for threading.Timer that only fires when told to."""

    def __init__(self, interval, function, args=None, kwargs=None):
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.kwargs = kwargs or {}
        self.started = False
        self.cancelled = False
        self.daemon = False
        self.name = None

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.function(*self.args, **self.kwargs)


class FakeTimerFactory:
    def __init__(self):
        self.timers = []

    def __call__(self, interval, function, args=None, kwargs=None):
        timer = FakeTimer(interval, function, args=args, kwargs=kwargs)
        self.timers.append(timer)
        return timer

    @property
    def pending(self):
        return [t for t in self.timers if t.started and not t.cancelled]


@pytest.fixture
def timer_factory():
    return FakeTimerFactory()


@pytest.fixture
def now():
    return time.time()


@pytest.fixture
def world(tmp_path) -> Path:
    """A small world directory with nested content."""
    world_dir = tmp_path / "worlds" / "alpha"
    (world_dir / "region").mkdir(parents=True)
    (world_dir / "level.dat").write_bytes(b"level data")
    (world_dir / "region" / "r.0.0.mca").write_bytes(b"\x00" * 2048)
    (world_dir / "region" / "r.0.1.mca").write_bytes(b"\x01" * 1024)
    (world_dir / "empty").mkdir()
    return world_dir


def lock_is_free(lock) -> bool:
    """Whether another thread can take ``lock`` right now."""
    result = []

    def probe():
        acquired = lock.acquire(timeout=1)
        result.append(acquired)
        if acquired:
            lock.release()

    thread = threading.Thread(target=probe)
    thread.start()
    thread.join()
    return result[0]


@pytest.fixture
def lock_probe():
    return lock_is_free
