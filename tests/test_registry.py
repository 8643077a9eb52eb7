"""
Tests for the per-world controller registry.
"""

import logging
import zipfile

import pytest

from worldcache.cache.registry import CacheRegistry
from worldcache.cache.schemas import TimeUnit
from worldcache.core.config import Settings


@pytest.fixture
def beta(tmp_path):
    path = tmp_path / "worlds" / "beta"
    path.mkdir(parents=True)
    (path / "level.dat").write_text("beta level")
    return path


def test_register_creates_one_controller_per_world(tmp_path, world, beta, timer_factory):
    registry = CacheRegistry(tmp_path / "cache", timer_factory=timer_factory)

    alpha_cc = registry.register(world)
    beta_cc = registry.register(beta)

    assert registry.worlds() == ["alpha", "beta"]
    assert alpha_cc is not beta_cc
    assert alpha_cc.cache == tmp_path / "cache" / "alpha"
    assert beta_cc.cache == tmp_path / "cache" / "beta"
    assert registry.get("alpha") is alpha_cc


def test_register_same_world_returns_existing(tmp_path, world):
    registry = CacheRegistry(tmp_path / "cache")
    assert registry.register(world) is registry.register(str(world))


def test_register_name_clash_keeps_first(tmp_path, world, caplog):
    clash = tmp_path / "elsewhere" / "alpha"
    clash.mkdir(parents=True)
    registry = CacheRegistry(tmp_path / "cache")

    first = registry.register(world)
    with caplog.at_level(logging.WARNING):
        second = registry.register(clash)

    assert second is first
    assert first.world == world
    assert "already registered" in caplog.text


def test_persist_per_world(tmp_path, world, beta, timer_factory):
    registry = CacheRegistry(tmp_path / "cache", timer_factory=timer_factory)
    registry.register(world)
    registry.register(beta)

    assert registry.persist("alpha", tmp_path / "out" / "alpha-1.zip")
    assert registry.persist("beta", tmp_path / "out" / "beta-1.zip")

    with zipfile.ZipFile(tmp_path / "out" / "beta-1.zip") as zipf:
        assert zipf.read("beta/level.dat") == b"beta level"
    assert len(timer_factory.pending) == 2


def test_unknown_world(tmp_path, caplog):
    registry = CacheRegistry(tmp_path / "cache")

    with caplog.at_level(logging.WARNING):
        assert registry.persist("ghost", tmp_path / "ghost.zip") is False
        assert registry.get_cache("ghost") is None

    assert "Unknown world 'ghost'" in caplog.text


def test_from_settings(tmp_path, world, beta):
    settings = Settings(
        temp_dir=tmp_path / "cache",
        worlds=[str(world), str(beta)],
        cache_lifetime=2,
        time_unit="hours",
        cache_history=7,
        _env_file=None,
    )

    registry = CacheRegistry.from_settings(settings)

    assert registry.worlds() == ["alpha", "beta"]
    config = registry.get("alpha").config
    assert config.lifetime == 2
    assert config.time_unit is TimeUnit.HOURS
    assert config.history == 7


def test_from_settings_world_override(tmp_path, world, beta):
    settings = Settings(temp_dir=tmp_path / "cache", worlds=[str(world)], _env_file=None)

    registry = CacheRegistry.from_settings(settings, worlds=[str(beta)])

    assert registry.worlds() == ["beta"]


def test_shutdown_cancels_all_timers(tmp_path, world, beta, timer_factory):
    registry = CacheRegistry(tmp_path / "cache", timer_factory=timer_factory)
    registry.register(world).get_cache()
    registry.register(beta).get_cache()
    assert len(timer_factory.pending) == 2

    registry.shutdown()

    assert timer_factory.pending == []
