"""
Tests for time unit parsing and the cache policy model.
"""

import logging

import pytest
from pydantic import ValidationError

from worldcache.cache.schemas import CacheConfig, TimeUnit


def test_parse_known_units_case_insensitive():
    assert TimeUnit.parse("MINUTES") is TimeUnit.MINUTES
    assert TimeUnit.parse("seconds") is TimeUnit.SECONDS
    assert TimeUnit.parse(" Hours ") is TimeUnit.HOURS
    assert TimeUnit.parse(TimeUnit.DAYS) is TimeUnit.DAYS


def test_parse_unknown_unit_falls_back_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="worldcache.cache.schemas"):
        unit = TimeUnit.parse("FORTNIGHTS", default=TimeUnit.HOURS)

    assert unit is TimeUnit.HOURS
    assert "Failed to parse time-unit" in caplog.text


def test_parse_unknown_unit_defaults_to_minutes():
    assert TimeUnit.parse("bogus") is TimeUnit.MINUTES
    assert TimeUnit.parse(None) is TimeUnit.MINUTES


@pytest.mark.parametrize("unit,amount,seconds", [
    (TimeUnit.MILLISECONDS, 1500, 1.5),
    (TimeUnit.SECONDS, 30, 30.0),
    (TimeUnit.MINUTES, 30, 1800.0),
    (TimeUnit.HOURS, 2, 7200.0),
    (TimeUnit.DAYS, 1, 86400.0),
])
def test_to_seconds(unit, amount, seconds):
    assert unit.to_seconds(amount) == pytest.approx(seconds)


def test_to_millis():
    assert TimeUnit.MINUTES.to_millis(30) == pytest.approx(1_800_000)


def test_cache_config_defaults():
    config = CacheConfig()
    assert config.lifetime == 30
    assert config.time_unit is TimeUnit.MINUTES
    assert config.history == 5
    assert config.lifetime_seconds == pytest.approx(1800.0)


def test_cache_config_is_frozen():
    config = CacheConfig()
    with pytest.raises(ValidationError):
        config.lifetime = 10


def test_cache_config_rejects_negative_values():
    with pytest.raises(ValidationError):
        CacheConfig(history=-1)
    with pytest.raises(ValidationError):
        CacheConfig(lifetime=-5)
