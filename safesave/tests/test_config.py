"""
Tests for integrity configuration.
"""

import pytest

from safesave.config import (
    DAY_MS,
    DEFAULT_RELEASE_EPOCH_MS,
    ConfigError,
    IntegrityConfig,
    parse_epoch,
)
from safesave.core.canonical import CanonicalMode


def test_defaults():
    config = IntegrityConfig.from_env({})

    assert config.release_epoch_ms == DEFAULT_RELEASE_EPOCH_MS
    assert config.max_clock_skew_ms == DAY_MS
    assert config.canonical_mode is CanonicalMode.RECURSIVE
    assert config.format_version == "1.0"


def test_default_release_epoch_is_2025():
    assert parse_epoch("2025-01-01") == DEFAULT_RELEASE_EPOCH_MS
    assert parse_epoch("2025-01-01T00:00:00Z") == DEFAULT_RELEASE_EPOCH_MS


def test_parse_epoch_forms():
    assert parse_epoch("1700000000000") == 1700000000000
    assert parse_epoch(" 42 ") == 42
    assert parse_epoch("2025-01-01T01:00:00+01:00") == DEFAULT_RELEASE_EPOCH_MS


def test_parse_epoch_invalid():
    with pytest.raises(ConfigError):
        parse_epoch("next tuesday")


def test_from_env_overrides():
    config = IntegrityConfig.from_env(
        {
            "SAFESAVE_RELEASE_EPOCH": "2026-01-01",
            "SAFESAVE_MAX_SKEW_MS": "60000",
            "SAFESAVE_CANONICAL_MODE": "TOP_LEVEL",
        }
    )

    assert config.release_epoch_ms == DEFAULT_RELEASE_EPOCH_MS + 365 * DAY_MS
    assert config.max_clock_skew_ms == 60000
    assert config.canonical_mode is CanonicalMode.TOP_LEVEL


def test_from_env_reads_process_environment(monkeypatch):
    monkeypatch.setenv("SAFESAVE_MAX_SKEW_MS", "5")

    assert IntegrityConfig.from_env().max_clock_skew_ms == 5


@pytest.mark.parametrize(
    "env",
    [
        {"SAFESAVE_MAX_SKEW_MS": "one day"},
        {"SAFESAVE_MAX_SKEW_MS": "-1"},
        {"SAFESAVE_CANONICAL_MODE": "deep"},
        {"SAFESAVE_RELEASE_EPOCH": "yesterday"},
    ],
)
def test_from_env_invalid(env):
    with pytest.raises(ConfigError):
        IntegrityConfig.from_env(env)


def test_config_is_immutable():
    config = IntegrityConfig()

    with pytest.raises(Exception):
        config.max_clock_skew_ms = 0
