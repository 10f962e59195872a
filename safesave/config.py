"""
Integrity configuration.

Environment Variables:
    SAFESAVE_RELEASE_EPOCH: Earliest accepted envelope timestamp, as an
        ISO-8601 date/time or integer epoch ms - default: 2025-01-01T00:00:00Z
    SAFESAVE_MAX_SKEW_MS: Tolerated clock skew into the future - default: 86400000
    SAFESAVE_CANONICAL_MODE: recursive, top_level - default: recursive

Usage:
    from safesave.config import IntegrityConfig

    config = IntegrityConfig.from_env()
    exporter = SecureExporter(config)
"""

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Mapping, Optional

from .core.canonical import CanonicalMode

DAY_MS = 24 * 60 * 60 * 1000

# 2025-01-01T00:00:00Z, the release boundary
DEFAULT_RELEASE_EPOCH_MS = 1735689600000

FORMAT_VERSION = "1.0"


class ConfigError(ValueError):
    """Raised when a configuration value cannot be parsed."""


def parse_epoch(value: str) -> int:
    """
    Parse an epoch boundary given as integer milliseconds or ISO-8601.

    Naive dates/times are taken as UTC.

    Raises:
        ConfigError: If value is neither form
    """
    value = value.strip()
    if value.lstrip("-").isdigit():
        return int(value)
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise ConfigError(f"Invalid release epoch: {value!r}") from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


@dataclass(frozen=True)
class IntegrityConfig:
    """
    Settings shared by exporter and importer.

    Fields:
        release_epoch_ms: Envelopes stamped before this are rejected
        max_clock_skew_ms: Envelopes stamped after now + this are rejected
        canonical_mode: Key ordering depth for signing input
        format_version: Version tag written into envelopes
    """
    release_epoch_ms: int = DEFAULT_RELEASE_EPOCH_MS
    max_clock_skew_ms: int = DAY_MS
    canonical_mode: CanonicalMode = CanonicalMode.RECURSIVE
    format_version: str = FORMAT_VERSION

    def __post_init__(self) -> None:
        try:
            mode = CanonicalMode(self.canonical_mode)
        except ValueError as e:
            raise ConfigError(f"Unknown canonical mode: {self.canonical_mode!r}") from e
        # frozen dataclass, normalise str -> enum in place
        object.__setattr__(self, "canonical_mode", mode)
        if self.max_clock_skew_ms < 0:
            raise ConfigError("max_clock_skew_ms must not be negative")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "IntegrityConfig":
        """
        Build configuration from environment variables.

        Unset variables keep their defaults.

        Raises:
            ConfigError: If a variable is set to an invalid value
        """
        env = os.environ if environ is None else environ

        release = env.get("SAFESAVE_RELEASE_EPOCH")
        skew = env.get("SAFESAVE_MAX_SKEW_MS")
        mode = env.get("SAFESAVE_CANONICAL_MODE")

        kwargs = {}
        if release:
            kwargs["release_epoch_ms"] = parse_epoch(release)
        if skew:
            try:
                kwargs["max_clock_skew_ms"] = int(skew)
            except ValueError as e:
                raise ConfigError(f"Invalid SAFESAVE_MAX_SKEW_MS: {skew!r}") from e
        if mode:
            kwargs["canonical_mode"] = mode.strip().lower()

        return cls(**kwargs)
