"""
Time sources in epoch milliseconds.

Exporter stamps envelopes and importer checks their timestamps through a
clock object, so tests can pin "now".
"""

import time
from dataclasses import dataclass


class SystemClock:
    """Wall-clock time source."""

    def now_ms(self) -> int:
        return int(time.time() * 1000)


@dataclass(frozen=True)
class FixedClock:
    """
    Fixed time source.

    Since FixedClock is immutable, tick() returns a new instance.
    """
    current: int = 0

    def now_ms(self) -> int:
        """Get current timestamp without advancing."""
        return self.current

    def tick(self, step: int = 1) -> "FixedClock":
        return FixedClock(self.current + step)
