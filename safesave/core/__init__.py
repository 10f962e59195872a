"""
Core primitives shared by the integrity layer.

This module provides:
- Canonical: Deterministic serialization for signing input
- Clock: Wall-clock and fixed time sources (epoch milliseconds)
- Snapshot: Typed model of persisted progress
- Errors: Failure taxonomy for export/import
"""

from .canonical import (
    CanonicalMode,
    canonicalize,
    canonicalize_top_level,
    canonical_json_bytes,
    canonical_json_str,
)
from .clock import SystemClock, FixedClock
from .snapshot import Element, HistoryEntry, Mission, Snapshot
from .errors import (
    ErrorKind,
    SnapshotError,
    FormatError,
    TimestampError,
    StructuralError,
    IntegrityError,
    InternalError,
)

__all__ = [
    "CanonicalMode",
    "canonicalize",
    "canonicalize_top_level",
    "canonical_json_bytes",
    "canonical_json_str",
    "SystemClock",
    "FixedClock",
    "Element",
    "HistoryEntry",
    "Mission",
    "Snapshot",
    "ErrorKind",
    "SnapshotError",
    "FormatError",
    "TimestampError",
    "StructuralError",
    "IntegrityError",
    "InternalError",
]
