"""
Failure taxonomy for secure export/import.

These are raised inside the integrity gates and turned into result values at
the export/import boundary; callers never have to catch them.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    FORMAT = "format"
    TIMESTAMP = "timestamp"
    STRUCTURAL = "structural"
    INTEGRITY = "integrity"
    INTERNAL = "internal"


class SnapshotError(Exception):
    """Base class for export/import failures."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class FormatError(SnapshotError):
    """Raised when input is not a signed envelope at all."""
    kind = ErrorKind.FORMAT


class TimestampError(SnapshotError):
    """Raised when the envelope timestamp is outside the plausible window."""
    kind = ErrorKind.TIMESTAMP


class StructuralError(SnapshotError):
    """Raised when a snapshot field has the wrong type."""
    kind = ErrorKind.STRUCTURAL

    def __init__(self, reason: str, field: Optional[str] = None):
        super().__init__(reason)
        self.field = field


class IntegrityError(SnapshotError):
    """Raised when the recomputed signature does not match."""
    kind = ErrorKind.INTEGRITY


class InternalError(SnapshotError):
    """Raised when hashing or signing fails unexpectedly."""
    kind = ErrorKind.INTERNAL
