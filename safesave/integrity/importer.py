"""
Secure import: a fixed sequence of gates, short-circuiting on the first failure.

1. Extract reserved fields
2. Presence: a signature must exist
3. Timestamp: within [release epoch, now + skew] when present
4. Structure: candidate snapshot has the right field types
5. Signature: recomputed signature equals the supplied one
6. Accept
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from ..config import IntegrityConfig
from ..core.clock import SystemClock
from ..core.errors import (
    ErrorKind,
    FormatError,
    IntegrityError,
    InternalError,
    SnapshotError,
    TimestampError,
)
from ..core.snapshot import Snapshot
from ..logging_config import get_logger, trace_id_for
from .envelope import INTEGRITY_KEY, split_envelope
from .signer import sign_snapshot, signatures_match
from .validator import check_structure

NOT_SECURE_FORMAT = "not a recognized secure format"
TIMESTAMP_OUT_OF_RANGE = "timestamp out of range"
INTEGRITY_FAILED = "integrity check failed - possibly modified"

IMPORT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class ImportInfo:
    """
    Metadata about an accepted import.

    Fields:
        import_time: Local time of the envelope timestamp (or of the import)
        elements: Number of unlocked entities
        verified: Always True on success
        format_version: Version tag as supplied by the envelope
    """
    import_time: str
    elements: int
    verified: bool = True
    format_version: Optional[str] = None


@dataclass(frozen=True)
class ImportResult:
    """
    Outcome of an import.

    Fields:
        success: All gates passed
        snapshot: Recovered snapshot dict, reserved keys removed (on success)
        info: Import metadata (on success)
        error_kind: Failure category (on failure)
        reason: Human-readable reason (on failure)
        field: Offending snapshot field for structural failures
    """
    success: bool
    snapshot: Optional[Dict[str, Any]] = None
    info: Optional[ImportInfo] = None
    error_kind: Optional[ErrorKind] = None
    reason: Optional[str] = None
    field: Optional[str] = None

    @classmethod
    def failure(cls, err: SnapshotError) -> "ImportResult":
        return cls(
            success=False,
            error_kind=err.kind,
            reason=err.reason,
            field=getattr(err, "field", None),
        )

    def to_snapshot(self) -> Snapshot:
        """
        Typed view of the recovered snapshot.

        Unknown keys and an explicit version survive, but Snapshot.from_dict()
        normalizes missing fields, single glyph strings and done flags, and
        rebuilds nested records with known keys last. Re-exporting the typed
        view reproduces the original signature only when the recovered dict
        was already in normalized form (and, in top_level mode, in that key
        order). Keep self.snapshot to re-sign exactly what was imported.
        """
        if not self.success or self.snapshot is None:
            raise ValueError(f"Import did not succeed: {self.reason}")
        return Snapshot.from_dict(self.snapshot)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class SecureImporter:
    """
    Verifies envelopes and recovers snapshots.

    Pure function of the envelope apart from reading the clock; the input is
    never modified.
    """

    def __init__(self, config: Optional[IntegrityConfig] = None, clock=None):
        self.config = config or IntegrityConfig()
        self.clock = clock or SystemClock()

    def check_timestamp(self, timestamp: Any, now_ms: int) -> None:
        """
        Raises:
            TimestampError: If timestamp is not a finite number or outside
                [release_epoch_ms, now_ms + max_clock_skew_ms]
        """
        if not _is_number(timestamp):
            raise TimestampError(TIMESTAMP_OUT_OF_RANGE)
        if isinstance(timestamp, float) and not math.isfinite(timestamp):
            raise TimestampError(TIMESTAMP_OUT_OF_RANGE)
        if timestamp < self.config.release_epoch_ms:
            raise TimestampError(TIMESTAMP_OUT_OF_RANGE)
        if timestamp > now_ms + self.config.max_clock_skew_ms:
            raise TimestampError(TIMESTAMP_OUT_OF_RANGE)

    def _run_gates(self, envelope: Any) -> ImportResult:
        if not isinstance(envelope, Mapping):
            raise FormatError(NOT_SECURE_FORMAT)

        parts = split_envelope(envelope)

        if not isinstance(parts.signature, str) or not parts.signature:
            raise FormatError(NOT_SECURE_FORMAT)

        now_ms = self.clock.now_ms()
        if parts.timestamp is not None:
            self.check_timestamp(parts.timestamp, now_ms)

        check_structure(parts.snapshot)

        expected = sign_snapshot(parts.snapshot, self.config.canonical_mode)
        if not signatures_match(expected, parts.signature):
            raise IntegrityError(INTEGRITY_FAILED)

        stamped = parts.timestamp if parts.timestamp is not None else now_ms
        info = ImportInfo(
            import_time=datetime.fromtimestamp(stamped / 1000).strftime(IMPORT_TIME_FORMAT),
            elements=len(parts.snapshot.get("unlocked") or {}),
            format_version=parts.format_version,
        )
        return ImportResult(success=True, snapshot=parts.snapshot, info=info)

    def import_envelope(self, envelope: Any) -> ImportResult:
        """
        Verify an envelope and recover its snapshot.

        Args:
            envelope: Parsed envelope (usually a dict loaded from JSON)

        Returns:
            ImportResult (never raises)
        """
        signature = envelope.get(INTEGRITY_KEY) if isinstance(envelope, Mapping) else None
        logger = get_logger(__name__, trace_id=trace_id_for(signature))

        try:
            result = self._run_gates(envelope)
        except SnapshotError as e:
            logger.warning("Import rejected (%s): %s", e.kind.value, e.reason)
            return ImportResult.failure(e)
        except Exception as e:
            logger.exception("Import failed")
            return ImportResult.failure(InternalError(str(e)))

        logger.info("Imported snapshot: %d elements", result.info.elements)
        return result
