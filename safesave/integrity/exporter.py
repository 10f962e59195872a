"""
Secure export: validate, derive key, sign, wrap in an envelope.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from ..config import IntegrityConfig
from ..core.clock import SystemClock
from ..core.errors import ErrorKind, InternalError, SnapshotError
from ..core.snapshot import Snapshot
from ..logging_config import get_logger, trace_id_for
from .envelope import build_envelope
from .signer import sign_snapshot
from .validator import check_structure


@dataclass(frozen=True)
class ExportInfo:
    elements: int
    history: int
    missions: int


@dataclass(frozen=True)
class ExportResult:
    """
    Outcome of an export.

    Fields:
        success: Envelope was produced
        envelope: Snapshot fields plus reserved keys (on success)
        info: Summary counts (on success)
        error_kind: Failure category (on failure)
        error: Human-readable reason (on failure)
        field: Offending snapshot field for structural failures
    """
    success: bool
    envelope: Optional[Dict[str, Any]] = None
    info: Optional[ExportInfo] = None
    error_kind: Optional[ErrorKind] = None
    error: Optional[str] = None
    field: Optional[str] = None

    @classmethod
    def failure(cls, err: SnapshotError) -> "ExportResult":
        return cls(
            success=False,
            error_kind=err.kind,
            error=err.reason,
            field=getattr(err, "field", None),
        )


class SecureExporter:
    """
    Produces signed envelopes.

    Holds only immutable configuration and a clock, so one instance can be
    shared between threads.
    """

    def __init__(self, config: Optional[IntegrityConfig] = None, clock=None):
        self.config = config or IntegrityConfig()
        self.clock = clock or SystemClock()

    def export(self, snapshot: Union[Snapshot, Mapping[str, Any]]) -> ExportResult:
        """
        Sign a snapshot and build its envelope.

        Args:
            snapshot: Snapshot model or plain snapshot dict

        Returns:
            ExportResult (never raises)
        """
        try:
            data = snapshot.to_dict() if isinstance(snapshot, Snapshot) else snapshot
            check_structure(data)

            signature = sign_snapshot(data, self.config.canonical_mode)
            envelope = build_envelope(
                data, signature, self.clock.now_ms(), self.config.format_version
            )
            info = ExportInfo(
                elements=len(data.get("unlocked") or {}),
                history=len(data.get("history") or []),
                missions=len(data.get("missions") or []),
            )
        except SnapshotError as e:
            get_logger(__name__).warning("Export rejected (%s): %s", e.kind.value, e.reason)
            return ExportResult.failure(e)
        except Exception as e:
            get_logger(__name__).exception("Export failed")
            return ExportResult.failure(InternalError(str(e)))

        get_logger(__name__, trace_id=trace_id_for(signature)).debug(
            "Exported snapshot: %d elements, %d history, %d missions",
            info.elements,
            info.history,
            info.missions,
        )
        return ExportResult(success=True, envelope=envelope, info=info)
