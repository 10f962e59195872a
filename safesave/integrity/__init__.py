"""
Integrity layer for exported snapshots.

Provides:
- Feature digest and per-snapshot key derivation
- HMAC-SHA256 signing over canonical bytes
- Structural validation
- Envelope layout (reserved keys)
- SecureExporter / SecureImporter entry points
"""

from .digest import features_for, derive_key
from .signer import sign, sign_snapshot, signatures_match
from .validator import validate, check_structure, ValidationResult
from .envelope import (
    INTEGRITY_KEY,
    TIMESTAMP_KEY,
    VERSION_KEY,
    RESERVED_KEYS,
    build_envelope,
    split_envelope,
)
from .exporter import SecureExporter, ExportResult, ExportInfo
from .importer import SecureImporter, ImportResult, ImportInfo

__all__ = [
    "features_for",
    "derive_key",
    "sign",
    "sign_snapshot",
    "signatures_match",
    "validate",
    "check_structure",
    "ValidationResult",
    "INTEGRITY_KEY",
    "TIMESTAMP_KEY",
    "VERSION_KEY",
    "RESERVED_KEYS",
    "build_envelope",
    "split_envelope",
    "SecureExporter",
    "ExportResult",
    "ExportInfo",
    "SecureImporter",
    "ImportResult",
    "ImportInfo",
]
