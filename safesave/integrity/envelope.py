"""
Envelope layout: snapshot fields plus three reserved side-channel keys.
"""

from typing import Any, Dict, Mapping, NamedTuple, Optional

INTEGRITY_KEY = "_sf_integrity"
TIMESTAMP_KEY = "_sf_timestamp"
VERSION_KEY = "_sf_version"

RESERVED_KEYS = (INTEGRITY_KEY, TIMESTAMP_KEY, VERSION_KEY)


class EnvelopeParts(NamedTuple):
    snapshot: Dict[str, Any]
    signature: Optional[Any]
    timestamp: Optional[Any]
    format_version: Optional[Any]


def build_envelope(
    snapshot: Mapping[str, Any], signature: str, timestamp: int, format_version: str
) -> Dict[str, Any]:
    """Copy snapshot fields and append the reserved keys."""
    envelope = dict(snapshot)
    envelope[INTEGRITY_KEY] = signature
    envelope[TIMESTAMP_KEY] = timestamp
    envelope[VERSION_KEY] = format_version
    return envelope


def split_envelope(envelope: Mapping[str, Any]) -> EnvelopeParts:
    """
    Separate reserved keys from snapshot fields.

    The input mapping is not modified.
    """
    snapshot = {k: v for k, v in envelope.items() if k not in RESERVED_KEYS}
    return EnvelopeParts(
        snapshot=snapshot,
        signature=envelope.get(INTEGRITY_KEY),
        timestamp=envelope.get(TIMESTAMP_KEY),
        format_version=envelope.get(VERSION_KEY),
    )
