"""
Feature digest and per-snapshot key derivation.

The derived key depends only on gameplay-relevant content: which entities are
unlocked, which missions are done, how many entities there are and the
schema version. Display glyphs and field order do not influence it.
"""

import base64
import hashlib
import json
from typing import Any, Dict, Iterable, List, Mapping

KEY_LENGTH = 32


def _utf16_order(name: str) -> bytes:
    # Sort by UTF-16 code units, matching the browser implementation.
    return name.encode("utf-16-be")


def _sorted_names(names: Iterable[str]) -> List[str]:
    return sorted(names, key=_utf16_order)


def features_for(snapshot: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Reduce a snapshot to its order-independent fingerprint.

    Fields (in serialization order):
        unlocked: Sorted unlocked entity names
        missionProgress: Comma-joined sorted names of done missions
        stats.unlockedCount: Number of unlocked entities
        stats.version: Schema version (1 when absent or falsy)
    """
    unlocked = snapshot.get("unlocked") or {}
    missions = snapshot.get("missions") or []

    done = [
        m.get("name")
        for m in missions
        if isinstance(m, Mapping) and m.get("done")
    ]

    return {
        "unlocked": _sorted_names(str(k) for k in unlocked.keys()),
        "missionProgress": ",".join(_sorted_names("" if n is None else str(n) for n in done)),
        "stats": {
            "unlockedCount": len(unlocked),
            "version": snapshot.get("version") or 1,
        },
    }


def fingerprint_bytes(features: Dict[str, Any]) -> bytes:
    """Compact JSON of the fingerprint, field order as built by features_for()."""
    s = json.dumps(features, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def derive_key(snapshot: Mapping[str, Any]) -> str:
    """
    Derive the signing key for a snapshot.

    SHA-256 over the serialized fingerprint, base64-encoded, first 32 chars.
    Never persisted; exporter and importer recompute it on every call.

    Returns:
        32-character key string
    """
    digest = hashlib.sha256(fingerprint_bytes(features_for(snapshot))).digest()
    return base64.b64encode(digest).decode("ascii")[:KEY_LENGTH]
