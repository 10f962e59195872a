"""
HMAC-SHA256 signing of canonical snapshot bytes.

The key is derived from the snapshot itself (see digest.py), so a signature
proves the envelope was not edited after export. It is not proof of origin:
anyone running this algorithm can produce a valid signature.
"""

import base64
from typing import Any, Mapping, Union

from cryptography.hazmat.primitives import constant_time, hashes, hmac

from ..core.canonical import CanonicalMode, canonical_json_bytes
from .digest import derive_key


def sign(canonical_bytes: bytes, derived_key: str) -> str:
    """
    Compute HMAC-SHA256 over canonical bytes.

    Args:
        canonical_bytes: Output of canonical_json_bytes()
        derived_key: Key from derive_key(), used as UTF-8 bytes

    Returns:
        Base64-encoded signature
    """
    h = hmac.HMAC(derived_key.encode("utf-8"), hashes.SHA256())
    h.update(canonical_bytes)
    return base64.b64encode(h.finalize()).decode("ascii")


def signatures_match(expected: str, supplied: Any) -> bool:
    """Exact, constant-time comparison of two signature strings."""
    # base64 output is pure ASCII, anything else cannot match
    if not isinstance(supplied, str) or not supplied.isascii():
        return False
    return constant_time.bytes_eq(expected.encode("utf-8"), supplied.encode("utf-8"))


def sign_snapshot(
    snapshot: Mapping[str, Any],
    mode: Union[CanonicalMode, str] = CanonicalMode.RECURSIVE,
) -> str:
    """
    Derive the key and sign the canonical form of a snapshot.

    This is the single path used by both export and import.
    """
    derived_key = derive_key(snapshot)
    return sign(canonical_json_bytes(dict(snapshot), mode), derived_key)
