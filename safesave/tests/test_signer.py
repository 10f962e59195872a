"""
Tests for HMAC signing.
"""

import base64
import hashlib
import hmac as std_hmac
import json

from safesave.core.canonical import canonical_json_bytes
from safesave.integrity.digest import derive_key
from safesave.integrity.signer import sign, sign_snapshot, signatures_match


def test_rfc4231_case_2():
    """Known-answer vector from RFC 4231."""
    signature = sign(b"what do ya want for nothing?", "Jefe")

    assert base64.b64decode(signature).hex() == (
        "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"
    )


def test_matches_reference_hmac():
    data = canonical_json_bytes({"unlocked": {"Fire": ["🔥"]}, "version": 1})
    key = "abcdefghijklmnopqrstuvwxyz012345"

    expected = base64.b64encode(
        std_hmac.new(key.encode("utf-8"), data, hashlib.sha256).digest()
    ).decode("ascii")

    assert sign(data, key) == expected


def test_sign_determinism():
    data = b'{"a":1}'

    assert len({sign(data, "k" * 32) for _ in range(100)}) == 1


def test_different_key_different_signature():
    data = b'{"a":1}'

    assert sign(data, "a" * 32) != sign(data, "b" * 32)


def test_sign_snapshot_uses_derived_key():
    snapshot = {"unlocked": {"Fire": ["🔥"]}, "history": [], "missions": [], "version": 1}

    expected = sign(canonical_json_bytes(snapshot), derive_key(snapshot))

    assert sign_snapshot(snapshot) == expected


def test_sign_snapshot_mode_changes_input():
    snapshot = {"missions": [{"name": "Fire", "done": True}], "version": 1}

    assert sign_snapshot(snapshot, "recursive") != sign_snapshot(snapshot, "top_level")


def test_signatures_match():
    sig = sign(b"x", "k" * 32)

    assert signatures_match(sig, sig)
    assert not signatures_match(sig, sig[:-2] + "AA")
    assert not signatures_match(sig, None)
    assert not signatures_match(sig, 12345)


def test_non_ascii_signature_never_matches():
    """Lone surrogates and other non-base64 text compare unequal, never raise."""
    sig = sign(b"x", "k" * 32)

    assert not signatures_match(sig, json.loads('"\\ud800abc"'))
    assert not signatures_match(sig, sig[:-1] + "é")
