"""
Canonical serialization for signing input.

Exporter and importer both go through these functions, so the same snapshot
always produces the same bytes on either side.
"""

import json
from enum import Enum
from typing import Any, Union


class CanonicalMode(str, Enum):
    """How deep key ordering is applied before serialization."""

    RECURSIVE = "recursive"
    TOP_LEVEL = "top_level"


def canonicalize(obj: Any) -> Any:
    """
    Convert arbitrary nested dict/list to canonical form.

    Rules:
    - dict keys sorted alphabetically
    - tuples converted to lists
    - recursive normalization

    This ensures identical structure regardless of input order.
    """
    if isinstance(obj, dict):
        return {k: canonicalize(obj[k]) for k in sorted(obj.keys())}
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    return obj


def _plain(obj: Any) -> Any:
    # Tuples become lists but mapping order is left untouched.
    if isinstance(obj, dict):
        return {k: _plain(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_plain(x) for x in obj]
    return obj


def canonicalize_top_level(obj: Any) -> Any:
    """
    Sort only the first level of keys.

    Nested mappings keep their insertion order, so reordering keys inside
    e.g. a mission record changes the serialized bytes.
    """
    if isinstance(obj, dict):
        return {k: _plain(obj[k]) for k in sorted(obj.keys())}
    return _plain(obj)


def canonical_json_bytes(
    obj: Any, mode: Union[CanonicalMode, str] = CanonicalMode.RECURSIVE
) -> bytes:
    """
    Deterministic JSON bytes for signing.

    Guarantees:
    - separators remove whitespace
    - ensure_ascii=False keeps UTF-8 stable
    - key ordering applied per mode (all levels, or top level only)

    Returns:
        UTF-8 encoded JSON bytes
    """
    mode = CanonicalMode(mode)
    if mode is CanonicalMode.RECURSIVE:
        canon = canonicalize(obj)
        s = json.dumps(canon, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    else:
        canon = canonicalize_top_level(obj)
        s = json.dumps(canon, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def canonical_json_str(
    obj: Any, mode: Union[CanonicalMode, str] = CanonicalMode.RECURSIVE
) -> str:
    """
    Deterministic JSON string (for display or storage).

    Same guarantees as canonical_json_bytes but returns string.
    """
    return canonical_json_bytes(obj, mode).decode("utf-8")
