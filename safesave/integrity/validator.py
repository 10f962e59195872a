"""
Structural validation of snapshot candidates.

Checks types, not presence: absent (or null) collections count as empty.
Runs on the caller's snapshot at export and on the stripped candidate at import.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.errors import StructuralError
from .envelope import RESERVED_KEYS


@dataclass(frozen=True)
class ValidationResult:
    """
    Result of structural validation.

    Fields:
        valid: All checks passed
        reason: Human-readable reason if invalid
        field: Offending field name, if any
    """
    valid: bool
    reason: Optional[str] = None
    field: Optional[str] = None


def check_structure(candidate: Any) -> None:
    """
    Raise StructuralError on the first malformed field.

    Raises:
        StructuralError: If candidate is not a mapping, a collection field has
            the wrong type, or a reserved envelope key is present
    """
    if not isinstance(candidate, Mapping):
        raise StructuralError("snapshot must be an object")

    for key in RESERVED_KEYS:
        if key in candidate:
            raise StructuralError(f"snapshot must not contain reserved field {key}", field=key)

    unlocked = candidate.get("unlocked")
    history = candidate.get("history")
    missions = candidate.get("missions")

    if unlocked is not None and not isinstance(unlocked, Mapping):
        raise StructuralError("unlocked must be a mapping", field="unlocked")
    if history is not None and not isinstance(history, (list, tuple)):
        raise StructuralError("history must be a list", field="history")
    if missions is not None and not isinstance(missions, (list, tuple)):
        raise StructuralError("missions must be a list", field="missions")


def validate(candidate: Any) -> ValidationResult:
    """
    Validate snapshot shape.

    Returns:
        ValidationResult (never raises)
    """
    try:
        check_structure(candidate)
    except StructuralError as e:
        return ValidationResult(valid=False, reason=e.reason, field=e.field)
    return ValidationResult(valid=True)
