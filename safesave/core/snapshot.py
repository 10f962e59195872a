"""
Snapshot model for persisted progress.

A snapshot captures:
- Unlocked entities (name -> display glyphs)
- Combination history
- Mission records
- Schema version

The integrity layer works on the plain dict form (to_dict()); this model is
for callers that want typed access.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List
import json

SNAPSHOT_FIELDS = ("unlocked", "history", "missions", "version")
ELEMENT_FIELDS = ("name", "emoji")
HISTORY_FIELDS = ("a", "b", "res")
MISSION_FIELDS = ("name", "emoji", "done")

HISTORY_LIMIT = 35
HISTORY_TRIM = 10


def _glyphs(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _unknown(data: Dict[str, Any], known) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k not in known}


def _with_extra(extra: Dict[str, Any], known: Dict[str, Any]) -> Dict[str, Any]:
    data = dict(extra)
    data.update(known)
    return data


@dataclass
class Element:
    """A named entity with its display glyphs."""
    name: str
    emoji: List[str] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return _with_extra(self.extra, {"name": self.name, "emoji": list(self.emoji)})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Element":
        return cls(
            name=data["name"],
            emoji=_glyphs(data.get("emoji")),
            extra=_unknown(data, ELEMENT_FIELDS),
        )


@dataclass
class HistoryEntry:
    """
    One combination event.

    Fields:
        a: First input
        b: Second input
        res: Result
    """
    a: Element
    b: Element
    res: Element
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return _with_extra(
            self.extra,
            {"a": self.a.to_dict(), "b": self.b.to_dict(), "res": self.res.to_dict()},
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryEntry":
        return cls(
            a=Element.from_dict(data["a"]),
            b=Element.from_dict(data["b"]),
            res=Element.from_dict(data["res"]),
            extra=_unknown(data, HISTORY_FIELDS),
        )


@dataclass
class Mission:
    """Objective record. done is expected to stay True once set."""
    name: str
    emoji: List[str] = field(default_factory=list)
    done: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return _with_extra(
            self.extra,
            {"name": self.name, "emoji": list(self.emoji), "done": self.done},
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Mission":
        return cls(
            name=data["name"],
            emoji=_glyphs(data.get("emoji")),
            done=bool(data.get("done", False)),
            extra=_unknown(data, MISSION_FIELDS),
        )


@dataclass
class Snapshot:
    """
    Persisted progress.

    Fields:
        unlocked: Entity name -> display glyphs (names are unique)
        history: Combination events, oldest first
        missions: Objective records
        version: Schema version
        extra: Unknown top-level fields (preserve-unknown, signed as-is)
    """
    unlocked: Dict[str, List[str]] = field(default_factory=dict)
    history: List[HistoryEntry] = field(default_factory=list)
    missions: List[Mission] = field(default_factory=list)
    version: int = 1
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def completed_missions(self) -> List[str]:
        return [m.name for m in self.missions if m.done]

    def trim_history(self) -> None:
        """Drop the oldest entries once history grows past HISTORY_LIMIT."""
        if len(self.history) > HISTORY_LIMIT:
            del self.history[:HISTORY_TRIM]

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to the plain dict shape that gets signed.

        Extra fields come first so the known fields always win on collision.
        """
        data: Dict[str, Any] = dict(self.extra)
        data.update(
            {
                "unlocked": {name: list(glyphs) for name, glyphs in self.unlocked.items()},
                "history": [entry.to_dict() for entry in self.history],
                "missions": [mission.to_dict() for mission in self.missions],
                "version": self.version,
            }
        )
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Snapshot":
        """
        Deserialize snapshot from dict.

        Unknown keys are kept at every level and an explicit version is kept
        as given. The conversion still normalizes: missing collections become
        empty, a missing or null version becomes 1, a single glyph string
        becomes a one-item list and done becomes a bool. A normalized snapshot
        signs differently from the dict it came from.
        """
        unlocked = data.get("unlocked") or {}
        return cls(
            unlocked={name: _glyphs(glyphs) for name, glyphs in unlocked.items()},
            history=[HistoryEntry.from_dict(h) for h in data.get("history") or []],
            missions=[Mission.from_dict(m) for m in data.get("missions") or []],
            version=1 if data.get("version") is None else data["version"],
            extra=_unknown(data, SNAPSHOT_FIELDS),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_json(cls, json_str: str) -> "Snapshot":
        return cls.from_dict(json.loads(json_str))

    def unlocked_count(self) -> int:
        return len(self.unlocked)
