"""
Tests for feature digest and key derivation.

Critical: the derived key must be deterministic and track gameplay content only.
"""

import copy

from safesave.integrity.digest import (
    KEY_LENGTH,
    derive_key,
    features_for,
    fingerprint_bytes,
)


def fire_snapshot():
    return {
        "unlocked": {"Fire": ["🔥"]},
        "history": [],
        "missions": [{"name": "Fire", "emoji": ["🔥"], "done": True}],
        "version": 1,
    }


def test_fingerprint_layout():
    """Field order and compact separators are fixed."""
    features = features_for(fire_snapshot())

    assert fingerprint_bytes(features) == (
        b'{"unlocked":["Fire"],"missionProgress":"Fire",'
        b'"stats":{"unlockedCount":1,"version":1}}'
    )


def test_features_sorted_and_filtered():
    snapshot = {
        "unlocked": {"Water": ["💧"], "Earth": ["🌍"], "Air": ["💨"]},
        "missions": [
            {"name": "Steam", "emoji": [], "done": True},
            {"name": "Mud", "emoji": [], "done": False},
            {"name": "Lava", "emoji": [], "done": True},
        ],
    }

    features = features_for(snapshot)

    assert features["unlocked"] == ["Air", "Earth", "Water"]
    assert features["missionProgress"] == "Lava,Steam"
    assert features["stats"] == {"unlockedCount": 3, "version": 1}


def test_empty_snapshot_features():
    assert features_for({}) == {
        "unlocked": [],
        "missionProgress": "",
        "stats": {"unlockedCount": 0, "version": 1},
    }


def test_falsy_version_defaults_to_one():
    assert derive_key({"version": 0}) == derive_key({})
    assert derive_key({"version": None}) == derive_key({"version": 1})


def test_names_sort_by_utf16_code_units():
    """Astral glyph names sort before high BMP names, as in UTF-16."""
    features = features_for({"unlocked": {"～": [], "😀": []}})

    assert features["unlocked"] == ["😀", "～"]


def test_key_shape():
    key = derive_key(fire_snapshot())

    assert len(key) == KEY_LENGTH
    assert isinstance(key, str)


def test_key_determinism_100_runs():
    """Same snapshot must derive the same key every time."""
    keys = {derive_key(fire_snapshot()) for _ in range(100)}

    assert len(keys) == 1


def test_key_ignores_display_data_and_order():
    base = fire_snapshot()
    base["unlocked"]["Water"] = ["💧"]

    cosmetic = copy.deepcopy(base)
    cosmetic["unlocked"]["Fire"] = ["🔥", "✨"]
    cosmetic["missions"][0]["emoji"] = ["🕯"]
    cosmetic["history"] = [{"a": {}, "b": {}, "res": {}}]

    reordered = {
        "version": 1,
        "missions": base["missions"],
        "unlocked": {"Water": ["💧"], "Fire": ["🔥"]},
    }

    assert derive_key(cosmetic) == derive_key(base)
    assert derive_key(reordered) == derive_key(base)


def test_key_tracks_unlocked_names():
    other = fire_snapshot()
    other["unlocked"]["Water"] = ["💧"]

    assert derive_key(other) != derive_key(fire_snapshot())


def test_key_tracks_completed_missions():
    other = fire_snapshot()
    other["missions"][0]["done"] = False

    assert derive_key(other) != derive_key(fire_snapshot())


def test_key_tracks_version():
    other = fire_snapshot()
    other["version"] = 2

    assert derive_key(other) != derive_key(fire_snapshot())


def test_non_mapping_missions_are_ignored():
    snapshot = fire_snapshot()
    snapshot["missions"].append("Fire")

    assert features_for(snapshot)["missionProgress"] == "Fire"
