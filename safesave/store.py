"""
Envelope storage on disk.

Envelopes are stored as separate JSON files in a saves directory.
Naming: save_{timestamp}_{signature_hash_prefix}.json
"""

import hashlib
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from .integrity.envelope import INTEGRITY_KEY, TIMESTAMP_KEY


class EnvelopeStore:
    """
    Manage exported envelope files.

    Storage format:
    - saves/ directory
    - Each file: save_{timestamp}_{signature_hash_prefix}.json
    - Contents: envelope JSON (UTF-8, glyphs unescaped)
    """

    def __init__(self, directory: str = "saves"):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def save(self, envelope: Dict[str, Any], filename: Optional[str] = None) -> str:
        """
        Save envelope to disk.

        Args:
            envelope: Envelope from SecureExporter
            filename: Optional file name (default: save_{timestamp}_{hash8}.json)

        Returns:
            Path to saved file
        """
        if filename is None:
            filename = default_filename(envelope)
        filepath = self.directory / filename
        write_json(str(filepath), envelope)
        return str(filepath)

    def load(self, filepath: str) -> Any:
        """Load envelope JSON from file (unverified)."""
        return read_json(filepath)

    def list_saves(self) -> List[str]:
        """
        List all save files in directory.

        Returns:
            List of save file paths (oldest first)
        """
        def extract_timestamp(path: str) -> int:
            # save_{timestamp}_{hash}.json
            parts = os.path.basename(path).split("_")
            try:
                return int(parts[1].split(".")[0])
            except ValueError:
                return 0

        saves = [str(p) for p in self.directory.glob("save_*.json")]
        saves.sort(key=lambda p: (extract_timestamp(p), p))
        return saves

    def find_latest(self) -> Optional[str]:
        saves = self.list_saves()
        if not saves:
            return None
        return saves[-1]

    def rotate(self, keep_count: int = 10) -> None:
        """
        Rotate saves, keeping only latest N.

        Args:
            keep_count: Number of saves to keep
        """
        saves = self.list_saves()
        if len(saves) > keep_count:
            for path in saves[: len(saves) - keep_count]:
                os.remove(path)


def default_filename(envelope: Dict[str, Any]) -> str:
    """
    File name for an envelope.

    The signature is base64 (may contain "/"), so its SHA-256 hex prefix is
    used to tell apart envelopes stamped in the same millisecond.
    """
    signature = str(envelope.get(INTEGRITY_KEY, ""))
    sig_hash = hashlib.sha256(signature.encode("utf-8", "surrogatepass")).hexdigest()[:8]
    return f"save_{envelope.get(TIMESTAMP_KEY, 0)}_{sig_hash}.json"


def read_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path: str, data: Any) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
