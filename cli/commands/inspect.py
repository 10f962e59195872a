"""
Inspect command: show what a snapshot's derived key depends on.
"""

import json

import typer
from rich.console import Console
from rich.table import Table

from safesave.integrity import RESERVED_KEYS, derive_key, features_for, split_envelope
from safesave.integrity.validator import validate
from safesave.store import read_json

console = Console()


def inspect_command(
    path: str = typer.Argument(..., help="Snapshot or envelope JSON file"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show counts, fingerprint and derived-key prefix.

    Envelope fields are stripped first, so the output matches what the
    importer would derive.
    """
    try:
        data = read_json(path)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    if not isinstance(data, dict):
        console.print("[red]Error:[/red] not a JSON object")
        raise typer.Exit(1)

    is_envelope = any(k in data for k in RESERVED_KEYS)
    parts = split_envelope(data)
    check = validate(parts.snapshot)
    if not check.valid:
        console.print(f"[red]Invalid snapshot:[/red] {check.reason}")
        raise typer.Exit(1)

    features = features_for(parts.snapshot)
    key_prefix = derive_key(parts.snapshot)[:8]

    if json_output:
        print(
            json.dumps(
                {
                    "envelope": is_envelope,
                    "features": features,
                    "key_prefix": key_prefix,
                    "history": len(parts.snapshot.get("history") or []),
                    "missions": len(parts.snapshot.get("missions") or []),
                },
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    table = Table(show_header=False, box=None)
    table.add_row("[bold]Type[/bold]", "envelope" if is_envelope else "snapshot")
    table.add_row("Elements", str(features["stats"]["unlockedCount"]))
    table.add_row("Version", str(features["stats"]["version"]))
    table.add_row("Completed", features["missionProgress"] or "-")
    table.add_row("History", str(len(parts.snapshot.get("history") or [])))
    table.add_row("Key prefix", f"{key_prefix}...")
    if is_envelope:
        table.add_row("Signed", str(parts.timestamp))
    console.print(table)
