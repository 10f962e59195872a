"""
Export command: sign a plain snapshot file.
"""

import json
from typing import Optional

import typer
from rich.console import Console

from safesave.config import IntegrityConfig
from safesave.integrity import SecureExporter
from safesave.store import EnvelopeStore, read_json, write_json

console = Console()


def export_command(
    snapshot_path: str = typer.Argument(..., help="Path to snapshot JSON file"),
    output: Optional[str] = typer.Option(
        None,
        "--out",
        "-o",
        help="Output envelope file",
    ),
    directory: str = typer.Option(
        "saves",
        "--dir",
        "-d",
        help="Saves directory when --out is not given",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Sign a snapshot and write its envelope.

    Examples:
        safesave export progress.json
        safesave export progress.json --out signed.json
    """
    try:
        snapshot = read_json(snapshot_path)
    except (OSError, ValueError) as e:
        if json_output:
            print(json.dumps({"success": False, "error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    result = SecureExporter(IntegrityConfig.from_env()).export(snapshot)
    if not result.success:
        if json_output:
            print(json.dumps({"success": False, "kind": result.error_kind.value, "error": result.error}))
        else:
            console.print(f"[red]Export failed:[/red] {result.error}")
        raise typer.Exit(1)

    if output:
        write_json(output, result.envelope)
        envelope_path = output
    else:
        envelope_path = EnvelopeStore(directory).save(result.envelope)

    if json_output:
        print(
            json.dumps(
                {
                    "success": True,
                    "path": envelope_path,
                    "elements": result.info.elements,
                    "history": result.info.history,
                    "missions": result.info.missions,
                },
                indent=2,
            )
        )
    else:
        console.print("[green]✓ Snapshot exported[/green]")
        console.print(f"  File: [cyan]{envelope_path}[/cyan]")
        console.print(f"  Elements: {result.info.elements}")
        console.print(f"  History: {result.info.history}")
        console.print(f"  Missions: {result.info.missions}")
