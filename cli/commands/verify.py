"""
Verify command: run the secure import gates on an envelope file.
"""

import json
from typing import Optional

import typer
from rich.console import Console

from safesave.config import IntegrityConfig
from safesave.integrity import SecureImporter
from safesave.store import read_json, write_json

console = Console()


def verify_command(
    envelope_path: str = typer.Argument(..., help="Path to envelope file"),
    output: Optional[str] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write the recovered snapshot here on success",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Verify envelope integrity.

    Exit codes: 0 verified, 1 rejected, 2 unreadable file.

    Examples:
        safesave verify saves/save_1760000000000_3f9a1c2e.json
        safesave verify signed.json --out progress.json
    """
    try:
        envelope = read_json(envelope_path)
    except (OSError, ValueError) as e:
        if json_output:
            print(json.dumps({"success": False, "error": "File not readable", "details": str(e)}))
        else:
            console.print(f"[red]Error: File not readable:[/red] {e}")
        raise typer.Exit(2)

    result = SecureImporter(IntegrityConfig.from_env()).import_envelope(envelope)

    if not result.success:
        if json_output:
            print(json.dumps({"success": False, "kind": result.error_kind.value, "reason": result.reason}))
        else:
            console.print(f"[red]✗ Verification failed:[/red] {result.reason}")
        raise typer.Exit(1)

    if output:
        write_json(output, result.snapshot)

    if json_output:
        print(
            json.dumps(
                {
                    "success": True,
                    "verified": result.info.verified,
                    "elements": result.info.elements,
                    "import_time": result.info.import_time,
                    "format_version": result.info.format_version,
                },
                indent=2,
            )
        )
    else:
        console.print("[green]✓ Envelope verified[/green]")
        console.print(f"  Exported: {result.info.import_time}")
        console.print(f"  Elements: {result.info.elements}")
        if output:
            console.print(f"  Snapshot: [cyan]{output}[/cyan]")
