#!/usr/bin/env python3
"""
safesave CLI - Signed Save Snapshots

Main entrypoint for the safesave command-line tool.
"""

import typer
from rich.console import Console
from rich.table import Table

from safesave.logging_config import setup_logging

from cli.commands.export import export_command
from cli.commands.verify import verify_command
from cli.commands.inspect import inspect_command

app = typer.Typer(
    name="safesave",
    help="Sign and verify exported save snapshots",
    add_completion=False,
)

console = Console()

app.command("export")(export_command)
app.command("verify")(verify_command)
app.command("inspect")(inspect_command)


@app.callback()
def configure():
    """Sign and verify exported save snapshots."""
    setup_logging()


@app.command()
def version():
    """Show version information."""
    from cli import __version__
    from safesave import __version__ as engine_version
    from safesave.config import FORMAT_VERSION

    table = Table(show_header=False, box=None)
    table.add_row("[bold]safesave CLI[/bold]", f"v{__version__}")
    table.add_row("Engine", f"v{engine_version}")
    table.add_row("Envelope format", FORMAT_VERSION)

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
