"""
CLI commands for inspecting typedconf store files.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from typedconf.core.config.errors import StoreIOError
from typedconf.core.config.persistence import SectionHandle, SectionStore
from typedconf.core.utils.logger import setup_logging

from .exit_codes import CliExit

console = Console()
app = typer.Typer(
    name="typedconf", help="Inspect typedconf configuration stores", no_args_is_help=True
)


def _open_store(store: Optional[Path]) -> SectionStore:
    section_store = SectionStore(store)
    if not section_store.path.exists():
        raise CliExit.config_error(f"Store not found: {section_store.path}")
    return section_store


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", "-l", help="Logging level"),
) -> None:
    """typedconf store inspection."""
    setup_logging(level=log_level)


@app.command("sections")
def list_sections(
    store: Optional[Path] = typer.Option(
        None, "--store", "-s", help="Store file (defaults to the project store)"
    ),
) -> None:
    """List the sections of a store and their key counts."""
    section_store = _open_store(store)
    try:
        names = section_store.sections()
        table = Table(title=str(section_store.path))
        table.add_column("Section", style="bold cyan")
        table.add_column("Keys", justify="right")
        for name in names:
            table.add_row(name, str(len(section_store.read(SectionHandle(name, section_store.path)))))
    except StoreIOError as e:
        raise CliExit.config_error(str(e)) from e
    console.print(table)


@app.command("show")
def show_section(
    section: str = typer.Argument(..., help="Section name (the configuration type name)"),
    store: Optional[Path] = typer.Option(
        None, "--store", "-s", help="Store file (defaults to the project store)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Emit the section as JSON"),
) -> None:
    """Show the key/value pairs of one section."""
    section_store = _open_store(store)
    try:
        if not section_store.has_section(section):
            raise CliExit.error(f"Section <{section}> not found in {section_store.path}")
        values = section_store.read(SectionHandle(section, section_store.path))
    except StoreIOError as e:
        raise CliExit.config_error(str(e)) from e

    if json_output:
        typer.echo(json.dumps(values, indent=2))
        return

    table = Table(title=f"<{section}>")
    table.add_column("Key", style="bold cyan")
    table.add_column("Value")
    for key, value in values.items():
        table.add_row(key, value)
    console.print(table)


if __name__ == "__main__":
    app()
