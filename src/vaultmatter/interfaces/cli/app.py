"""CLI application for vaultmatter using Rich and Typer."""

import json
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vaultmatter.core.config import CHECK_STRICT, setup_logging
from vaultmatter.core.dumper import dump as dump_yaml
from vaultmatter.core.errors import YamlError
from vaultmatter.core.parser import parse as parse_yaml
from vaultmatter.vault.check import check_vault
from vaultmatter.vault.frontmatter import (
    FrontmatterError,
    format_note,
    split_frontmatter,
)
from vaultmatter.vault.layout import get_vault_root

app = typer.Typer(
    name="vaultmatter",
    help="vaultmatter CLI - read, write and check note frontmatter",
    no_args_is_help=True,
)

console = Console()


def _read_input(path: str) -> str:
    """Read a file, or stdin when path is '-'."""
    if path == "-":
        return sys.stdin.read()
    try:
        return Path(path).expanduser().read_text(encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Error: cannot read {escape(path)}: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e


@app.callback()
def main(
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug logging",
    ),
):
    """Read, write and check YAML frontmatter in Markdown notes."""
    setup_logging("DEBUG" if debug else None)


@app.command()
def parse(
    path: str = typer.Argument(..., help="YAML file or note, '-' for stdin"),
):
    """Print a YAML document (or a note's frontmatter) as JSON."""
    text = _read_input(path)
    block, _ = split_frontmatter(text)
    try:
        data = parse_yaml(block if block is not None else text)
    except YamlError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


@app.command()
def dump(
    path: str = typer.Argument(..., help="JSON file, '-' for stdin"),
):
    """Print a JSON document as frontmatter YAML."""
    text = _read_input(path)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: invalid JSON: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e
    typer.echo(dump_yaml(data))


@app.command()
def fmt(
    notes: list[Path] = typer.Argument(..., help="Notes to format"),
    check: bool = typer.Option(
        False,
        "--check",
        help="Only report notes that would change",
    ),
):
    """Rewrite notes' frontmatter in canonical order and quoting."""
    changed: list[Path] = []
    failed = False

    for path in notes:
        try:
            content = path.read_text(encoding="utf-8")
            formatted = format_note(content)
        except (OSError, FrontmatterError) as e:
            console.print(f"[red]{escape(str(path))}: {escape(str(e))}[/red]")
            failed = True
            continue

        if formatted == content:
            continue
        changed.append(path)
        if check:
            console.print(f"[yellow]would reformat {escape(str(path))}[/yellow]")
        else:
            path.write_text(formatted, encoding="utf-8")
            console.print(f"[green]reformatted {escape(str(path))}[/green]")

    verb = "would be reformatted" if check else "reformatted"
    console.print(f"[dim]{len(changed)} of {len(notes)} notes {verb}[/dim]")
    raise typer.Exit(1 if failed or (check and changed) else 0)


@app.command()
def check(
    vault: Optional[Path] = typer.Argument(
        None,
        help="Vault directory (default: $VAULT_DIR or ~/notes)",
    ),
    strict: Optional[bool] = typer.Option(
        None,
        "--strict/--no-strict",
        help="Fail on notes without frontmatter (default: $CHECK_STRICT)",
    ),
):
    """Check every note in a vault for missing or invalid frontmatter."""
    if strict is None:
        strict = CHECK_STRICT
    root = (vault or get_vault_root()).expanduser()
    if not root.is_dir():
        console.print(f"[red]Error: vault not found: {escape(str(root))}[/red]")
        raise typer.Exit(1)

    report = check_vault(root)
    console.print(f"Checked {report.count} notes in {report.elapsed_ms}ms")

    if report.warnings or report.errors:
        table = Table(title="Frontmatter Issues", show_header=True)
        table.add_column("Note", style="cyan")
        table.add_column("Level")
        table.add_column("Message")

        for issue in report.warnings:
            table.add_row(
                escape(issue.path), "[yellow]WARN[/yellow]", escape(issue.message)
            )
        for issue in report.errors:
            table.add_row(
                escape(issue.path), "[red]ERROR[/red]", escape(issue.message)
            )

        console.print(table)

    failed = not report.ok or (strict and bool(report.warnings))
    raise typer.Exit(1 if failed else 0)


if __name__ == "__main__":
    app()
