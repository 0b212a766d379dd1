"""CLI commands for shellguard."""

import json
import sys
from pathlib import Path

import typer
from rich.table import Table

from shellguard.hooks.payload import BLOCK_EXIT_CODE

from .core import app, console, get_config, make_guard


def _emit(result, json_output: bool) -> None:
    if json_output:
        typer.echo(json.dumps(result.verdict.to_dict(), indent=2))
    elif result.report:
        typer.echo(result.report)
    else:
        typer.echo(f"STATUS: {result.verdict.decision.value.upper()} (guard disabled)")


@app.command()
def check(
    ctx: typer.Context,
    command: str = typer.Argument(..., help="Shell command to evaluate"),
    json_output: bool = typer.Option(False, "--json", help="Print the verdict as JSON"),
) -> None:
    """Evaluate a shell command; exits 2 when it must be blocked."""
    result = make_guard(get_config(ctx)).check_command(command, context={"source": "cli"})
    _emit(result, json_output)
    if result.blocked:
        raise typer.Exit(BLOCK_EXIT_CODE)


@app.command()
def scan(
    ctx: typer.Context,
    path: str = typer.Argument("-", help="File to scan, or - for stdin"),
    json_output: bool = typer.Option(False, "--json", help="Print the verdict as JSON"),
) -> None:
    """Scan a file or stdin for secrets; exits 2 when any are found."""
    if path == "-":
        content = sys.stdin.read()
        label = "stdin"
    else:
        file_path = Path(path).expanduser()
        if not file_path.is_file():
            console.print(f"[red]No such file: {file_path}[/red]")
            raise typer.Exit(1)
        content = file_path.read_text(encoding="utf-8", errors="replace")
        label = str(file_path)

    result = make_guard(get_config(ctx)).check_content(content, context={"source": "cli"}, label=label)
    _emit(result, json_output)
    if result.blocked:
        raise typer.Exit(BLOCK_EXIT_CODE)


@app.command()
def rules(
    ctx: typer.Context,
    tier: str | None = typer.Option(None, "--tier", "-t", help="blocking, warning, arguments or secrets"),
) -> None:
    """List the active pattern catalog."""
    from shellguard.security.catalog import build_catalog

    config = get_config(ctx)
    catalog = build_catalog(config.rules)

    table = Table(title="Active Rules")
    table.add_column("Tier", style="cyan", no_wrap=True)
    table.add_column("Category", style="green", no_wrap=True)
    table.add_column("Message")

    rows: list[tuple[str, str, str]] = []
    rows += [("blocking", r.category, r.message) for r in catalog.blocking]
    rows += [("warning", r.category, r.message) for r in catalog.warning]
    rows += [("arguments", a.category, "Potential secret found in command arguments") for a in catalog.arguments]
    rows += [("secrets", s.name, f"Potential {s.name} detected") for s in catalog.secrets]

    for row_tier, category, message in rows:
        if tier and row_tier != tier:
            continue
        table.add_row(row_tier, category, message)

    console.print(table)
    console.print(f"Whitelist patterns: {len(catalog.whitelist)}")
    if catalog.skipped:
        console.print(f"[yellow]Skipped invalid entries: {', '.join(catalog.skipped)}[/yellow]")
    if catalog.is_empty:
        console.print("[red]Catalog is empty; every evaluation will allow.[/red]")


# Register sub-command groups.
from . import config_commands as _config_commands  # noqa: E402,F401
from . import hook_commands as _hook_commands  # noqa: E402,F401
