"""Configuration CLI commands."""

from __future__ import annotations

import json

import typer

from .core import app, console, get_config

config_app = typer.Typer(help="Manage shellguard configuration")
app.add_typer(config_app, name="config")


def _target_path(ctx: typer.Context):
    from shellguard.config.loader import get_config_path

    obj = ctx.find_root().obj or {}
    return obj.get("config_path") or get_config_path()


@config_app.command("path")
def config_path_cmd(ctx: typer.Context) -> None:
    """Show config file location."""
    console.print(str(_target_path(ctx)))


@config_app.command("init")
def config_init(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config"),
) -> None:
    """Write a config file populated with defaults."""
    from shellguard.config.loader import save_config
    from shellguard.config.schema import Config

    path = _target_path(ctx)
    if path.exists() and not force:
        console.print(f"[yellow]Config already exists at {path}[/yellow]")
        if not typer.confirm("Overwrite?"):
            raise typer.Exit()

    save_config(Config(), path)
    console.print(f"[green]✓[/green] Created config at {path}")


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Print the effective configuration as camelCase JSON."""
    from shellguard.config.loader import convert_to_camel

    config = get_config(ctx)
    typer.echo(json.dumps(convert_to_camel(config.model_dump(mode="json")), indent=2))
