"""Shared CLI application context and setup helpers."""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console

from shellguard import __logo__, __version__
from shellguard.config.schema import Config
from shellguard.core.ports import GuardPort

app = typer.Typer(
    name="shellguard",
    help=f"{__logo__} shellguard - command and content security policy engine",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"{__logo__} shellguard v{__version__}")
        raise typer.Exit()


def _stderr_sink(message: str) -> None:
    # resolve at write time so redirected streams (tests, hooks) are honoured
    sys.stderr.write(message)


def configure_logging(level: str) -> None:
    """Route loguru output to stderr at the given level."""
    logger.remove()
    logger.add(_stderr_sink, level=level, format="{time:HH:mm:ss} | {level: <8} | {message}")


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(None, "--version", "-V", callback=version_callback, is_eager=True),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details to stderr"),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file (default ~/.shellguard/config.json)"),
) -> None:
    """shellguard - command and content security policy engine."""
    from shellguard.config.loader import load_config

    config = load_config(config_path)
    configure_logging("DEBUG" if verbose else config.guard.log_level)
    ctx.obj = {"config": config, "config_path": config_path}


def get_config(ctx: typer.Context) -> Config:
    obj = ctx.find_root().obj or {}
    config = obj.get("config")
    return config if isinstance(config, Config) else Config()


def make_guard(config: Config) -> GuardPort:
    """Create the guard engine, or the no-op guard when disabled."""
    from shellguard.security.engine import GuardEngine
    from shellguard.security.noop import NoopGuard

    if not config.guard.enabled:
        return NoopGuard()
    return GuardEngine(config)
