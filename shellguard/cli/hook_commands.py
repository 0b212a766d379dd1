"""Host hook entry points."""

from __future__ import annotations

import sys

import typer
from loguru import logger

from shellguard.config.schema import Config
from shellguard.core.errors import GuardError
from shellguard.core.ports import GuardPort
from shellguard.hooks.payload import BLOCK_EXIT_CODE, HookOutcome, block_signal

from .core import app, get_config, make_guard

hook_app = typer.Typer(help="Run as a host tool hook (payload JSON on stdin)")
app.add_typer(hook_app, name="hook")


def _guard_or_exit(config: Config) -> GuardPort:
    try:
        return make_guard(config)
    except GuardError as e:
        logger.error("guard_unavailable fail_mode={} error={}", config.guard.fail_mode, e)
        if config.guard.fail_mode == "open":
            raise typer.Exit(0) from e
        typer.echo(block_signal(("ENGINE_ERROR",), reason=f"Guard unavailable: {e}"))
        raise typer.Exit(BLOCK_EXIT_CODE) from e


def _finish(outcome: HookOutcome) -> None:
    if outcome.stderr:
        typer.echo(outcome.stderr, err=True)
    if outcome.stdout:
        typer.echo(outcome.stdout)
    raise typer.Exit(outcome.exit_code)


@hook_app.command("pre-tool-use")
def pre_tool_use(ctx: typer.Context) -> None:
    """Gate a shell tool call; exits 2 to block it."""
    from shellguard.hooks.pre_tool_use import run_pre_tool_use

    config = get_config(ctx)
    guard = _guard_or_exit(config)
    _finish(run_pre_tool_use(sys.stdin.read(), guard))


@hook_app.command("pre-commit")
def pre_commit(ctx: typer.Context) -> None:
    """Review a git commit call for staged secrets and message format."""
    from shellguard.hooks.pre_commit import run_pre_commit

    config = get_config(ctx)
    guard = _guard_or_exit(config)
    _finish(
        run_pre_commit(
            sys.stdin.read(),
            guard,
            enforce=config.commit.enforce,
            diff_timeout=config.commit.diff_timeout_seconds,
        )
    )
