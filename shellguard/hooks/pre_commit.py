"""Pre-commit review: staged secrets and commit message conventions."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

from loguru import logger

from shellguard.core.errors import PayloadError
from shellguard.core.models import Decision
from shellguard.core.ports import GuardPort
from shellguard.hooks.git import staged_diff
from shellguard.hooks.payload import BLOCK_EXIT_CODE, HookOutcome, block_signal, parse_payload
from shellguard.hooks.pre_tool_use import SHELL_TOOLS
from shellguard.security.commits import is_git_commit

DiffReader: TypeAlias = Callable[[str, float], str]


def _resolve_cwd(payload_cwd: str | None) -> str:
    return payload_cwd or os.environ.get("CLAUDE_PROJECT_DIR") or str(Path.cwd())


def run_pre_commit(
    raw: str,
    guard: GuardPort,
    *,
    enforce: bool = False,
    diff_timeout: float = 10.0,
    diff_reader: DiffReader = staged_diff,
) -> HookOutcome:
    """Review a `git commit` shell call before it runs.

    In the default flexible mode the commit always proceeds and findings are
    reported as warnings. With ``enforce`` a block verdict stops the commit.
    """
    try:
        payload = parse_payload(raw)
    except PayloadError as e:
        logger.warning("hook_payload_rejected hook=pre_commit error={}", e)
        return HookOutcome()

    if payload.tool_name not in SHELL_TOOLS:
        return HookOutcome()

    command = payload.command
    if not is_git_commit(command):
        return HookOutcome()

    diff = diff_reader(_resolve_cwd(payload.cwd), diff_timeout)
    result = guard.check_commit(command, diff, context=payload.context())
    decision = result.verdict.decision

    if decision is Decision.ALLOW:
        return HookOutcome()
    if decision is Decision.BLOCK and enforce:
        return HookOutcome(
            exit_code=BLOCK_EXIT_CODE,
            stdout=block_signal(result.verdict.categories, reason="Secrets detected in staged changes"),
            stderr=result.report,
        )
    note = "Note: commit.enforce is off, so the commit will proceed despite the issues above.\n" if decision is Decision.BLOCK else ""
    return HookOutcome(stderr=result.report + note)
