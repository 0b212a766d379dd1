"""PreToolUse gate for shell commands."""

from __future__ import annotations

from loguru import logger

from shellguard.core.errors import PayloadError
from shellguard.core.models import Decision
from shellguard.core.ports import GuardPort
from shellguard.hooks.payload import BLOCK_EXIT_CODE, HookOutcome, block_signal, parse_payload

SHELL_TOOLS = frozenset({"Bash"})


def run_pre_tool_use(raw: str, guard: GuardPort) -> HookOutcome:
    """Evaluate one shell tool call and map the verdict onto hook exit semantics.

    Block exits with code 2 and a JSON decision line on stdout. Warnings are
    reported on stderr and the command proceeds. Anything that is not a shell
    call, or carries no command, passes silently.
    """
    try:
        payload = parse_payload(raw)
    except PayloadError as e:
        logger.warning("hook_payload_rejected hook=pre_tool_use error={}", e)
        return HookOutcome()

    if payload.tool_name not in SHELL_TOOLS:
        return HookOutcome()

    command = payload.command
    if not command.strip():
        return HookOutcome()

    result = guard.check_command(command, context=payload.context())
    match result.verdict.decision:
        case Decision.BLOCK:
            return HookOutcome(
                exit_code=BLOCK_EXIT_CODE,
                stdout=block_signal(result.verdict.categories),
                stderr=result.report,
            )
        case Decision.WARN:
            return HookOutcome(stderr=result.report)
        case Decision.ALLOW:
            return HookOutcome()
