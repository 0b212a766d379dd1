"""Host hook adapters."""

from shellguard.hooks.payload import BLOCK_EXIT_CODE, HookOutcome, HookPayload, parse_payload
from shellguard.hooks.pre_commit import run_pre_commit
from shellguard.hooks.pre_tool_use import run_pre_tool_use

__all__ = [
    "BLOCK_EXIT_CODE",
    "HookOutcome",
    "HookPayload",
    "parse_payload",
    "run_pre_commit",
    "run_pre_tool_use",
]
