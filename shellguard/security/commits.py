"""Git commit command helpers."""

from __future__ import annotations

import re

from shellguard.core.models import Finding, Severity

CONVENTIONAL_TYPES = (
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "build",
    "ci",
    "chore",
    "revert",
)

_GIT_COMMIT = re.compile(r"git\s+commit\b")
_MESSAGE_FLAG = re.compile(r"""-m\s+(?:"([^"]+)"|'([^']+)')""")
_CONVENTIONAL = re.compile(rf"^(?:{'|'.join(CONVENTIONAL_TYPES)})(?:\(.+\))?!?:\s.+")


def is_git_commit(command: str) -> bool:
    return bool(_GIT_COMMIT.search(command or ""))


def commit_message(command: str) -> str | None:
    """Message passed with the first `-m` flag, if any."""
    match = _MESSAGE_FLAG.search(command or "")
    if match is None:
        return None
    return match.group(1) or match.group(2)


def validate_conventional_commit(command: str) -> bool:
    """True when the `-m` message follows conventional commits, or no `-m` is given."""
    message = commit_message(command)
    if message is None:
        return True
    return bool(_CONVENTIONAL.match(message))


def conventional_commit_finding(command: str) -> Finding | None:
    if validate_conventional_commit(command):
        return None
    return Finding(
        severity=Severity.WARNING,
        category="CONVENTIONAL_COMMIT",
        message="Message does not follow conventional commits format",
        recommendation=f"Expected: type(scope): message; types: {', '.join(CONVENTIONAL_TYPES)}",
    )
