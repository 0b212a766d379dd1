"""Port interfaces implemented by the guard engine and its no-op twin."""

from __future__ import annotations

from typing import Protocol

from shellguard.core.models import GuardResult


class GuardPort(Protocol):
    """Policy checks consumed by the host hooks and the CLI."""

    def check_command(self, command: str | None, context: dict[str, object] | None = None) -> GuardResult:
        """Evaluate one shell command before execution."""

    def check_content(
        self,
        content: str | None,
        context: dict[str, object] | None = None,
        *,
        label: str = "content",
    ) -> GuardResult:
        """Scan a text or diff blob for secrets."""

    def check_commit(
        self,
        command: str,
        staged_content: str,
        context: dict[str, object] | None = None,
    ) -> GuardResult:
        """Review a git commit: staged diff secrets plus message conventions."""
