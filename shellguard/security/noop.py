"""No-op guard implementation."""

from __future__ import annotations

from shellguard.core.models import Decision, GuardResult, Verdict
from shellguard.core.ports import GuardPort

_ALLOW = Verdict(decision=Decision.ALLOW)


class NoopGuard(GuardPort):
    """GuardPort implementation that allows everything."""

    def check_command(self, command: str | None, context: dict[str, object] | None = None) -> GuardResult:
        del command, context
        return GuardResult(stage="command", verdict=_ALLOW)

    def check_content(
        self,
        content: str | None,
        context: dict[str, object] | None = None,
        *,
        label: str = "content",
    ) -> GuardResult:
        del content, context, label
        return GuardResult(stage="content", verdict=_ALLOW)

    def check_commit(
        self,
        command: str,
        staged_content: str,
        context: dict[str, object] | None = None,
    ) -> GuardResult:
        del command, staged_content, context
        return GuardResult(stage="commit", verdict=_ALLOW)
