"""Merge findings into one allow/warn/block verdict."""

from __future__ import annotations

from collections.abc import Iterable
from typing import assert_never

from shellguard.core.models import Decision, Finding, Severity, Verdict


def compose(findings: Iterable[Finding]) -> Verdict:
    """Block on any critical finding; warn on any other finding; else allow."""
    ordered = tuple(findings)
    has_critical = False
    has_notice = False
    for finding in ordered:
        match finding.severity:
            case Severity.CRITICAL:
                has_critical = True
            case Severity.WARNING | Severity.INFO:
                has_notice = True
            case _:
                assert_never(finding.severity)

    if has_critical:
        decision = Decision.BLOCK
    elif has_notice:
        decision = Decision.WARN
    else:
        decision = Decision.ALLOW
    return Verdict(decision=decision, findings=ordered)
