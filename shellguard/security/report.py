"""Human-readable rendering of a verdict."""

from __future__ import annotations

from collections.abc import Sequence

from shellguard.core.models import Decision, Finding, Severity, Verdict

_RULE = "=" * 40
_MAX_LABEL_CHARS = 80
_LABEL_KEEP_CHARS = 77

_SECTIONS: tuple[tuple[Severity, str], ...] = (
    (Severity.CRITICAL, "[!!!] CRITICAL ISSUES (BLOCKED):"),
    (Severity.WARNING, "[!] WARNINGS:"),
    (Severity.INFO, "[i] NOTES:"),
)


def display_label(label: str) -> str:
    """Label cut to 77 chars plus ellipsis when over 80."""
    if len(label) > _MAX_LABEL_CHARS:
        return label[:_LABEL_KEEP_CHARS] + "..."
    return label


def _status_lines(decision: Decision, noun: str) -> list[str]:
    match decision:
        case Decision.BLOCK:
            return [
                f"STATUS: BLOCKED - {noun} will not execute",
                "Reason: Critical security issues detected",
            ]
        case Decision.WARN:
            return [
                "STATUS: ALLOWED with warnings",
                f"Note: {noun} will proceed. Review warnings above.",
            ]
        case Decision.ALLOW:
            return ["STATUS: ALLOWED"]


def render(label: str, findings: Sequence[Finding], verdict: Verdict, *, kind: str = "Command") -> str:
    """Format findings grouped by severity followed by the verdict status line."""
    lines = ["", _RULE, "[!] SECURITY SCAN RESULTS", _RULE, "", f"{kind}: {display_label(label)}", ""]

    for severity, heading in _SECTIONS:
        group = [f for f in findings if f.severity is severity]
        if not group:
            continue
        lines.append(heading)
        for finding in group:
            lines.append(f"  - {finding.category}: {finding.message}")
            if finding.matched_text:
                lines.append(f"    Match: {finding.matched_text}")
            if finding.recommendation:
                lines.append(f"    Recommendation: {finding.recommendation}")
        lines.append("")

    lines.extend(_status_lines(verdict.decision, kind))
    lines.append(_RULE)
    return "\n".join(lines) + "\n"
