"""Domain models shared by the guard engine, hooks and CLI."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Literal, TypeAlias

GuardStage: TypeAlias = Literal["command", "content", "commit"]


class Tier(StrEnum):
    """Catalog tier a command rule belongs to."""

    BLOCKING = "blocking"
    WARNING = "warning"


class Severity(StrEnum):
    """Severity of one finding."""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class Decision(StrEnum):
    """Aggregate decision for one evaluation."""

    ALLOW = "allow"
    WARN = "warn"
    BLOCK = "block"


@dataclass(frozen=True, slots=True, kw_only=True)
class Finding:
    """One rule or pattern hit surfaced during an evaluation."""

    severity: Severity
    category: str
    message: str
    recommendation: str | None = None
    matched_text: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity.value,
            "category": self.category,
            "message": self.message,
            "recommendation": self.recommendation,
            "matched_text": self.matched_text,
        }


@dataclass(frozen=True, slots=True, kw_only=True)
class Verdict:
    """Decision plus the ordered findings that justify it."""

    decision: Decision
    findings: tuple[Finding, ...] = ()

    @property
    def blocked(self) -> bool:
        """True when the operation must not proceed."""
        return self.decision is Decision.BLOCK

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(f.category for f in self.findings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "decision": self.decision.value,
            "findings": [f.to_dict() for f in self.findings],
        }


@dataclass(frozen=True, slots=True, kw_only=True)
class GuardResult:
    """Engine result for one stage check, with the report ready to display."""

    stage: GuardStage
    verdict: Verdict
    report: str = ""

    @property
    def blocked(self) -> bool:
        return self.verdict.blocked
