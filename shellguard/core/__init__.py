"""Typed core models and ports."""

from shellguard.core.models import Decision, Finding, GuardResult, GuardStage, Severity, Tier, Verdict
from shellguard.core.ports import GuardPort

__all__ = [
    "Decision",
    "Finding",
    "GuardPort",
    "GuardResult",
    "GuardStage",
    "Severity",
    "Tier",
    "Verdict",
]
