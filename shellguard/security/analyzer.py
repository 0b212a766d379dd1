"""Command analysis against the blocking, warning and argument tiers."""

from __future__ import annotations

from loguru import logger

from shellguard.core.models import Finding, Severity, Tier
from shellguard.security.catalog import PatternCatalog

ARGUMENT_SECRET_MESSAGE = "Potential secret found in command arguments"
ARGUMENT_SECRET_RECOMMENDATION = "Use environment variables instead of inline secrets"


class CommandAnalyzer:
    """Run one command string through every command tier of a catalog.

    Findings come back in a fixed order: blocking hits, then warning hits
    (minus categories already reported as critical), then argument secrets.
    Every tier is evaluated; nothing short-circuits.
    """

    def __init__(self, catalog: PatternCatalog, *, max_command_chars: int = 100_000):
        self._catalog = catalog
        self._max_command_chars = max_command_chars

    def analyze(self, command: str | None) -> list[Finding]:
        if not command or not command.strip():
            return []

        if len(command) > self._max_command_chars:
            logger.warning("command_analysis_refused length={} limit={}", len(command), self._max_command_chars)
            return [
                Finding(
                    severity=Severity.CRITICAL,
                    category="COMMAND_TOO_LARGE",
                    message=f"Command of {len(command)} characters exceeds the {self._max_command_chars} character limit",
                    recommendation="Split the command or move it into a reviewed script",
                )
            ]

        findings: list[Finding] = []
        for rule in self._catalog.rules(Tier.BLOCKING):
            if rule.pattern.search(command):
                findings.append(
                    Finding(
                        severity=Severity.CRITICAL,
                        category=rule.category,
                        message=rule.message,
                        recommendation=rule.recommendation,
                    )
                )

        critical = {f.category for f in findings}
        for rule in self._catalog.rules(Tier.WARNING):
            if not rule.pattern.search(command):
                continue
            if rule.category in critical or (rule.blocked_as and rule.blocked_as in critical):
                continue
            findings.append(
                Finding(
                    severity=Severity.WARNING,
                    category=rule.category,
                    message=rule.message,
                    recommendation=rule.recommendation,
                )
            )

        for arg in self._catalog.arguments:
            if arg.pattern.search(command):
                findings.append(
                    Finding(
                        severity=Severity.CRITICAL,
                        category=arg.category,
                        message=ARGUMENT_SECRET_MESSAGE,
                        recommendation=ARGUMENT_SECRET_RECOMMENDATION,
                    )
                )
        return findings
