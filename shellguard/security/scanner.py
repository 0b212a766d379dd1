"""Secret scanning for free text and staged diffs."""

from __future__ import annotations

import re

from loguru import logger

from shellguard.core.models import Finding, Severity
from shellguard.security.catalog import PatternCatalog

PREVIEW_CHARS = 20
TRUNCATION_MARKER = "..."

# Dotted identifier path a match may hang off, e.g. `process.env.` or `os.environ.`
# Applied to the reversed window so it anchors at the match and runs once.
_ATTACHED_PREFIX = re.compile(r"[A-Za-z0-9_.$]*")
_PREFIX_WINDOW = 64


def preview(match: str) -> str:
    """Safe preview of a matched secret; never the whole value when it is long."""
    if len(match) > PREVIEW_CHARS:
        return match[:PREVIEW_CHARS] + TRUNCATION_MARKER
    return match


class SecretScanner:
    """Scan text for credential-shaped substrings with whitelist suppression."""

    def __init__(self, catalog: PatternCatalog, *, max_content_bytes: int = 5 * 1024 * 1024):
        self._catalog = catalog
        self._max_content_bytes = max_content_bytes

    def scan(self, text: str | None) -> list[Finding]:
        if not text:
            return []

        size = len(text.encode("utf-8", errors="replace"))
        if size > self._max_content_bytes:
            logger.warning("secret_scan_skipped size={} limit={}", size, self._max_content_bytes)
            return [
                Finding(
                    severity=Severity.INFO,
                    category="SCAN_SKIPPED",
                    message=f"Content of {size} bytes exceeds the {self._max_content_bytes} byte scan limit",
                    recommendation="Review large changes manually or raise limits.max_content_bytes",
                )
            ]

        findings: list[Finding] = []
        for secret in self._catalog.secrets:
            for match in secret.pattern.finditer(text):
                value = match.group(0)
                if self._is_whitelisted(self._candidate(text, match)):
                    continue
                findings.append(
                    Finding(
                        severity=Severity.CRITICAL,
                        category=secret.name,
                        message=f"Potential {secret.name} detected",
                        recommendation="Move the value to an environment variable or secret store",
                        matched_text=preview(value),
                    )
                )
        return findings

    def _is_whitelisted(self, candidate: str) -> bool:
        return any(pattern.search(candidate) for pattern in self._catalog.whitelist)

    @staticmethod
    def _candidate(text: str, match: re.Match[str]) -> str:
        """Matched substring plus the identifier path it is attached to."""
        start = match.start()
        window = text[max(0, start - _PREFIX_WINDOW) : start]
        attached = _ATTACHED_PREFIX.match(window[::-1])
        return attached.group(0)[::-1] + match.group(0)
