"""Policy engine facade used by hooks and the CLI."""

from __future__ import annotations

import re

from loguru import logger

from shellguard.config.schema import Config
from shellguard.core.models import Decision, Finding, GuardResult, GuardStage, Severity, Verdict
from shellguard.core.ports import GuardPort
from shellguard.security.analyzer import CommandAnalyzer
from shellguard.security.catalog import PatternCatalog, build_catalog
from shellguard.security.commits import conventional_commit_finding
from shellguard.security.report import render
from shellguard.security.scanner import SecretScanner
from shellguard.security.verdict import compose

_SENSITIVE_CONTEXT_KEYS = (
    "password",
    "secret",
    "token",
    "api_key",
    "apikey",
    "auth",
    "credential",
    "private_key",
    "cookie",
)

_MAX_LOG_VALUE_CHARS = 512

_KIND: dict[GuardStage, str] = {
    "command": "Command",
    "content": "Content",
    "commit": "Commit",
}


class GuardEngine(GuardPort):
    """Staged policy checks for commands, content blobs and commits.

    ``make_guard`` hands out ``NoopGuard`` when ``guard.enabled`` is off, but
    the engine still honours the switch itself so callers that build it
    directly (embedders, a config reloaded at runtime) get the same answer.
    """

    def __init__(self, config: Config, catalog: PatternCatalog | None = None):
        self._config = config
        self._catalog = catalog if catalog is not None else build_catalog(config.rules)
        self._analyzer = CommandAnalyzer(self._catalog, max_command_chars=config.limits.max_command_chars)
        self._scanner = SecretScanner(self._catalog, max_content_bytes=config.limits.max_content_bytes)
        self._redactors: tuple[re.Pattern[str], ...] = tuple(
            [s.pattern for s in self._catalog.secrets] + [a.pattern for a in self._catalog.arguments]
        )

        if self._catalog.is_empty:
            logger.warning("guard_catalog_empty every evaluation will allow")
        if self._catalog.skipped:
            logger.warning("guard_catalog_skipped entries={}", list(self._catalog.skipped))

    @property
    def catalog(self) -> PatternCatalog:
        return self._catalog

    def check_command(self, command: str | None, context: dict[str, object] | None = None) -> GuardResult:
        label = command or ""
        if not self._config.guard.enabled:
            return self._allow(stage="command", label=label)
        try:
            verdict = compose(self._analyzer.analyze(command))
        except Exception as e:
            return self._failure(stage="command", label=label, error=e, context=context)
        return self._finish(stage="command", label=label, verdict=verdict, context=context)

    def check_content(
        self,
        content: str | None,
        context: dict[str, object] | None = None,
        *,
        label: str = "content",
    ) -> GuardResult:
        if not self._config.guard.enabled:
            return self._allow(stage="content", label=label)
        try:
            verdict = compose(self._scanner.scan(content))
        except Exception as e:
            return self._failure(stage="content", label=label, error=e, context=context)
        return self._finish(stage="content", label=label, verdict=verdict, context=context)

    def check_commit(
        self,
        command: str,
        staged_content: str,
        context: dict[str, object] | None = None,
    ) -> GuardResult:
        if not self._config.guard.enabled:
            return self._allow(stage="commit", label=command)
        try:
            findings = self._scanner.scan(staged_content)
            if self._config.commit.conventional:
                convention = conventional_commit_finding(command)
                if convention is not None:
                    findings.append(convention)
            verdict = compose(findings)
        except Exception as e:
            return self._failure(stage="commit", label=command, error=e, context=context)
        return self._finish(stage="commit", label=command, verdict=verdict, context=context)

    def _finish(
        self,
        *,
        stage: GuardStage,
        label: str,
        verdict: Verdict,
        context: dict[str, object] | None,
    ) -> GuardResult:
        result = GuardResult(
            stage=stage,
            verdict=verdict,
            report=render(self._sanitize_string(label), verdict.findings, verdict, kind=_KIND[stage]),
        )
        self._log(result, context)
        return result

    def _allow(self, *, stage: GuardStage, label: str) -> GuardResult:
        verdict = Verdict(decision=Decision.ALLOW)
        return GuardResult(stage=stage, verdict=verdict, report=render(label, (), verdict, kind=_KIND[stage]))

    def _fails_closed(self, stage: GuardStage) -> bool:
        match self._config.guard.fail_mode:
            case "closed":
                return True
            case "open":
                return False
            case "mixed":
                # commands protect against destructive operations; content review only advises
                return stage == "command"

    def _failure(
        self,
        *,
        stage: GuardStage,
        label: str,
        error: Exception,
        context: dict[str, object] | None,
    ) -> GuardResult:
        safe_context = self._sanitize_context(context)
        logger.warning(
            "guard_error stage={} fail_mode={} error={} context={}",
            stage,
            self._config.guard.fail_mode,
            error,
            safe_context,
        )

        if self._fails_closed(stage):
            finding = Finding(
                severity=Severity.CRITICAL,
                category="ENGINE_ERROR",
                message=f"Policy engine failed ({type(error).__name__}); failing closed",
                recommendation="Fix the guard configuration or retry after reviewing the operation",
            )
        else:
            finding = Finding(
                severity=Severity.INFO,
                category="ENGINE_ERROR",
                message=f"Policy engine failed ({type(error).__name__}); failing open",
                recommendation="Review the operation manually",
            )
        return self._finish(stage=stage, label=label, verdict=compose([finding]), context=context)

    def _log(self, result: GuardResult, context: dict[str, object] | None) -> None:
        if result.verdict.decision is Decision.ALLOW:
            return
        logger.info(
            "guard_decision stage={} decision={} categories={} context={}",
            result.stage,
            result.verdict.decision.value,
            list(result.verdict.categories),
            self._sanitize_context(context),
        )

    def _sanitize_context(self, context: dict[str, object] | None) -> dict[str, object]:
        if not context:
            return {}
        return {str(key): self._sanitize_value(value, parent_key=str(key)) for key, value in context.items()}

    def _sanitize_value(self, value: object, *, parent_key: str = "") -> object:
        lowered_key = parent_key.lower()
        if any(token in lowered_key for token in _SENSITIVE_CONTEXT_KEYS):
            return "[REDACTED]"

        if isinstance(value, dict):
            return {str(k): self._sanitize_value(v, parent_key=str(k)) for k, v in value.items()}

        if isinstance(value, list):
            return [self._sanitize_value(item, parent_key=parent_key) for item in value]

        if isinstance(value, tuple):
            return tuple(self._sanitize_value(item, parent_key=parent_key) for item in value)

        if isinstance(value, str):
            return self._sanitize_string(value)

        return value

    def _sanitize_string(self, text: str) -> str:
        # bounded slack so a secret straddling the cut is still redacted
        sanitized = text[: _MAX_LOG_VALUE_CHARS + 128]
        for pattern in self._redactors:
            sanitized = pattern.sub("[REDACTED]", sanitized)
        if len(text) > _MAX_LOG_VALUE_CHARS or len(sanitized) > _MAX_LOG_VALUE_CHARS:
            return sanitized[:_MAX_LOG_VALUE_CHARS] + "...(truncated)"
        return sanitized
