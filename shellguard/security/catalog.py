"""Curated pattern tables for command and content checks."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from loguru import logger

from shellguard.core.errors import CatalogError
from shellguard.core.models import Tier

if TYPE_CHECKING:
    from shellguard.config.schema import RulesConfig


@dataclass(frozen=True, slots=True, kw_only=True)
class Rule:
    """One command rule in the blocking or warning tier."""

    category: str
    pattern: re.Pattern[str]
    tier: Tier
    message: str
    recommendation: str | None = None
    # Blocking-tier category that already covers the escalated form of this rule.
    blocked_as: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ArgumentPattern:
    """Credential shape expected inside `key=value` style command arguments."""

    category: str
    pattern: re.Pattern[str]


@dataclass(frozen=True, slots=True, kw_only=True)
class SecretPattern:
    """Credential shape searched for in free text and diffs."""

    name: str
    pattern: re.Pattern[str]


# Arguments of one shell segment. Bounded so each start position costs a
# fixed amount of work and matching stays linear in the command length.
_PUSH_ARGS = r"(?:[^\s|;]+\s+){0,16}?"
_FETCH_ARGS = r"[^\n|;]{0,512}+"

# (category, regex, flags, message)
_BLOCKING: tuple[tuple[str, str, int, str], ...] = (
    (
        "FORCE_PUSH_MAIN",
        rf"git\s+push\s+{_PUSH_ARGS}--force\s+(?:origin\s+)?(?:main|master)\b",
        re.IGNORECASE,
        "Force push to main/master branch detected",
    ),
    (
        "DANGEROUS_DELETE",
        r"rm\s+-rf\s+[/~]",
        0,
        "Recursive delete of root or home directory",
    ),
    (
        "FORK_BOMB",
        r":\(\)\s*\{\s*:\s*\|\s*:\s*&\s*\}\s*;\s*:",
        0,
        "Fork bomb detected",
    ),
    (
        "DISK_WRITE",
        r">\s*/dev/sd[a-z]",
        0,
        "Direct write to disk device",
    ),
    (
        "FORMAT_DISK",
        r"mkfs\.",
        0,
        "Disk formatting command detected",
    ),
)

_BLOCKED_RECOMMENDATION = "This operation is blocked for safety"

# (category, regex, flags, message, recommendation, blocked_as)
_WARNING: tuple[tuple[str, str, int, str, str, str | None], ...] = (
    (
        "FORCE_PUSH",
        rf"git\s+push\s+{_PUSH_ARGS}--force(?!-with-lease)",
        re.IGNORECASE,
        "Force push detected",
        "Use --force-with-lease for safer force pushes",
        "FORCE_PUSH_MAIN",
    ),
    (
        "HARD_RESET",
        r"git\s+reset\s+--hard",
        re.IGNORECASE,
        "Hard reset will discard uncommitted changes",
        "Consider using git stash first",
        None,
    ),
    (
        "GIT_CLEAN",
        r"git\s+clean\s+-[dxf]+",
        re.IGNORECASE,
        "Git clean will permanently delete untracked files",
        "Use -n (dry-run) flag first",
        None,
    ),
    (
        "SKIP_HOOKS",
        r"--no-verify",
        re.IGNORECASE,
        "Skipping git hooks",
        "Hooks are important for quality - skip only when necessary",
        None,
    ),
    (
        "PIPE_TO_SHELL",
        rf"(?:curl|wget)\s{_FETCH_ARGS}\|\s*(?:sudo\s+)?(?:ba)?sh\b",
        re.IGNORECASE,
        "Piping remote content to shell",
        "Download and inspect script before executing",
        None,
    ),
    (
        "PERMISSIVE_CHMOD",
        r"chmod\s+(?:-R\s+)?777",
        0,
        "Setting world-writable permissions",
        "Use more restrictive permissions like 755 or 644",
        None,
    ),
    (
        "NPM_PUBLISH",
        r"npm\s+publish",
        re.IGNORECASE,
        "Publishing to npm registry",
        "Ensure version is updated and tests pass",
        None,
    ),
    (
        "PROD_DEPLOY",
        r"vercel\s+--prod",
        re.IGNORECASE,
        "Production deployment detected",
        "Ensure all quality gates passed",
        None,
    ),
)

_ARGUMENT_SECRETS: tuple[tuple[str, str, int], ...] = (
    ("PASSWORD_ARG", r"(?:password|passwd|pwd)=\S+", re.IGNORECASE),
    ("API_KEY_ARG", r"(?:api[_-]?key|apikey)=\S+", re.IGNORECASE),
    ("SECRET_ARG", r"(?:token|secret|auth)=\S+", re.IGNORECASE),
    ("AWS_KEY_ARG", r"AKIA[0-9A-Z]{16}", 0),
    ("GITHUB_TOKEN_ARG", r"ghp_[A-Za-z0-9]{36}", 0),
    ("GOOGLE_API_KEY_ARG", r"AIza[0-9A-Za-z_-]{35}", 0),
)

_SECRETS: tuple[tuple[str, str, int], ...] = (
    ("AWS Access Key", r"AKIA[0-9A-Z]{16}", 0),
    # Bare 40-char base64 run; noisy by nature, kept for parity with common scanners.
    ("AWS Secret Key", r"(?<![A-Za-z0-9/+=])[A-Za-z0-9/+=]{40}(?![A-Za-z0-9/+=])", 0),
    ("GitHub Token", r"gh[pousr]_[A-Za-z0-9_]{36,}", 0),
    (
        "Generic API Key",
        r"(?:api[_-]?key|apikey|api_secret)['\":\s]*['\"]?([a-zA-Z0-9_\-]{20,})['\"]?",
        re.IGNORECASE,
    ),
    ("Private Key", r"-----BEGIN (?:RSA |EC |DSA |OPENSSH )?PRIVATE KEY-----", 0),
    ("JWT Token", r"(?<![A-Za-z0-9_-])eyJ[A-Za-z0-9_-]*\.eyJ[A-Za-z0-9_-]*\.[A-Za-z0-9_-]*", 0),
    ("Password in Code", r"(?:password|passwd|pwd)['\":\s]*['\"]([^'\"\n]{8,256})['\"]?", re.IGNORECASE),
    (
        "Vercel Token",
        r"(?:VERCEL_TOKEN|vercel_token)['\":\s]*['\"]?([a-zA-Z0-9_\-]{20,})['\"]?",
        re.IGNORECASE,
    ),
    ("Gemini API Key", r"AIza[0-9A-Za-z_-]{35}", 0),
)

_WHITELIST: tuple[tuple[str, int], ...] = (
    (r"process\.env\.", 0),
    (r"\$\{[^}\n]{0,256}\}", 0),
    (r"<[^>\n]{0,256}API_KEY[^>\n]{0,256}>", 0),
    (r"example|sample|test|mock|fake|dummy", re.IGNORECASE),
)


@dataclass(frozen=True, slots=True, kw_only=True)
class PatternCatalog:
    """Immutable rule tables shared read-only by every evaluation."""

    blocking: tuple[Rule, ...] = ()
    warning: tuple[Rule, ...] = ()
    arguments: tuple[ArgumentPattern, ...] = ()
    secrets: tuple[SecretPattern, ...] = ()
    whitelist: tuple[re.Pattern[str], ...] = ()
    skipped: tuple[str, ...] = field(default=())

    def rules(self, tier: Tier) -> tuple[Rule, ...]:
        """Ordered command rules for one tier."""
        match tier:
            case Tier.BLOCKING:
                return self.blocking
            case Tier.WARNING:
                return self.warning

    @property
    def is_empty(self) -> bool:
        return not (self.blocking or self.warning or self.arguments or self.secrets)


def _compile_builtin(pattern: str, flags: int) -> re.Pattern[str]:
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise CatalogError(f"built-in pattern {pattern!r} failed to compile: {e}") from e


def _default_blocking() -> list[Rule]:
    return [
        Rule(
            category=category,
            pattern=_compile_builtin(regex, flags),
            tier=Tier.BLOCKING,
            message=message,
            recommendation=_BLOCKED_RECOMMENDATION,
        )
        for category, regex, flags, message in _BLOCKING
    ]


def _default_warning() -> list[Rule]:
    return [
        Rule(
            category=category,
            pattern=_compile_builtin(regex, flags),
            tier=Tier.WARNING,
            message=message,
            recommendation=recommendation,
            blocked_as=blocked_as,
        )
        for category, regex, flags, message, recommendation, blocked_as in _WARNING
    ]


def default_catalog() -> PatternCatalog:
    """Catalog with the built-in tables only."""
    return PatternCatalog(
        blocking=tuple(_default_blocking()),
        warning=tuple(_default_warning()),
        arguments=tuple(
            ArgumentPattern(category=c, pattern=_compile_builtin(r, f)) for c, r, f in _ARGUMENT_SECRETS
        ),
        secrets=tuple(SecretPattern(name=n, pattern=_compile_builtin(r, f)) for n, r, f in _SECRETS),
        whitelist=tuple(_compile_builtin(r, f) for r, f in _WHITELIST),
    )


def build_catalog(rules_config: RulesConfig | None = None) -> PatternCatalog:
    """Build the process-wide catalog from the built-ins plus config adjustments.

    Custom rules are appended after the built-ins of their tier. Entries whose
    pattern does not compile are skipped and reported in ``skipped``.
    """
    base = default_catalog()
    if rules_config is None:
        return base

    disabled = {c.strip().upper() for c in rules_config.disabled}
    blocking = [r for r in base.blocking if r.category not in disabled]
    warning = [r for r in base.warning if r.category not in disabled]
    arguments = [a for a in base.arguments if a.category not in disabled]
    secrets = [s for s in base.secrets if s.name.upper() not in disabled]
    whitelist = list(base.whitelist)
    skipped: list[str] = []

    for custom in rules_config.custom:
        if custom.category in disabled:
            continue
        flags = re.IGNORECASE if custom.ignore_case else 0
        try:
            compiled = re.compile(custom.pattern, flags)
        except re.error as e:
            logger.warning("catalog_rule_skipped category={} pattern={!r} error={}", custom.category, custom.pattern, e)
            skipped.append(custom.category)
            continue
        tier = Tier(custom.tier)
        rule = Rule(
            category=custom.category,
            pattern=compiled,
            tier=tier,
            message=custom.message or f"Custom rule {custom.category} matched",
            recommendation=custom.recommendation or (_BLOCKED_RECOMMENDATION if tier is Tier.BLOCKING else None),
            blocked_as=custom.blocked_as if tier is Tier.WARNING else None,
        )
        (blocking if tier is Tier.BLOCKING else warning).append(rule)

    for raw in rules_config.extra_whitelist:
        try:
            whitelist.append(re.compile(raw))
        except re.error as e:
            logger.warning("catalog_whitelist_skipped pattern={!r} error={}", raw, e)
            skipped.append(f"whitelist:{raw}")

    return PatternCatalog(
        blocking=tuple(blocking),
        warning=tuple(warning),
        arguments=tuple(arguments),
        secrets=tuple(secrets),
        whitelist=tuple(whitelist),
        skipped=tuple(skipped),
    )
