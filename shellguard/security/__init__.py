"""Command and content policy evaluation."""

from shellguard.security.analyzer import CommandAnalyzer
from shellguard.security.catalog import PatternCatalog, build_catalog, default_catalog
from shellguard.security.engine import GuardEngine
from shellguard.security.noop import NoopGuard
from shellguard.security.report import render
from shellguard.security.scanner import SecretScanner
from shellguard.security.verdict import compose

__all__ = [
    "CommandAnalyzer",
    "GuardEngine",
    "NoopGuard",
    "PatternCatalog",
    "SecretScanner",
    "build_catalog",
    "compose",
    "default_catalog",
    "render",
]
