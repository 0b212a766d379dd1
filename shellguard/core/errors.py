"""Exception hierarchy for shellguard."""

from __future__ import annotations


class GuardError(Exception):
    """Base class for shellguard errors."""


class CatalogError(GuardError):
    """Built-in pattern tables failed to compile."""


class PayloadError(GuardError):
    """Host hook payload could not be parsed."""
