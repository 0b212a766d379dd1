"""Centralized defaults for generated/migrated config files."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

DEFAULT_GUARD: dict[str, Any] = {
    "enabled": True,
    "fail_mode": "mixed",
    "log_level": "WARNING",
}

DEFAULT_LIMITS: dict[str, Any] = {
    "max_command_chars": 100_000,
    "max_content_bytes": 5 * 1024 * 1024,
}

DEFAULT_RULES: dict[str, Any] = {
    "disabled": [],
    "custom": [],
    "extra_whitelist": [],
}

DEFAULT_COMMIT: dict[str, Any] = {
    "enforce": False,
    "conventional": True,
    "diff_timeout_seconds": 10.0,
}

_SECTIONS: dict[str, dict[str, Any]] = {
    "guard": DEFAULT_GUARD,
    "limits": DEFAULT_LIMITS,
    "rules": DEFAULT_RULES,
    "commit": DEFAULT_COMMIT,
}


def default_section(name: str) -> dict[str, Any]:
    """Return a deep-copied default payload for one top-level section."""
    return deepcopy(_SECTIONS[name])


def apply_missing_defaults(snake_config: dict[str, Any]) -> None:
    """Inject missing config defaults without overriding existing user values."""
    if not isinstance(snake_config, dict):
        return

    for name in _SECTIONS:
        seeded = default_section(name)
        current = snake_config.get(name)
        if not isinstance(current, dict):
            snake_config[name] = seeded
            continue
        for k, v in seeded.items():
            if isinstance(v, list):
                if not isinstance(current.get(k), list):
                    current[k] = list(v)
            else:
                current.setdefault(k, v)
