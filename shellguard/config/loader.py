"""Read, migrate and write the camelCase JSON config file."""

from __future__ import annotations

import json
import os
import re
import shutil
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from loguru import logger

from shellguard.config.defaults import apply_missing_defaults
from shellguard.config.schema import Config

CONFIG_VERSION = 1

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def get_config_path() -> Path:
    return Path.home() / ".shellguard" / "config.json"


def load_config(config_path: Path | None = None) -> Config:
    """Load the config file, falling back to defaults when absent or invalid.

    Files written by older releases are migrated in place; the previous
    contents are kept next to the file as a timestamped backup.
    """
    path = config_path or get_config_path()
    if not path.exists():
        return Config()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        upgraded, changed = _migrate_config_with_change(raw)
        config = Config.model_validate(convert_keys(upgraded))
    except (json.JSONDecodeError, ValueError) as e:
        logger.warning("config_load_failed path={} error={}", path, e)
        print(f"Warning: could not read config at {path}: {e}")
        print("Falling back to built-in defaults.")
        return Config()

    if changed:
        logger.info("config_migrated path={} version={}", path, CONFIG_VERSION)
        _backup_config(path)
        _atomic_write_config(path, config)
    return config


def save_config(config: Config, config_path: Path | None = None) -> None:
    _atomic_write_config(config_path or get_config_path(), config)


def _lift_legacy_keys(snake: dict[str, Any]) -> None:
    """Move pre-versioned root keys into their sections."""
    guard = snake.setdefault("guard", {})
    rules = snake.setdefault("rules", {})
    if not isinstance(guard, dict) or not isinstance(rules, dict):
        raise ValueError("config sections must be JSON objects")

    fail_mode = snake.pop("fail_mode", None)
    fail_open = snake.pop("fail_open", None)
    if "fail_mode" not in guard:
        if fail_mode is not None:
            guard["fail_mode"] = fail_mode
        elif fail_open is not None:
            guard["fail_mode"] = "open" if fail_open else "closed"

    disabled = snake.pop("disabled_rules", None)
    if disabled is not None and "disabled" not in rules:
        rules["disabled"] = disabled


def _migrate_config_with_change(data: Any) -> tuple[dict[str, Any], bool]:
    """Return ``(camelCase data at CONFIG_VERSION, whether anything changed)``."""
    if not isinstance(data, dict):
        raise ValueError("Config root must be a JSON object")

    before = _fingerprint(data)
    snake = convert_keys(data)
    _lift_legacy_keys(snake)
    apply_missing_defaults(snake)
    snake["config_version"] = CONFIG_VERSION

    upgraded = convert_to_camel(snake)
    return upgraded, _fingerprint(upgraded) != before


def _fingerprint(data: Any) -> str:
    return json.dumps(data, sort_keys=True, separators=(",", ":"))


def _backup_config(path: Path) -> None:
    stamp = datetime.now(UTC).strftime("%Y%m%d-%H%M%S")
    backup = path.with_name(f"{path.stem}.backup.{stamp}{path.suffix}")
    shutil.copy2(path, backup)
    _restrict(backup)


def _atomic_write_config(path: Path, config: Config) -> None:
    """Write via a sibling temp file and rename, owner-readable only."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(convert_to_camel(config.model_dump(mode="json")), indent=2)
    staging = path.with_name(f".{path.name}.tmp-{os.getpid()}")
    staging.write_text(payload + "\n", encoding="utf-8")
    _restrict(staging)
    os.replace(staging, path)


def _restrict(path: Path) -> None:
    try:
        path.chmod(0o600)
    except OSError as e:
        # some filesystems (e.g. mounted Windows shares) ignore POSIX modes
        logger.debug("config_chmod_failed path={} error={}", path, e)


def convert_keys(data: Any) -> Any:
    """Recursively rename dict keys from camelCase to snake_case."""
    if isinstance(data, dict):
        return {camel_to_snake(key): convert_keys(value) for key, value in data.items()}
    if isinstance(data, list):
        return [convert_keys(item) for item in data]
    return data


def convert_to_camel(data: Any) -> Any:
    """Recursively rename dict keys from snake_case to camelCase."""
    if isinstance(data, dict):
        return {snake_to_camel(key): convert_to_camel(value) for key, value in data.items()}
    if isinstance(data, list):
        return [convert_to_camel(item) for item in data]
    return data


def camel_to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)
