"""Git plumbing for the pre-commit hook."""

from __future__ import annotations

import subprocess
from pathlib import Path

from loguru import logger


def staged_diff(cwd: str | Path, timeout: float = 10.0) -> str:
    """Return `git diff --cached` output, or an empty string when git fails."""
    try:
        result = subprocess.run(
            ["git", "diff", "--cached"],
            cwd=str(cwd),
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning("staged_diff_failed cwd={} error={}", cwd, e)
        return ""
    if result.returncode != 0:
        logger.warning("staged_diff_failed cwd={} returncode={} stderr={}", cwd, result.returncode, result.stderr.strip())
        return ""
    return result.stdout
