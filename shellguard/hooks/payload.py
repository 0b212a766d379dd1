"""Host hook payload parsing."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from shellguard.core.errors import PayloadError


class HookPayload(BaseModel):
    """Tool invocation handed to a hook on stdin."""

    model_config = ConfigDict(extra="ignore")

    tool_name: str = ""
    tool_input: dict[str, Any] = Field(default_factory=dict)
    session_id: str | None = None
    cwd: str | None = None

    @property
    def command(self) -> str:
        value = self.tool_input.get("command")
        return value if isinstance(value, str) else ""

    def context(self) -> dict[str, object]:
        """Routing metadata for log lines; never the command itself."""
        return {"tool_name": self.tool_name, "session_id": self.session_id, "cwd": self.cwd}


@dataclass(frozen=True, slots=True, kw_only=True)
class HookOutcome:
    """What the hook process should print and exit with."""

    exit_code: int = 0
    stdout: str = ""
    stderr: str = ""


BLOCK_EXIT_CODE = 2


def parse_payload(raw: str) -> HookPayload:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise PayloadError(f"payload is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise PayloadError("payload root must be a JSON object")
    try:
        return HookPayload.model_validate(data)
    except ValidationError as e:
        raise PayloadError(f"payload has unexpected shape: {e.error_count()} error(s)") from e


def block_signal(categories: tuple[str, ...], reason: str = "Critical security issue detected") -> str:
    """JSON decision line consumed by the host pipeline."""
    return json.dumps({"decision": "block", "reason": reason, "categories": list(categories)})
