"""Configuration schema using Pydantic."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shellguard.config.defaults import DEFAULT_COMMIT, DEFAULT_GUARD, DEFAULT_LIMITS

FailMode = Literal["open", "closed", "mixed"]


class GuardSettings(BaseModel):
    """Engine switches and fault policy."""

    enabled: bool = bool(DEFAULT_GUARD["enabled"])
    # open: faults let the operation proceed, closed: faults block,
    # mixed: command checks closed, content checks open
    fail_mode: FailMode = str(DEFAULT_GUARD["fail_mode"])
    log_level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = str(
        DEFAULT_GUARD["log_level"]
    )


class LimitsConfig(BaseModel):
    """Input-size guards that bound regex matching cost."""

    max_command_chars: int = Field(default=int(DEFAULT_LIMITS["max_command_chars"]), ge=1)
    max_content_bytes: int = Field(default=int(DEFAULT_LIMITS["max_content_bytes"]), ge=1)


class CustomRuleConfig(BaseModel):
    """One project-defined command rule appended to its tier."""

    model_config = ConfigDict(extra="ignore")

    category: str
    pattern: str
    tier: Literal["blocking", "warning"] = "warning"
    message: str = ""
    recommendation: str | None = None
    ignore_case: bool = True
    blocked_as: str | None = None

    @field_validator("category")
    @classmethod
    def _normalize_category(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("category must not be empty")
        return value


class RulesConfig(BaseModel):
    """Catalog adjustments on top of the built-in tables."""

    disabled: list[str] = Field(default_factory=list)
    custom: list[CustomRuleConfig] = Field(default_factory=list)
    extra_whitelist: list[str] = Field(default_factory=list)


class CommitConfig(BaseModel):
    """Pre-commit review behaviour."""

    enforce: bool = bool(DEFAULT_COMMIT["enforce"])
    conventional: bool = bool(DEFAULT_COMMIT["conventional"])
    diff_timeout_seconds: float = Field(default=float(DEFAULT_COMMIT["diff_timeout_seconds"]), gt=0)


class Config(BaseSettings):
    """Root configuration for shellguard."""
    model_config = SettingsConfigDict(
        extra="ignore",
        populate_by_name=True,
        env_prefix="SHELLGUARD_",
        env_nested_delimiter="__",
    )

    config_version: int = 1
    guard: GuardSettings = Field(default_factory=GuardSettings)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)
    rules: RulesConfig = Field(default_factory=RulesConfig)
    commit: CommitConfig = Field(default_factory=CommitConfig)
