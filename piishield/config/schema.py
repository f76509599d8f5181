"""Pydantic v2 models for piishield configuration.

Defines the schema for piishield.yaml: traversal limits, extra field-name
rules layered on top of the builtin classification table, and the default
log sink settings.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from piishield.sanitize.models import ClassificationRule, PIICategory
from piishield.sanitize.rules import build_rules, normalize_key

# Ceiling for max_depth: each nesting level costs interpreter stack frames,
# and the walk must stay well inside the default recursion limit.
MAX_DEPTH_LIMIT = 256


class LogLevel(str, Enum):
    """Severity levels understood by the log sink, lowest first."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def priority(self) -> int:
        return _LEVEL_PRIORITY[self]


_LEVEL_PRIORITY: dict[LogLevel, int] = {
    LogLevel.DEBUG: 0,
    LogLevel.INFO: 1,
    LogLevel.WARN: 2,
    LogLevel.ERROR: 3,
}


class FieldRuleSpec(BaseModel):
    """An extra field-name rule declared in configuration.

    YAML form::

        extra_fields:
          - pattern: loyaltyNumber
            category: generic
          - pattern: vin
            category: generic
            exact: true
    """

    model_config = ConfigDict(frozen=True)

    pattern: str
    category: PIICategory = PIICategory.GENERIC
    exact: bool = False

    @field_validator("pattern")
    @classmethod
    def normalize_pattern(cls, value: str) -> str:
        normalized = normalize_key(value)
        if not normalized:
            msg = "Field rule pattern must contain at least one letter or digit"
            raise ValueError(msg)
        return normalized

    def to_rule(self) -> ClassificationRule:
        return ClassificationRule(self.pattern, self.category, exact=self.exact)


class LoggingConfig(BaseModel):
    """Settings for the default structured log sink."""

    model_config = ConfigDict(frozen=True)

    level: LogLevel = LogLevel.INFO
    log_file: Path | None = None
    console: bool = True


class PIIShieldConfig(BaseModel):
    """Top-level piishield configuration.

    Every field has a default, so ``PIIShieldConfig()`` is the builtin
    behaviour and an empty ``version``-only YAML file is valid.
    """

    model_config = ConfigDict(frozen=True)

    version: str = "1.0"
    max_depth: int = Field(default=64, ge=1, le=MAX_DEPTH_LIMIT)
    scan_strings: bool = True
    extra_fields: list[FieldRuleSpec] = Field(default_factory=list)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def rules(self) -> tuple[ClassificationRule, ...]:
        """Builtin classification rules followed by the configured extras."""
        return build_rules(spec.to_rule() for spec in self.extra_fields)


DEFAULT_CONFIG = PIIShieldConfig()
