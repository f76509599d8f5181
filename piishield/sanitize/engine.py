"""Sanitize engine — the structured-value redactor.

``redact_pii`` is the single entry point for redaction.  The safe logger,
the CLI, and application code all call through this module.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from piishield.config.schema import DEFAULT_CONFIG, MAX_DEPTH_LIMIT, PIIShieldConfig
from piishield.sanitize.detectors.regex_detector import detect_all
from piishield.sanitize.models import (
    CIRCULAR_TAG,
    MAX_DEPTH_TAG,
    ClassificationRule,
    SanitizeResult,
)
from piishield.sanitize.redactors import field_tag, redact_text
from piishield.sanitize.rules import classify_field
from piishield.sanitize.values import CONTAINER_KINDS, ValueKind, kind_of


@dataclass(frozen=True)
class WalkSettings:
    """Per-call traversal settings, resolved once from the config.

    Shared by the redactor and the detector so both walk the same shapes.
    """

    rules: tuple[ClassificationRule, ...]
    max_depth: int
    scan_strings: bool

    @classmethod
    def from_config(cls, config: PIIShieldConfig | None) -> WalkSettings:
        if config is None:
            config = DEFAULT_CONFIG
        return cls(
            rules=config.rules,
            max_depth=min(config.max_depth, MAX_DEPTH_LIMIT),
            scan_strings=config.scan_strings,
        )


def _redact_string(text: str, walk: WalkSettings) -> str:
    if not walk.scan_strings:
        return text
    return redact_text(text, detect_all(text))


def _redact(value: Any, walk: WalkSettings, depth: int, ancestors: frozenset[int]) -> Any:
    kind = kind_of(value)
    if kind is ValueKind.TEXT:
        return _redact_string(value, walk)
    if kind not in CONTAINER_KINDS:
        # NULL, BOOL, NUMBER and unsupported kinds pass through as-is.
        return value

    if id(value) in ancestors:
        return CIRCULAR_TAG
    if depth >= walk.max_depth:
        return MAX_DEPTH_TAG
    inner = ancestors | {id(value)}

    if kind is ValueKind.SEQUENCE:
        items = [_redact(item, walk, depth + 1, inner) for item in value]
        return tuple(items) if isinstance(value, tuple) else items

    redacted: dict[Any, Any] = {}
    for key, item in value.items():
        if classify_field(key, walk.rules) is not None:
            # Whole value goes, whatever its type.
            redacted[key] = field_tag(key)
        else:
            redacted[key] = _redact(item, walk, depth + 1, inner)
    return redacted


def redact_pii(value: Any, config: PIIShieldConfig | None = None) -> Any:
    """Return a copy of *value* with every known kind of PII redacted.

    - Mapping fields whose key classifies as PII become
      ``[REDACTED_<KEY>]`` (``phoneNumber`` -> ``[REDACTED_PHONENUMBER]``).
    - Strings have PII-shaped substrings replaced with
      ``[REDACTED_<CATEGORY>]``.
    - Lists, tuples and other mappings are walked recursively; order,
      length and key order are preserved.
    - ``None``, bools, numbers and unsupported objects are returned as-is.

    A container that refers back to one of its own ancestors becomes
    ``[REDACTED_CIRCULAR]``; one nested deeper than ``config.max_depth``
    becomes ``[REDACTED_MAX_DEPTH]``.  The input is never modified.

    Args:
        value: Any structured value (typically a log context dict).
        config: Rules and limits.  ``None`` uses the builtin defaults.

    Returns:
        A redacted value of the same shape.
    """
    return _redact(value, WalkSettings.from_config(config), 0, frozenset())


def sanitize_text(text: str, config: PIIShieldConfig | None = None) -> SanitizeResult:
    """Detect and redact PII-shaped substrings in free text.

    Args:
        text: The input text to sanitize.
        config: Only ``scan_strings`` is consulted.

    Returns:
        A ``SanitizeResult`` with the sanitized text and the entities found.
    """
    walk = WalkSettings.from_config(config)
    entities = detect_all(text) if walk.scan_strings else []
    return SanitizeResult(
        original_text=text,
        sanitized_text=redact_text(text, entities),
        entities=entities,
    )
