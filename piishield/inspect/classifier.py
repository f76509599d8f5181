"""PII detector for structured values.

Walks the same shapes as the redactor but never builds a new value: it
only reports *where* PII lives.  Used for compliance checks ("does this
payload still contain PII?") and by ``piishield scan``.  Pure functions,
no I/O.
"""

from __future__ import annotations

from typing import Any, Iterator

from piishield.config.schema import PIIShieldConfig
from piishield.sanitize.detectors.regex_detector import detect_all
from piishield.sanitize.engine import WalkSettings
from piishield.sanitize.models import DetectionResult, Finding, PIICategory
from piishield.sanitize.rules import classify_field
from piishield.sanitize.values import CONTAINER_KINDS, ValueKind, child_path, index_path, kind_of


def _scan_string(text: str, path: str) -> Iterator[Finding]:
    """Yield one content finding per distinct category matched in *text*."""
    seen: list[PIICategory] = []
    for ent in detect_all(text):
        if ent.category not in seen:
            seen.append(ent.category)
            yield Finding(path=path, category=ent.category, source="content")


def _walk_value(
    value: Any,
    path: str,
    walk: WalkSettings,
    depth: int,
    ancestors: frozenset[int],
) -> Iterator[Finding]:
    """Recursively yield findings from nested structures.

    Args:
        value: The value to walk.
        path: The current dotted/bracketed path prefix.
        walk: Rules and limits for this call.
        depth: Container nesting depth of *value*.
        ancestors: ``id()`` of every container on the current path.

    Yields:
        Findings in traversal order.
    """
    kind = kind_of(value)
    if kind is ValueKind.TEXT:
        if walk.scan_strings:
            yield from _scan_string(value, path)
        return
    if kind not in CONTAINER_KINDS:
        return
    # Cycles and over-deep subtrees are not descended into.
    if id(value) in ancestors or depth >= walk.max_depth:
        return
    inner = ancestors | {id(value)}

    if kind is ValueKind.SEQUENCE:
        for i, item in enumerate(value):
            yield from _walk_value(item, index_path(path, i), walk, depth + 1, inner)
        return

    for key, item in value.items():
        field_path = child_path(path, key)
        rule = classify_field(key, walk.rules)
        if rule is not None and item is not None:
            yield Finding(path=field_path, category=rule.category, source="field")
        else:
            yield from _walk_value(item, field_path, walk, depth + 1, inner)


def contains_pii(value: Any, config: PIIShieldConfig | None = None) -> DetectionResult:
    """Report whether *value* contains PII, and where.

    A mapping field counts when its key classifies as PII (and its value
    is not ``None``) or when a string anywhere below it matches a content
    pattern.  Every offending field is collected, not just the first.

    Args:
        value: Any structured value.
        config: Rules and limits.  ``None`` uses the builtin defaults.

    Returns:
        A ``DetectionResult``; ``has_pii`` is False and ``fields`` is empty
        for clean input.
    """
    walk = WalkSettings.from_config(config)
    return DetectionResult(findings=list(_walk_value(value, "", walk, 0, frozenset())))
