"""Data models for the sanitize engine.

Pure data structures — no I/O, no external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable


class PIICategory(str, Enum):
    """Categories of PII the sanitize engine knows about."""

    EMAIL = "email"
    PHONE = "phone"
    CARD = "card"
    NAME = "name"
    ADDRESS = "address"
    AUTH_SECRET = "auth_secret"
    GENERIC = "generic"


# Replacement for a container that refers back to one of its ancestors.
CIRCULAR_TAG = "[REDACTED_CIRCULAR]"

# Replacement for a container nested deeper than the configured limit.
MAX_DEPTH_TAG = "[REDACTED_MAX_DEPTH]"


@dataclass(frozen=True)
class ClassificationRule:
    """Maps a normalized field-name fragment to a PII category.

    Attributes:
        pattern: Normalized substring (lower-case, no separators).
        category: The category the field belongs to.
        exact: Only match when the whole normalized key equals ``pattern``.
            Used for short tokens like ``ip`` or ``age`` that would otherwise
            hit unrelated keys such as ``shipping`` or ``message``.
    """

    pattern: str
    category: PIICategory
    exact: bool = False

    def matches(self, normalized_key: str) -> bool:
        if self.exact:
            return normalized_key == self.pattern
        return self.pattern in normalized_key


@dataclass(frozen=True)
class DetectedEntity:
    """A single PII-shaped substring found in text.

    Attributes:
        category: The PII category (e.g., EMAIL, PHONE).
        text: The raw matched text.
        start: Start character offset in the source text.
        end: End character offset in the source text.
    """

    category: PIICategory
    text: str
    start: int
    end: int


@dataclass(frozen=True)
class Finding:
    """One reason a structured value was flagged as containing PII.

    Attributes:
        path: Dotted/bracketed path to the offending value
            (e.g. ``"user.profile.phone"``, ``"users[0].email"``).
            Empty for a top-level string.
        category: The PII category, when known.
        source: ``"field"`` when the key name triggered detection,
            ``"content"`` when a text pattern matched the value.
    """

    path: str
    category: PIICategory | None
    source: str

    @property
    def identifier(self) -> str:
        if self.source == "field":
            return self.path
        label = self.category.value if self.category is not None else "unknown"
        return f"{self.path}: {label}" if self.path else label


@dataclass(frozen=True)
class DetectionResult:
    """Result of scanning a structured value for PII.

    Attributes:
        findings: Every finding, in traversal order.
    """

    findings: list[Finding] = field(default_factory=list)

    @property
    def has_pii(self) -> bool:
        """True if any PII was detected."""
        return len(self.findings) > 0

    @property
    def fields(self) -> list[str]:
        """Identifiers of the offending fields, in the order they were found."""
        return [f.identifier for f in self.findings]

    def to_dict(self) -> dict[str, object]:
        return {"has_pii": self.has_pii, "fields": self.fields}


@dataclass
class SanitizeResult:
    """Result of sanitizing a piece of free text.

    Attributes:
        original_text: The input text before redaction.
        sanitized_text: Text with PII replaced by redaction tags.
        entities: All detected PII entities, sorted by start offset.
    """

    original_text: str
    sanitized_text: str
    entities: list[DetectedEntity] = field(default_factory=list)

    @property
    def has_pii(self) -> bool:
        return len(self.entities) > 0

    @property
    def summary(self) -> dict[str, int]:
        """Count of entities per category."""
        counts: dict[str, int] = {}
        for e in self.entities:
            key = e.category.value
            counts[key] = counts.get(key, 0) + 1
        return counts


@dataclass(frozen=True)
class MaskRule:
    """Display mask for one category.

    Attributes:
        formatter: Turns the raw value into its masked form.
        min_length: Values this long or shorter are returned verbatim.
    """

    formatter: Callable[[str], str]
    min_length: int

    def apply(self, value: str) -> str:
        if len(value) <= self.min_length:
            return value
        return self.formatter(value)
