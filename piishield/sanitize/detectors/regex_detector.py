"""Regex-based content detector.

Finds PII-shaped substrings (email addresses, payment-card numbers, phone
numbers, well-known credential tokens) inside free text, independent of
any field name.  Every quantifier is bounded so adversarial input cannot
trigger catastrophic backtracking.
"""

from __future__ import annotations

import re
from typing import Callable

from piishield.sanitize.models import DetectedEntity, PIICategory

# -----------------------------------------------------------------------
# Pre-compiled patterns
# -----------------------------------------------------------------------

# Email addresses: local@domain.tld (practical subset, not RFC 5322).
_EMAIL_RE = re.compile(
    r"(?<![a-zA-Z0-9._%+\-])"
    r"[a-zA-Z0-9._%+\-]{1,64}"
    r"@"
    r"[a-zA-Z0-9\-]{1,63}(?:\.[a-zA-Z0-9\-]{1,63}){0,8}"
    r"\.[a-zA-Z]{2,24}"
    r"(?![a-zA-Z0-9\-])"
)

# Payment cards: 13-19 contiguous digits, or 4-digit groups joined by a
# space or dash.
_CARD_RE = re.compile(
    r"(?<!\d)"
    r"(?:\d{4}[\ \-]\d{4}[\ \-]\d{4}[\ \-]\d{1,7}|\d{13,19})"
    r"(?!\d)"
)

# Phone numbers: optional +country code, optional (area), then 7-15 digits
# with optional single separators.  555-123-4567, +1 (555) 123-4567, etc.
_PHONE_RE = re.compile(
    r"(?<![\w+])"
    r"(?:\+\d{1,3}[\ .\-]?)?"                # optional country code
    r"(?:\(\d{2,4}\)[\ .\-]?)?"              # optional area code
    r"\d(?:[\ .\-]?\d){3,14}"                # main number
    r"(?![\w\-])"
)

# Credentials with well-known provider prefixes.
_AUTH_SECRET_RE = re.compile(
    r"\b("
    r"sk-[a-zA-Z0-9\-_]{20,200}"    # OpenAI / Anthropic style
    r"|ghp_[a-zA-Z0-9]{36}"         # GitHub PAT
    r"|xoxb-[a-zA-Z0-9\-]{20,200}"  # Slack bot token
    r"|xoxp-[a-zA-Z0-9\-]{20,200}"  # Slack user token
    r"|AKIA[A-Z0-9]{16}"            # AWS access key
    r")\b"
)

_PHONE_MIN_DIGITS = 7
_PHONE_MAX_DIGITS = 15

# Calendar dates (2025-01-31, 2025.01.31, "2025-01-31 12:00") share the
# phone shape.
_DATE_PREFIX_RE = re.compile(r"\d{4}([\-.])\d{1,2}\1\d{1,2}(?!\d)")

# Dot-only groups of 1-3 digits: IPv4 addresses and version strings.
_DOTTED_GROUPS_RE = re.compile(r"\d{1,3}(?:\.\d{1,3})+")


# -----------------------------------------------------------------------
# Individual detector functions
# -----------------------------------------------------------------------


def _detect_emails(text: str) -> list[DetectedEntity]:
    entities: list[DetectedEntity] = []
    for m in _EMAIL_RE.finditer(text):
        entities.append(DetectedEntity(
            category=PIICategory.EMAIL,
            text=m.group(0),
            start=m.start(),
            end=m.end(),
        ))
    return entities


def _detect_cards(text: str) -> list[DetectedEntity]:
    entities: list[DetectedEntity] = []
    for m in _CARD_RE.finditer(text):
        raw = m.group(0)
        digits = re.sub(r"[^0-9]", "", raw)
        if len(digits) < 13 or len(digits) > 19:
            continue
        entities.append(DetectedEntity(
            category=PIICategory.CARD,
            text=raw,
            start=m.start(),
            end=m.end(),
        ))
    return entities


def _detect_phones(text: str) -> list[DetectedEntity]:
    entities: list[DetectedEntity] = []
    for m in _PHONE_RE.finditer(text):
        raw = m.group(0)
        digit_count = sum(1 for c in raw if c.isdigit())
        if digit_count < _PHONE_MIN_DIGITS or digit_count > _PHONE_MAX_DIGITS:
            continue
        if _DATE_PREFIX_RE.match(raw) or _DOTTED_GROUPS_RE.fullmatch(raw):
            continue
        entities.append(DetectedEntity(
            category=PIICategory.PHONE,
            text=raw,
            start=m.start(),
            end=m.end(),
        ))
    return entities


def _detect_auth_secrets(text: str) -> list[DetectedEntity]:
    entities: list[DetectedEntity] = []
    for m in _AUTH_SECRET_RE.finditer(text):
        entities.append(DetectedEntity(
            category=PIICategory.AUTH_SECRET,
            text=m.group(0),
            start=m.start(),
            end=m.end(),
        ))
    return entities


# -----------------------------------------------------------------------
# Content pattern registry
# -----------------------------------------------------------------------

# Registration order breaks ties between equally long overlapping matches.
CONTENT_PATTERNS: dict[PIICategory, Callable[[str], list[DetectedEntity]]] = {
    PIICategory.EMAIL: _detect_emails,
    PIICategory.CARD: _detect_cards,
    PIICategory.PHONE: _detect_phones,
    PIICategory.AUTH_SECRET: _detect_auth_secrets,
}

_PRIORITY: dict[PIICategory, int] = {cat: i for i, cat in enumerate(CONTENT_PATTERNS)}


def _merge_overlaps(entities: list[DetectedEntity]) -> list[DetectedEntity]:
    """Merge overlapping entities into one span per overlap group.

    The merged span covers every overlapping match, so no detected
    character is left in plain text.  Its category comes from the longer
    match; on equal length, the category registered first wins.

    Args:
        entities: Sorted by (start, registration order).

    Returns:
        Non-overlapping entities sorted by start offset.
    """
    result: list[DetectedEntity] = []
    for ent in entities:
        if not result or ent.start >= result[-1].end:
            result.append(ent)
            continue
        prev = result[-1]
        winner = ent if ent.end - ent.start > prev.end - prev.start else prev
        text = prev.text + ent.text[prev.end - ent.start:] if ent.end > prev.end else prev.text
        result[-1] = DetectedEntity(
            category=winner.category,
            text=text,
            start=prev.start,
            end=max(prev.end, ent.end),
        )
    return result


def detect_all(
    text: str,
    *,
    categories: set[PIICategory] | None = None,
) -> list[DetectedEntity]:
    """Run all applicable content detectors on *text*.

    Args:
        text: The input text to scan.
        categories: Subset of categories to detect.  ``None`` means all.

    Returns:
        Non-overlapping detected entities sorted by start offset.
    """
    if not text:
        return []
    active = categories if categories is not None else set(CONTENT_PATTERNS.keys())
    entities: list[DetectedEntity] = []
    for cat, fn in CONTENT_PATTERNS.items():
        if cat in active:
            entities.extend(fn(text))
    entities.sort(key=lambda e: (e.start, _PRIORITY[e.category]))
    return _merge_overlaps(entities)
