"""Text redaction — replace detected PII with redaction tags.

Two tag shapes exist.  A record field whose *name* classifies as PII is
replaced by a tag derived from the original key (``phoneNumber`` ->
``[REDACTED_PHONENUMBER]``).  A PII-shaped substring inside free text has
no key, so it gets a tag derived from its category (``[REDACTED_EMAIL]``).
"""

from __future__ import annotations

from typing import Any

from piishield.sanitize.models import DetectedEntity, PIICategory


def field_tag(key: Any) -> str:
    """Redaction tag for a value whose record key classified as PII."""
    return f"[REDACTED_{str(key).upper()}]"


def content_tag(category: PIICategory) -> str:
    """Redaction tag for a PII-shaped substring of the given category."""
    return f"[REDACTED_{category.value.upper()}]"


def redact_text(text: str, entities: list[DetectedEntity]) -> str:
    """Replace detected entities with their category tags.

    Args:
        text: The original text.
        entities: Non-overlapping entities sorted by start offset.

    Returns:
        The sanitized text.
    """
    if not entities:
        return text

    # Forward slicing keeps this O(n) without a char-list copy.
    chunks: list[str] = []
    prev_end = 0
    for ent in entities:
        chunks.append(text[prev_end:ent.start])
        chunks.append(content_tag(ent.category))
        prev_end = ent.end
    chunks.append(text[prev_end:])
    return "".join(chunks)
