"""Display masks — partially obscure a single value for UX.

Unlike redaction, a mask keeps enough of the value to be recognisable
(``j***@example.com``, ``***-***-4567``).  Masks are for building display
strings, never for logs.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping

from piishield.sanitize.models import MaskRule, PIICategory

_NON_DIGIT_RE = re.compile(r"\D")


def _mask_email(value: str) -> str:
    local, sep, domain = value.partition("@")
    if not sep or not local or not domain:
        return value
    return f"{local[0]}***@{domain}"


def _last_four_digits(value: str) -> str | None:
    digits = _NON_DIGIT_RE.sub("", value)
    if len(digits) < 4:
        return None
    return digits[-4:]


def _mask_phone(value: str) -> str:
    last4 = _last_four_digits(value)
    if last4 is None:
        return value
    return f"***-***-{last4}"


def _mask_card(value: str) -> str:
    last4 = _last_four_digits(value)
    if last4 is None:
        return value
    return f"****-****-****-{last4}"


def _mask_name(value: str) -> str:
    return f"{value[0]}***{value[-1]}"


MASK_RULES: Mapping[PIICategory, MaskRule] = MappingProxyType({
    PIICategory.EMAIL: MaskRule(_mask_email, min_length=2),
    PIICategory.PHONE: MaskRule(_mask_phone, min_length=3),
    PIICategory.CARD: MaskRule(_mask_card, min_length=3),
    PIICategory.NAME: MaskRule(_mask_name, min_length=3),
})


def mask_for_display(value: str, category: PIICategory | str) -> str:
    """Mask *value* for display according to its category.

    Values at or below the category's minimum length, and values that do
    not have the expected shape (an email without ``@``, a phone with
    fewer than four digits), are returned unchanged.

    Args:
        value: The raw value, e.g. ``"john.doe@example.com"``.
        category: ``PIICategory`` or its name in any case (``"email"``,
            ``"PHONE"``, ``"card"``, ``"name"``).

    Returns:
        The masked string.

    Raises:
        ValueError: If *category* is not a known category name.
    """
    if not isinstance(category, PIICategory):
        category = PIICategory(str(category).strip().lower())
    rule = MASK_RULES.get(category)
    if rule is None:
        return value
    return rule.apply(value)
