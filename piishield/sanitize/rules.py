"""Field-name classification table.

A record key is sensitive when its normalized form contains one of the
registered fragments.  The table is ordered most-specific first, and the
first matching rule decides the category, so ``streetAddress`` resolves
through ``streetaddress`` before the generic ``street`` and ``address``
entries are ever consulted.
"""

from __future__ import annotations

import re
from typing import Any, Iterable

from piishield.sanitize.models import ClassificationRule, PIICategory

_SEPARATORS_RE = re.compile(r"[\s_\-.]+")


def _rules(category: PIICategory, *patterns: str, exact: bool = False) -> tuple[ClassificationRule, ...]:
    return tuple(ClassificationRule(p, category, exact=exact) for p in patterns)


# -----------------------------------------------------------------------
# Classification table
# -----------------------------------------------------------------------

CLASSIFICATION_RULES: tuple[ClassificationRule, ...] = (
    # Compound names first: they would otherwise resolve through a
    # generic word registered further down.
    *_rules(PIICategory.EMAIL, "emailaddress"),
    *_rules(PIICategory.PHONE, "phonenumber", "mobilenumber"),
    *_rules(PIICategory.ADDRESS, "ipaddress", "streetaddress", "homeaddress", "workaddress"),
    *_rules(
        PIICategory.CARD,
        "cardnumber", "creditcard", "debitcard", "accountnumber",
        "bankaccount", "routingnumber",
    ),
    *_rules(
        PIICategory.AUTH_SECRET,
        "accesstoken", "refreshtoken", "authtoken", "apikey", "privatekey",
        "sessionid",
    ),
    *_rules(
        PIICategory.NAME,
        "firstname", "lastname", "fullname", "displayname", "username",
    ),
    *_rules(
        PIICategory.GENERIC,
        "socialsecuritynumber", "taxid", "nationalid", "driverslicense",
        "driverlicense", "passportnumber", "licensenumber",
        "vehicleregistration", "dateofbirth", "birthdate", "deviceid",
    ),
    # Generic single words.
    *_rules(PIICategory.EMAIL, "email"),
    *_rules(PIICategory.PHONE, "phone", "mobile", "telephone"),
    *_rules(PIICategory.CARD, "cvv", "cvc"),
    *_rules(PIICategory.AUTH_SECRET, "password", "secret", "token"),
    *_rules(PIICategory.NAME, "name"),
    *_rules(PIICategory.ADDRESS, "street", "zipcode", "postalcode", "country", "address"),
    *_rules(PIICategory.GENERIC, "ssn", "passport", "imei", "biometric", "fingerprint", "faceid"),
    # Short tokens: whole-key matches only.
    *_rules(PIICategory.CARD, "pin", exact=True),
    *_rules(PIICategory.ADDRESS, "city", "state", exact=True),
    *_rules(PIICategory.GENERIC, "dob", "age", "ip", exact=True),
)


def normalize_key(key: Any) -> str:
    """Normalize a record key for classification.

    Lower-cases, trims, and drops ``_``, ``-``, ``.`` and whitespace so that
    ``phone_number``, ``phone-number`` and ``phoneNumber`` compare equal.
    """
    return _SEPARATORS_RE.sub("", str(key).strip().lower())


def classify_field(
    key: Any,
    rules: Iterable[ClassificationRule] = CLASSIFICATION_RULES,
) -> ClassificationRule | None:
    """Return the first rule matching *key*, or ``None`` for a non-PII key.

    Args:
        key: The record key (non-string keys are converted with ``str``).
        rules: Ordered rule table to consult.
    """
    normalized = normalize_key(key)
    if not normalized:
        return None
    for rule in rules:
        if rule.matches(normalized):
            return rule
    return None


def build_rules(extra: Iterable[ClassificationRule] = ()) -> tuple[ClassificationRule, ...]:
    """Return a new table: the builtin rules followed by *extra*."""
    return CLASSIFICATION_RULES + tuple(extra)


def shadowing_rule(
    rule: ClassificationRule,
    rules: Iterable[ClassificationRule] = CLASSIFICATION_RULES,
) -> ClassificationRule | None:
    """Return the rule in *rules* that makes *rule* unreachable, if any.

    Appended rules only see keys the earlier rules let through.  A
    substring rule already matching *rule*'s pattern claims every key
    *rule* could match; an exact rule only claims the one identical key,
    which is all an exact *rule* could match.
    """
    for earlier in rules:
        if earlier.matches(rule.pattern) and (rule.exact or not earlier.exact):
            return earlier
    return None
