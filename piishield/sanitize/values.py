"""Shape of the values the redactor and detector walk.

A structured value is one of: ``None``, a bool, a number, a string, a
sequence (``list`` or ``tuple``) of structured values, or a string-keyed
mapping of structured values.  ``kind_of`` resolves a Python object to
exactly one of those variants so the traversals can dispatch on a closed
set instead of probing types ad hoc.  Anything else is ``OTHER`` and is
passed through untouched.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Union

StructuredValue = Union[
    None,
    bool,
    int,
    float,
    str,
    "list[StructuredValue]",
    "tuple[StructuredValue, ...]",
    "Mapping[str, StructuredValue]",
]


class ValueKind(Enum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    TEXT = "text"
    SEQUENCE = "sequence"
    RECORD = "record"
    OTHER = "other"


# Kinds that hold other values and can therefore form cycles.
CONTAINER_KINDS: frozenset[ValueKind] = frozenset({ValueKind.SEQUENCE, ValueKind.RECORD})


def kind_of(value: Any) -> ValueKind:
    """Classify *value* into its structured-value variant."""
    if value is None:
        return ValueKind.NULL
    # bool before number: bool is a subclass of int.
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    if isinstance(value, Mapping):
        return ValueKind.RECORD
    return ValueKind.OTHER


def child_path(parent: str, key: Any) -> str:
    """Path of a record field: ``user`` + ``email`` -> ``user.email``."""
    return f"{parent}.{key}" if parent else str(key)


def index_path(parent: str, index: int) -> str:
    """Path of a sequence element: ``users`` + 0 -> ``users[0]``."""
    return f"{parent}[{index}]"
