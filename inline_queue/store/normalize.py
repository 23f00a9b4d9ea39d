"""
Argument normalization.

Job arguments are canonicalized once at enqueue time so that queued records
and assertion expectations compare equal regardless of whether the caller
used enum members or their string forms.
"""

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any


def _normalize_atom(value: Enum) -> str:
    return value.value if isinstance(value.value, str) else value.name


def normalize_key(key: Any) -> Any:
    """
    Normalize a mapping key.

    Keys must stay hashable, so tuples remain tuples (of normalized keys)
    instead of becoming lists.
    """
    if isinstance(key, Enum):
        return _normalize_atom(key)
    if isinstance(key, tuple):
        return tuple(normalize_key(item) for item in key)
    return key


def normalize(value: Any) -> Any:
    """
    Recursively convert symbolic atoms to strings.

    - Enum members become their string value, or their name when the value
      is not a string.
    - Lists and tuples become new lists of normalized elements.
    - Mappings become new dicts with normalized values and keys normalized
      by ``normalize_key``, keeping insertion order.
    - Everything else is returned unchanged.

    Normalization is idempotent.
    """
    if isinstance(value, Enum):
        return _normalize_atom(value)
    if isinstance(value, (list, tuple)):
        return [normalize(item) for item in value]
    if isinstance(value, Mapping):
        return {normalize_key(key): normalize(item) for key, item in value.items()}
    return value


def normalize_args(args: Iterable[Any]) -> tuple[Any, ...]:
    """Normalize a positional argument sequence into a record's args tuple."""
    return tuple(normalize(arg) for arg in args)
