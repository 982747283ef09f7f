"""Structural deep equality.

Values are classified at runtime into three kinds:

- **Mapping**: any `collections.abc.Mapping`. Equal iff both have the same key
  set and every key maps to deeply equal values. Key order is irrelevant.
- **Sequence**: any `collections.abc.Sequence` other than text or bytes. Equal
  iff both have the same length and the elements are deeply equal position by
  position.
- **Scalar**: everything else (numbers, strings, `None`, sets, user objects).
  Compared with the value's own `==`.

Values of different kinds never compare equal. Inputs must be finite trees;
self-referencing structures recurse without bound.
"""

from collections.abc import Mapping, Sequence
from enum import Enum

_TEXT_TYPES = (str, bytes, bytearray)


class ValueKind(Enum):
    """Runtime tag of a compared value."""

    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


def kind_of(value: object) -> ValueKind:
    """Classify *value* as a scalar, sequence or mapping."""
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, Sequence) and not isinstance(value, _TEXT_TYPES):
        return ValueKind.SEQUENCE
    return ValueKind.SCALAR


def deep_equals(a: object, b: object) -> bool:
    """Return True if *a* and *b* are structurally equal.

    Args:
        a: First value (scalar, sequence or mapping).
        b: Second value (scalar, sequence or mapping).

    Returns:
        bool: Whether both values have the same kind and equal contents.
    """
    kind = kind_of(a)
    if kind is not kind_of(b):
        return False

    if kind is ValueKind.SEQUENCE:
        return _sequences_equal(a, b)  # type: ignore[arg-type]
    if kind is ValueKind.MAPPING:
        return _mappings_equal(a, b)  # type: ignore[arg-type]
    return bool(a == b)


def _sequences_equal(a: Sequence, b: Sequence) -> bool:
    if len(a) != len(b):
        return False
    return all(deep_equals(x, y) for x, y in zip(a, b))


def _mappings_equal(a: Mapping, b: Mapping) -> bool:
    if len(a) != len(b):
        return False
    for key, value in a.items():
        if key not in b:
            return False
        if not deep_equals(value, b[key]):
            return False
    return True


deepeq = deep_equals
