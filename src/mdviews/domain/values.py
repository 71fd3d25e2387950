"""Typed frontmatter values and the ordering rule shared by sort and comparisons.

A frontmatter value is one of:

- ``None`` (null)
- ``bool``
- ``int`` / ``float`` (``bool`` is never treated as a number)
- ``str``
- :class:`DateValue` — a ``YYYY-MM-DD`` literal
- ``list`` of the above (flat, never nested)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, TypeAlias

Scalar: TypeAlias = "None | bool | int | float | str | DateValue"
Value: TypeAlias = "Scalar | list[Scalar]"


@dataclass(frozen=True)
class DateValue:
    """A calendar date that remembers the literal it was parsed from."""

    year: int
    month: int
    day: int
    raw: str

    @classmethod
    def from_date(cls, value: date) -> DateValue:
        return cls(value.year, value.month, value.day, value.isoformat())

    @property
    def key(self) -> tuple[int, int, int]:
        return (self.year, self.month, self.day)

    def __str__(self) -> str:
        return self.raw


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_value(obj: Any) -> Any:
    """Normalize a caller-supplied Python object into the value model.

    ``datetime.date`` (as produced by TOML) becomes a :class:`DateValue` and
    tuples become lists. Everything else passes through unchanged.
    """
    if isinstance(obj, date):
        if isinstance(obj, datetime):
            obj = obj.date()
        return DateValue.from_date(obj)
    if isinstance(obj, (list, tuple)):
        return [to_value(item) for item in obj]
    return obj


def text_of(value: Any) -> str:
    """String representation used by the cross-type ordering fallback."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, DateValue):
        return value.raw
    if isinstance(value, list):
        return ", ".join(text_of(item) for item in value)
    return str(value)


def values_equal(a: Any, b: Any) -> bool:
    """Equality used by ``eq``/``ne``/``in``/``contains`` and literal conditions.

    Dates compare by their literal text, so ``DateValue("2024-11-03")``
    equals the string ``"2024-11-03"``. Booleans only ever equal booleans.
    """
    if isinstance(a, DateValue):
        a = a.raw
    if isinstance(b, DateValue):
        b = b.raw
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a is b
    if is_number(a) and is_number(b):
        return a == b
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(values_equal(x, y) for x, y in zip(a, b))
    if type(a) is not type(b):
        return False
    return a == b


def _cmp(a: Any, b: Any) -> int:
    if a == b:
        return 0
    return -1 if a < b else 1


def compare_values(a: Any, b: Any) -> int:
    """Total order over two values: ``-1`` (less), ``0`` (equal), ``1`` (greater).

    1. Null sorts after everything; two nulls are equal.
    2. Two dates compare by ``(year, month, day)``.
    3. A date against anything else is unwrapped to its literal text.
    4. Operands of the same type use that type's natural order
       (lists compare element-wise with this same rule).
    5. Operands of different types compare by their string representations.
    """
    if a is None and b is None:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1

    if isinstance(a, DateValue) and isinstance(b, DateValue):
        return _cmp(a.key, b.key)
    if isinstance(a, DateValue):
        a = a.raw
    if isinstance(b, DateValue):
        b = b.raw

    if is_number(a) and is_number(b):
        return _cmp(a, b)
    if isinstance(a, bool) and isinstance(b, bool):
        return _cmp(a, b)
    if isinstance(a, str) and isinstance(b, str):
        return _cmp(a, b)
    if isinstance(a, list) and isinstance(b, list):
        for x, y in zip(a, b):
            result = compare_values(x, y)
            if result:
                return result
        return _cmp(len(a), len(b))

    return _cmp(text_of(a), text_of(b))
