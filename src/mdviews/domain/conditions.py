"""Field conditions and their evaluation against a record.

A condition takes one of three shapes:

- :class:`Literal` — equality against a plain value, with the rule that
  ``False`` also matches null and the empty string;
- :class:`Predicate` — any callable ``(value, record) -> bool``;
- :class:`Operator` — one of a fixed set of comparison operators with a target.

:func:`coerce_condition` turns plain Python input (as written in a TOML view
or passed by an embedding caller) into one of these variants.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, TypeAlias

from mdviews.domain.values import compare_values, text_of, to_value, values_equal

if TYPE_CHECKING:
    from mdviews.domain.frontmatter import Record


class OperatorKind(StrEnum):
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    IN = "in"
    EXISTS = "exists"
    NOT_EXISTS = "not_exists"

    @classmethod
    def parse(cls, name: str) -> OperatorKind:
        """Resolve an operator name or one of its symbolic aliases."""
        alias = _ALIASES.get(name)
        if alias is not None:
            return alias
        try:
            return cls(name)
        except ValueError:
            msg = f"Unknown operator: {name!r}"
            raise ValueError(msg) from None


_ALIASES: dict[str, OperatorKind] = {
    "=": OperatorKind.EQ,
    "==": OperatorKind.EQ,
    "!=": OperatorKind.NE,
    "<>": OperatorKind.NE,
    ">": OperatorKind.GT,
    ">=": OperatorKind.GTE,
    "<": OperatorKind.LT,
    "<=": OperatorKind.LTE,
}


@dataclass(frozen=True)
class Literal:
    value: Any = None


@dataclass(frozen=True)
class Predicate:
    fn: Callable[[Any, Record], bool]


@dataclass(frozen=True)
class Operator:
    kind: OperatorKind
    target: Any = None


Condition: TypeAlias = Literal | Predicate | Operator


def coerce_condition(raw: Any) -> Condition:
    """Normalize caller input into a :data:`Condition`.

    - existing condition objects are returned as-is
    - callables become :class:`Predicate`
    - mappings with an ``op`` key become :class:`Operator`
      (``{"op": "gte", "value": 3}``)
    - anything else becomes :class:`Literal`
    """
    if isinstance(raw, (Literal, Predicate, Operator)):
        return raw
    if callable(raw):
        return Predicate(raw)
    if isinstance(raw, Mapping) and "op" in raw:
        return Operator(OperatorKind.parse(str(raw["op"])), to_value(raw.get("value")))
    return Literal(to_value(raw))


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def eq(value: Any) -> Operator:
    return Operator(OperatorKind.EQ, to_value(value))


def ne(value: Any) -> Operator:
    return Operator(OperatorKind.NE, to_value(value))


def gt(value: Any) -> Operator:
    return Operator(OperatorKind.GT, to_value(value))


def gte(value: Any) -> Operator:
    return Operator(OperatorKind.GTE, to_value(value))


def lt(value: Any) -> Operator:
    return Operator(OperatorKind.LT, to_value(value))


def lte(value: Any) -> Operator:
    return Operator(OperatorKind.LTE, to_value(value))


def contains(value: Any) -> Operator:
    return Operator(OperatorKind.CONTAINS, to_value(value))


def not_contains(value: Any) -> Operator:
    return Operator(OperatorKind.NOT_CONTAINS, to_value(value))


def is_in(values: Any) -> Operator:
    return Operator(OperatorKind.IN, to_value(values))


def predicate(fn: Callable[[Any, Record], bool]) -> Predicate:
    return Predicate(fn)


exists = Operator(OperatorKind.EXISTS)
not_exists = Operator(OperatorKind.NOT_EXISTS)


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


def _contains(value: Any, target: Any) -> bool:
    if isinstance(value, str):
        if target is None:
            return False
        # Non-string targets match by their text, so 1984 finds "Orwell 1984".
        return text_of(target).lower() in value.lower()
    if isinstance(value, list):
        return any(values_equal(item, target) for item in value)
    return False


def _not_contains(value: Any, target: Any) -> bool:
    # Null contains nothing, so the test holds vacuously.
    return value is None or not _contains(value, target)


def _in(value: Any, target: Any) -> bool:
    if not isinstance(target, list):
        return False
    return any(values_equal(value, item) for item in target)


_OPERATORS: dict[OperatorKind, Callable[[Any, Any], bool]] = {
    OperatorKind.EQ: values_equal,
    OperatorKind.NE: lambda value, target: not values_equal(value, target),
    OperatorKind.GT: lambda value, target: compare_values(value, target) > 0,
    OperatorKind.GTE: lambda value, target: compare_values(value, target) >= 0,
    OperatorKind.LT: lambda value, target: compare_values(value, target) < 0,
    OperatorKind.LTE: lambda value, target: compare_values(value, target) <= 0,
    OperatorKind.CONTAINS: _contains,
    OperatorKind.NOT_CONTAINS: _not_contains,
    OperatorKind.IN: _in,
    OperatorKind.EXISTS: lambda value, _target: value is not None,
    OperatorKind.NOT_EXISTS: lambda value, _target: value is None,
}


def _match_literal(value: Any, expected: Any) -> bool:
    if expected is None:
        return value is None
    if expected is False:
        # An unset field counts as false.
        return value is False or value is None or value == ""
    if expected is True:
        return value is True
    return values_equal(value, expected)


def matches(record: Record, field_name: str, condition: Any) -> bool:
    """Whether *record* satisfies *condition* on *field_name*.

    *condition* may be a :data:`Condition` or raw input accepted by
    :func:`coerce_condition`. A missing field is treated as null.
    Exceptions raised by a :class:`Predicate` propagate to the caller.
    """
    condition = coerce_condition(condition)
    value = record.get(field_name)
    if isinstance(condition, Predicate):
        return condition.fn(value, record)
    if isinstance(condition, Operator):
        return _OPERATORS[condition.kind](value, condition.target)
    return _match_literal(value, condition.value)
