"""Query pipeline over parsed records: filter, sort, limit, select.

The stages always run in that order and each is a pass-through when its
part of the :class:`QuerySpec` is absent. No stage mutates its input.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Mapping, Sequence
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from mdviews.domain.conditions import coerce_condition, matches
from mdviews.domain.frontmatter import RESERVED_FIELDS, Record
from mdviews.domain.values import compare_values


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


class SortSpec(BaseModel):
    """Sort descriptor. A spec without a field leaves the order untouched."""

    model_config = {"frozen": True}

    field: str | None = None
    order: SortOrder = SortOrder.ASC


class QuerySpec(BaseModel):
    """A request to filter, sort, limit, and project a record collection.

    Attributes:
        where: Field name to condition. Raw values are coerced with
            :func:`~mdviews.domain.conditions.coerce_condition`.
        sort: Optional sort descriptor.
        limit: Keep at most this many records. Non-positive means no limit.
        fields: Project each record to these fields. Empty means all fields.
    """

    model_config = {"frozen": True}

    where: dict[str, Any] = Field(default_factory=dict)
    sort: SortSpec | None = None
    limit: int | None = None
    fields: list[str] | None = None

    @field_validator("where", mode="before")
    @classmethod
    def _coerce_where(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, Mapping):
            return {str(name): coerce_condition(cond) for name, cond in value.items()}
        return value

    @field_validator("sort", mode="before")
    @classmethod
    def _coerce_sort(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"field": value}
        return value


def filter_records(records: Sequence[Record], where: Mapping[str, Any] | None) -> list[Record]:
    """Keep records satisfying every condition in *where*."""
    if not where:
        return list(records)
    return [
        record
        for record in records
        if all(matches(record, name, condition) for name, condition in where.items())
    ]


def _sort_comparator(field: str, descending: bool) -> Callable[[Record, Record], int]:
    def compare(a: Record, b: Record) -> int:
        left, right = a.get(field), b.get(field)
        result = compare_values(left, right)
        # Nulls stay last regardless of direction.
        if descending and left is not None and right is not None:
            return -result
        return result

    return compare


def sort_records(records: Sequence[Record], sort: SortSpec | None) -> list[Record]:
    """Stable sort on one field; records with null keys go last."""
    if sort is None or not sort.field:
        return list(records)
    comparator = _sort_comparator(sort.field, sort.order == SortOrder.DESC)
    return sorted(records, key=functools.cmp_to_key(comparator))


def limit_records(records: Sequence[Record], limit: int | None) -> list[Record]:
    if limit is not None and 0 < limit < len(records):
        return list(records[:limit])
    return list(records)


def _project(record: Record, fields: Iterable[str]) -> Record:
    row: dict[str, Any] = {}
    for name in fields:
        value = getattr(record.file, name) if name in RESERVED_FIELDS else None
        row[name] = value if value is not None else record.get(name)
    return Record(file=record.file, fields=row)


def select_fields(records: Sequence[Record], fields: Sequence[str] | None) -> list[Record]:
    """Project records to *fields*; ``title``/``name``/``path`` come from FileMeta."""
    if not fields:
        return list(records)
    return [_project(record, fields) for record in records]


def execute(
    records: Iterable[Record],
    spec: QuerySpec | Mapping[str, Any] | None = None,
) -> list[Record]:
    """Run the full pipeline and return a new list of records."""
    if spec is None:
        spec = QuerySpec()
    elif not isinstance(spec, QuerySpec):
        spec = QuerySpec.model_validate(spec)

    results = filter_records(list(records), spec.where)
    results = sort_records(results, spec.sort)
    results = limit_records(results, spec.limit)
    return select_fields(results, spec.fields)
