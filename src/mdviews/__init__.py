"""mdviews — typed frontmatter records and spreadsheet-like queries over notes.

Embedding callers typically need only::

    from mdviews import parse_document, execute, gte

    records = [parse_document(text, path) for path, text in documents]
    rows = execute(records, {"where": {"rating": gte(4)}, "sort": {"field": "start"}})
"""

from mdviews.domain.conditions import (
    Condition,
    Literal,
    Operator,
    OperatorKind,
    Predicate,
    contains,
    eq,
    exists,
    gt,
    gte,
    is_in,
    lt,
    lte,
    matches,
    ne,
    not_contains,
    not_exists,
    predicate,
)
from mdviews.domain.frontmatter import FileMeta, Record, parse_document
from mdviews.domain.query import QuerySpec, SortOrder, SortSpec, execute
from mdviews.domain.values import DateValue, compare_values

__version__ = "0.1.0"

__all__ = [
    "Condition",
    "DateValue",
    "FileMeta",
    "Literal",
    "Operator",
    "OperatorKind",
    "Predicate",
    "QuerySpec",
    "Record",
    "SortOrder",
    "SortSpec",
    "__version__",
    "compare_values",
    "contains",
    "eq",
    "execute",
    "exists",
    "gt",
    "gte",
    "is_in",
    "lt",
    "lte",
    "matches",
    "ne",
    "not_contains",
    "not_exists",
    "parse_document",
    "predicate",
]
