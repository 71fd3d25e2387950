"""Line-oriented frontmatter parser.

Only a small YAML subset is understood: ``key: value`` pairs, inline
``[a, b]`` lists, and one level of ``- item`` block lists. Anything else is
skipped. Parsing never raises; a document without a frontmatter block yields
a :class:`Record` with no content fields.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from mdviews.domain.values import DateValue

logger = logging.getLogger(__name__)

_DELIMITER = "---"

_LIST_ITEM_RE = re.compile(r"^\s*-\s+(.+)$")
_KEY_LINE_RE = re.compile(r"^([A-Za-z0-9_]+):\s*(.*)$")
_NUMBER_RE = re.compile(r"^[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)$")
_DATE_RE = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})$")
_INLINE_LIST_RE = re.compile(r"^\[(.*)\]$")

# FileMeta attributes that projection reads ahead of content fields.
RESERVED_FIELDS: tuple[str, ...] = ("title", "name", "path")


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FileMeta:
    """Identity of the source document, independent of its content."""

    path: str | None = None
    name: str | None = None
    title: str | None = None

    @classmethod
    def from_identity(cls, identity: str) -> FileMeta:
        name = identity.rsplit("/", 1)[-1]
        return cls(path=identity, name=name, title=name.removesuffix(".md"))

    def to_dict(self) -> dict[str, str | None]:
        return {"path": self.path, "name": self.name, "title": self.title}


@dataclass(frozen=True, eq=False)
class Record(Mapping[str, Any]):
    """Parsed frontmatter of one document plus its :class:`FileMeta`.

    Behaves as a read-only mapping over the content fields. ``file`` is
    never part of the mapping.
    """

    file: FileMeta
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __getitem__(self, key: str) -> Any:
        return self.fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.file == other.file and dict(self.fields) == dict(other.fields)


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


def parse_scalar(text: str) -> Any:
    """Convert one scalar literal into a typed value.

    Precedence is significant: ``true`` is a boolean but ``"true"`` is a
    string, and ``2024-01-01`` is a date but ``'2024-01-01'`` is a string.
    """
    value = text.strip()
    if value == "":
        return None
    if value == "true":
        return True
    if value == "false":
        return False
    if value in ("null", "~"):
        return None
    if _NUMBER_RE.match(value):
        if "." in value:
            return float(value)
        try:
            return int(value)
        except ValueError:
            # Past the interpreter's int digit limit.
            return float(value)
    m = _DATE_RE.match(value)
    if m:
        return DateValue(int(m.group(1)), int(m.group(2)), int(m.group(3)), m.group(0))
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def parse_inline_list(text: str) -> list[Any] | None:
    """Parse ``[a, b, c]``; returns None when *text* is not bracketed."""
    m = _INLINE_LIST_RE.match(text.strip())
    if not m:
        return None
    items = (part.strip() for part in m.group(1).split(","))
    return [parse_scalar(item) for item in items if item]


# ---------------------------------------------------------------------------
# Block extraction and body parsing
# ---------------------------------------------------------------------------


def _is_delimiter(line: str) -> bool:
    return line.rstrip() == _DELIMITER


def extract_frontmatter(content: str) -> str | None:
    """Return the text between the opening and closing ``---`` lines.

    Returns None when the document does not start with a delimiter line or
    the block is never closed.
    """
    lines = [line.removesuffix("\r") for line in content.split("\n")]
    if not lines or not _is_delimiter(lines[0]):
        return None
    for index in range(1, len(lines)):
        if _is_delimiter(lines[index]):
            return "\n".join(lines[1:index])
    return None


def parse_frontmatter_body(body: str) -> dict[str, Any]:
    """Parse the frontmatter body into a dict of typed values."""
    result: dict[str, Any] = {}
    list_key: str | None = None
    pending: list[Any] = []

    for raw_line in body.split("\n"):
        line = raw_line.removesuffix("\r")
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        item = _LIST_ITEM_RE.match(line)
        if item:
            if list_key is not None:
                pending.append(parse_scalar(item.group(1)))
            else:
                # Items outside a list block are dropped.
                logger.debug("Dropping list item outside a list: %r", line)
            continue

        key_line = _KEY_LINE_RE.match(line)
        if not key_line:
            continue

        if list_key is not None:
            result[list_key] = pending
            list_key, pending = None, []

        key, raw = key_line.group(1), key_line.group(2)
        inline = parse_inline_list(raw)
        if inline is not None:
            result[key] = inline
        elif raw.strip() == "":
            list_key = key
        else:
            result[key] = parse_scalar(raw)

    if list_key is not None:
        result[list_key] = pending

    return result


def parse_document(content: str, identity: str) -> Record:
    """Parse a whole document into a :class:`Record`.

    *identity* is an opaque path-like string used only to derive
    :class:`FileMeta`.
    """
    meta = FileMeta.from_identity(identity)
    block = extract_frontmatter(content)
    if block is None:
        logger.debug("No frontmatter block in %s", identity)
        return Record(file=meta)
    return Record(file=meta, fields=parse_frontmatter_body(block))
