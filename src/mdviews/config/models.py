"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, mdviews.toml only holds overrides
and the ``[views.<name>]`` tables.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from mdviews.domain.query import QuerySpec, SortOrder, SortSpec

DEFAULT_FIELDS: list[str] = ["title", "type", "rating", "start", "end"]


class DisplayMode(StrEnum):
    TABLE = "table"
    MARKDOWN = "markdown"


class ScanConfig(BaseModel):
    """[scan] section."""

    model_config = {"frozen": True}

    recursive: bool = True
    workers: int = Field(default=1, ge=1)


class QueryDefaults(BaseModel):
    """[query] section — defaults for ad-hoc ``mdviews query`` runs."""

    model_config = {"frozen": True}

    fields: list[str] = Field(default_factory=lambda: list(DEFAULT_FIELDS))
    sort: SortSpec = Field(
        default_factory=lambda: SortSpec(field="start", order=SortOrder.DESC)
    )


class ViewConfig(BaseModel):
    """A named, predefined query (``[views.<name>]``).

    ``fields`` drives projection. ``display_fields`` picks the subset that is
    shown, so a view can select a field only to query on it. ``where`` holds
    the raw TOML conditions; they are validated when the view is run.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    source: str | None = Field(default=None, alias="from")
    description: str = ""
    title: str | None = None
    fields: list[str] | None = None
    display_fields: list[str] | None = None
    where: dict[str, Any] = Field(default_factory=dict)
    sort: SortSpec | None = None
    limit: int | None = None
    display: DisplayMode | None = None
    numbered: bool = False

    @property
    def columns(self) -> list[str]:
        return list(self.display_fields or self.fields or DEFAULT_FIELDS)

    def to_query_spec(self) -> QuerySpec:
        """Build the query. Raises ``pydantic.ValidationError`` on a bad condition."""
        return QuerySpec(where=self.where, sort=self.sort, limit=self.limit, fields=self.fields)
