"""ViewService — scan a document directory and run queries over it.

Three read-only operations:
- query: ad-hoc query against a directory
- run_view: a named view from ``[views.<name>]``
- list_views: names and descriptions of the configured views
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from mdviews.config.models import DisplayMode, ViewConfig
from mdviews.domain.query import QuerySpec, execute
from mdviews.domain.values import DateValue
from mdviews.infrastructure.filesystem import resolve_source, scan_directory
from mdviews.services.result import ServiceResult

if TYPE_CHECKING:
    from mdviews.config.settings import MdvSettings
    from mdviews.domain.frontmatter import Record

logger = logging.getLogger(__name__)


def _json_value(value: Any) -> Any:
    if isinstance(value, DateValue):
        return value.raw
    if isinstance(value, list):
        return [_json_value(item) for item in value]
    return value


def record_to_dict(record: Record) -> dict[str, Any]:
    """Serialize a record; ``_file`` carries its FileMeta."""
    row: dict[str, Any] = {name: _json_value(value) for name, value in record.items()}
    row["_file"] = record.file.to_dict()
    return row


class ViewService:
    """Runs queries over the markdown documents of one directory."""

    def __init__(self, settings: MdvSettings) -> None:
        self._settings = settings

    # ------------------------------------------------------------------
    # query — ad-hoc
    # ------------------------------------------------------------------

    def query(
        self,
        source: str | Path | None,
        spec: QuerySpec | dict[str, Any] | None = None,
        *,
        columns: list[str] | None = None,
        title: str = "mdviews",
        display: DisplayMode | None = None,
        numbered: bool = False,
        op: str = "query",
    ) -> ServiceResult:
        """Scan *source* (default: ``home`` or cwd) and run *spec* over it.

        Args:
            source: Directory to scan. Relative paths resolve against ``home``.
            spec: Query to run. None applies the ``[query]`` defaults.
            columns: Fields to display; defaults to the projected fields.
            title: Heading for rendered output.
            display: Output mode; defaults to the configured ``display``.
            numbered: Prefix rows with their position.
        """
        settings = self._settings
        if spec is None:
            spec = QuerySpec(fields=settings.query.fields, sort=settings.query.sort)
        elif not isinstance(spec, QuerySpec):
            try:
                spec = QuerySpec.model_validate(spec)
            except (ValidationError, ValueError) as exc:
                return ServiceResult.failure(op, "INVALID_QUERY", str(exc))

        if source:
            directory = resolve_source(source, home=settings.home)
        else:
            directory = settings.home or Path.cwd()
        if not directory.is_dir():
            return ServiceResult.failure(
                op,
                "SOURCE_NOT_FOUND",
                f"Not a directory: {directory}",
                source=str(directory),
            )

        scan = scan_directory(
            directory,
            recursive=settings.scan.recursive,
            workers=settings.scan.workers,
        )
        warnings = list(scan.warnings)
        if not scan.records and not warnings:
            warnings.append(f"No markdown files found in {directory}")

        results = execute(scan.records, spec)
        logger.debug(
            "Query over %s matched %d of %d documents",
            directory,
            len(results),
            len(scan.records),
        )

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "title": title,
                "source": str(directory),
                "columns": list(columns or spec.fields or settings.query.fields),
                "display": str(display or settings.display),
                "numbered": numbered,
                "count": len(results),
                "items": [record_to_dict(record) for record in results],
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # run_view — named view
    # ------------------------------------------------------------------

    def run_view(self, name: str, *, display: DisplayMode | None = None) -> ServiceResult:
        view = self._settings.views.get(name)
        if view is None:
            return ServiceResult.failure(
                "run_view",
                "UNKNOWN_VIEW",
                f"Unknown view '{name}'",
                available=sorted(self._settings.views),
            )
        if not view.source:
            return ServiceResult.failure(
                "run_view", "INVALID_QUERY", f"View '{name}' has no 'from' directory"
            )
        try:
            spec = view.to_query_spec()
        except ValidationError as exc:
            return ServiceResult.failure(
                "run_view", "INVALID_QUERY", f"View '{name}' is invalid: {exc}", view=name
            )
        return self.query(
            view.source,
            spec,
            columns=view.columns,
            title=view.title or name,
            display=display or view.display,
            numbered=view.numbered,
            op="run_view",
        )

    # ------------------------------------------------------------------
    # list_views
    # ------------------------------------------------------------------

    def list_views(self) -> ServiceResult:
        items = [
            {"name": name, "description": _describe(self._settings.views[name])}
            for name in sorted(self._settings.views)
        ]
        return ServiceResult(ok=True, op="list_views", data={"count": len(items), "items": items})


def _describe(view: ViewConfig) -> str:
    return view.description or view.source or ""
