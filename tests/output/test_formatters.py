"""Tests for value formatting, markdown tables, and format_result."""

from __future__ import annotations

import json

from mdviews.output.formatters import (
    NO_RESULTS,
    OutputSettings,
    format_result,
    format_value,
    to_markdown_table,
)
from mdviews.services.result import ServiceResult


class TestFormatValue:
    def test_values(self) -> None:
        assert format_value(None) == ""
        assert format_value(True) == "yes"
        assert format_value(False) == "no"
        assert format_value(["a", "b"]) == "a, b"
        assert format_value([]) == ""
        assert format_value([True, False, "a"]) == "yes, no, a"
        assert format_value(4.5) == "4.5"
        assert format_value("2024-01-02") == "2024-01-02"


class TestMarkdownTable:
    def test_empty(self) -> None:
        assert to_markdown_table([], ["title"]) == [NO_RESULTS]

    def test_padded_columns(self) -> None:
        rows = [{"title": "Dune", "rating": 5}, {"title": "Piranesi", "rating": None}]
        assert to_markdown_table(rows, ["title", "rating"]) == [
            "| title    | rating |",
            "|----------|--------|",
            "| Dune     | 5      |",
            "| Piranesi |        |",
        ]

    def test_numbered(self) -> None:
        rows = [{"t": "a"}] * 10
        lines = to_markdown_table(rows, ["t"], numbered=True)
        assert lines[0] == "| #  | t |"
        assert lines[1] == "|----|---|"
        assert lines[2] == "| 1  | a |"
        assert lines[-1] == "| 10 | a |"

    def test_wide_characters_align_by_display_width(self) -> None:
        rows = [{"r": "⭐⭐"}, {"r": "abcd"}]
        lines = to_markdown_table(rows, ["r"])
        # Each star occupies two terminal cells.
        assert lines[2] == "| ⭐⭐ |"
        assert lines[3] == "| abcd |"


class TestFormatResult:
    def test_json_output(self) -> None:
        result = ServiceResult(ok=True, op="list_views", data={"count": 0, "items": []})
        parsed = json.loads(format_result(result, settings=OutputSettings(json_output=True)))
        assert parsed["ok"] is True
        assert parsed["data"] == {"count": 0, "items": []}

    def test_human_output(self) -> None:
        result = ServiceResult(ok=True, op="list_views", data={"count": 0, "items": []})
        assert format_result(result) == "No views configured."
