"""Tests for markdown discovery, reading, and directory scans."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdviews.infrastructure.filesystem import (
    find_markdown_files,
    read_document,
    resolve_source,
    scan_directory,
)
from tests.conftest import write_notes


class TestResolveSource:
    def test_relative_to_home(self, tmp_path: Path) -> None:
        assert resolve_source("books", home=tmp_path) == tmp_path / "books"

    def test_absolute_ignores_home(self, tmp_path: Path) -> None:
        assert resolve_source(tmp_path / "x", home=Path("/elsewhere")) == tmp_path / "x"

    def test_expands_user(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        assert resolve_source("~/notes") == tmp_path / "notes"


class TestFindMarkdownFiles:
    def test_recursive_sorted(self, tmp_path: Path) -> None:
        write_notes(tmp_path, {"b.md": "", "a.md": "", "sub/c.md": "", "notes.txt": ""})
        found = find_markdown_files(tmp_path)
        assert [p.relative_to(tmp_path).as_posix() for p in found] == ["a.md", "b.md", "sub/c.md"]

    def test_non_recursive(self, tmp_path: Path) -> None:
        write_notes(tmp_path, {"a.md": "", "sub/c.md": ""})
        found = find_markdown_files(tmp_path, recursive=False)
        assert [p.name for p in found] == ["a.md"]

    def test_skips_tool_directories(self, tmp_path: Path) -> None:
        write_notes(
            tmp_path,
            {"a.md": "", ".obsidian/x.md": "", ".git/y.md": "", ".trash/z.md": ""},
        )
        assert [p.name for p in find_markdown_files(tmp_path)] == ["a.md"]


class TestReadAndScan:
    def test_read_document(self, tmp_path: Path) -> None:
        write_notes(tmp_path, {"Dune.md": "---\ntype: book\n---\n"})
        record = read_document(tmp_path / "Dune.md")
        assert record["type"] == "book"
        assert record.file.path == str(tmp_path / "Dune.md")
        assert record.file.title == "Dune"

    def test_scan_directory(self, notes_dir: Path) -> None:
        result = scan_directory(notes_dir)
        assert result.warnings == []
        assert [r.file.title for r in result.records] == [
            "arrival",
            "dune",
            "hard-fork",
            "piranesi",
            "project-hail-mary",
        ]

    def test_worker_pool_keeps_order(self, notes_dir: Path) -> None:
        serial = scan_directory(notes_dir)
        pooled = scan_directory(notes_dir, workers=4)
        assert pooled.records == serial.records

    def test_unreadable_file_becomes_warning(self, tmp_path: Path) -> None:
        write_notes(tmp_path, {"ok.md": "---\na: 1\n---\n"})
        (tmp_path / "bad.md").write_bytes(b"---\na: \xff\xfe\n---\n")
        result = scan_directory(tmp_path)
        assert [r.file.name for r in result.records] == ["ok.md"]
        assert len(result.warnings) == 1
        assert "bad.md" in result.warnings[0]

    def test_empty_directory(self, tmp_path: Path) -> None:
        result = scan_directory(tmp_path)
        assert result.records == []
        assert result.warnings == []
