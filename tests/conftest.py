"""Shared pytest fixtures and test helpers for mdviews tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from mdviews.config.settings import MdvSettings
from mdviews.domain.frontmatter import Record, parse_document

BOOKS: dict[str, str] = {
    "dune.md": """---
title: Dune (1965)
type: book
rating: ⭐️⭐️⭐️⭐️⭐️
start: 2024-03-10
end: 2024-04-02
tags: [scifi, classic]
killed: false
---
# Dune
""",
    "project-hail-mary.md": """---
type: audiobook
rating: ⭐️⭐️⭐️⭐️
start: 2024-01-09
tags:
  - scifi
  - space
---
Narrated by Ray Porter.
""",
    "arrival.md": """---
type: movie
rating: ⭐️⭐️⭐️
start: 2024-02-01
killed: true
---
""",
    "piranesi.md": """---
type: book
start: 2023-11-20
killed: ""
---
""",
    "hard-fork.md": """---
type: podcast
start: 2024-05-05
---
""",
}


def write_notes(directory: Path, notes: dict[str, str]) -> Path:
    """Write ``{relative_path: content}`` files under *directory*."""
    for name, content in notes.items():
        path = directory / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return directory


def make_record(name: str = "note.md", **fields: object) -> Record:
    """Build a record as the parser would for ``/vault/<name>``."""
    record = parse_document("", f"/vault/{name}")
    return Record(file=record.file, fields=fields)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's MDVIEWS_* environment out of the tests."""
    import os

    for key in list(os.environ):
        if key.startswith("MDVIEWS_"):
            monkeypatch.delenv(key)


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def notes_dir(tmp_path: Path) -> Path:
    """Directory of five media notes with mixed frontmatter."""
    return write_notes(tmp_path / "media", BOOKS)


@pytest.fixture
def settings(tmp_path: Path) -> MdvSettings:
    """Settings with no TOML file and default sections."""
    return MdvSettings.from_cli(start=tmp_path)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run CLI tests from a temp directory so no stray mdviews.toml is found."""
    monkeypatch.chdir(tmp_path)
