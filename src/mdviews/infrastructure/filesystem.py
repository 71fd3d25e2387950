"""Markdown document discovery and reading.

Pure parsing lives in :mod:`mdviews.domain.frontmatter` (correct dependency
direction: infrastructure -> domain). This module handles file discovery,
reading, and the optional worker pool used to parse many files at once.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from mdviews.domain.frontmatter import Record, parse_document

logger = logging.getLogger(__name__)

# Directories to skip when discovering documents.
_SKIP_DIRS = frozenset({".git", ".obsidian", ".trash"})


@dataclass
class ScanResult:
    """Records parsed from a directory plus per-file read failures."""

    records: list[Record] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def resolve_source(source: str | Path, *, home: Path | None = None) -> Path:
    """Expand ``~`` and resolve relative *source* paths against *home*."""
    path = Path(source).expanduser()
    if home is not None and not path.is_absolute():
        path = home.expanduser() / path
    return path


def find_markdown_files(directory: Path, *, recursive: bool = True) -> list[Path]:
    """Discover ``*.md`` files under *directory*, sorted by path.

    Skips ``.git/``, ``.obsidian/`` and ``.trash/``.
    """
    pattern = "**/*.md" if recursive else "*.md"
    results: list[Path] = []
    for path in directory.glob(pattern):
        if not path.is_file():
            continue
        if any(part in _SKIP_DIRS for part in path.relative_to(directory).parts):
            continue
        results.append(path)
    return sorted(results)


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


def read_document(path: Path) -> Record:
    """Read one markdown file and parse its frontmatter.

    Raises ``OSError`` / ``UnicodeDecodeError`` when the file cannot be read.
    """
    content = path.read_text(encoding="utf-8")
    return parse_document(content, str(path))


def _read_or_warn(path: Path) -> Record | str:
    try:
        return read_document(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Skipping unreadable file %s: %s", path, exc)
        return f"Could not read {path}: {exc}"


def scan_directory(
    directory: Path,
    *,
    recursive: bool = True,
    workers: int = 1,
) -> ScanResult:
    """Parse every markdown file under *directory*.

    With ``workers > 1`` files are parsed on a thread pool. Records keep the
    sorted file order either way. Unreadable files become warnings.
    """
    paths = find_markdown_files(directory, recursive=recursive)
    logger.debug("Found %d markdown files in %s", len(paths), directory)

    if workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            outcomes = list(executor.map(_read_or_warn, paths))
    else:
        outcomes = [_read_or_warn(path) for path in paths]

    result = ScanResult()
    for outcome in outcomes:
        if isinstance(outcome, Record):
            result.records.append(outcome)
        else:
            result.warnings.append(outcome)
    return result
