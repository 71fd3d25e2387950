"""Tests for MdvSettings — TOML source, env vars, and view models."""

from __future__ import annotations

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from mdviews.config.models import DEFAULT_FIELDS, DisplayMode, ViewConfig
from mdviews.config.settings import MdvSettings
from mdviews.domain.conditions import Literal, Operator, OperatorKind
from mdviews.domain.query import SortOrder, SortSpec
from mdviews.domain.values import DateValue

VIEWS_TOML = """\
home = "~/vault"
display = "markdown"

[scan]
workers = 4

[views.reading]
from = "books"
description = "Books in progress"
fields = ["title", "type", "rating", "start", "killed"]
display_fields = ["title", "rating", "start"]
where = { type = "book", killed = false, start = { op = ">=", value = 2024-01-01 } }
sort = { field = "start", order = "desc" }
limit = 10
numbered = true

[views.all]
from = "media"
"""


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = MdvSettings.from_cli(start=tmp_path)
        assert settings.home is None
        assert settings.config_path is None
        assert settings.display == DisplayMode.TABLE
        assert settings.scan.recursive is True
        assert settings.scan.workers == 1
        assert settings.query.fields == DEFAULT_FIELDS
        assert settings.query.sort == SortSpec(field="start", order=SortOrder.DESC)
        assert settings.views == {}

    def test_frozen(self, tmp_path: Path) -> None:
        settings = MdvSettings.from_cli(start=tmp_path)
        with pytest.raises(Exception):
            settings.verbose = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_views(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        (tmp_path / "mdviews.toml").write_text(VIEWS_TOML, encoding="utf-8")
        settings = MdvSettings.from_cli(start=tmp_path)

        assert settings.config_path == tmp_path / "mdviews.toml"
        assert settings.home == tmp_path / "vault"
        assert settings.display == DisplayMode.MARKDOWN
        assert settings.scan.workers == 4
        assert settings.scan.recursive is True

        view = settings.views["reading"]
        assert view.source == "books"
        assert view.columns == ["title", "rating", "start"]
        where = view.to_query_spec().where
        assert where["type"] == Literal("book")
        assert where["killed"] == Literal(False)
        assert where["start"] == Operator(
            OperatorKind.GTE, DateValue(2024, 1, 1, "2024-01-01")
        )
        assert view.sort == SortSpec(field="start", order=SortOrder.DESC)
        assert view.numbered is True

    def test_discovered_from_subdirectory(self, tmp_path: Path) -> None:
        (tmp_path / "mdviews.toml").write_text('display = "markdown"\n', encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        settings = MdvSettings.from_cli(start=nested)
        assert settings.display == DisplayMode.MARKDOWN

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text("[scan]\nrecursive = false\n", encoding="utf-8")
        settings = MdvSettings.from_cli(config_path=str(cfg), start=tmp_path / "none")
        assert settings.scan.recursive is False

    def test_missing_explicit_config(self, tmp_path: Path) -> None:
        with pytest.raises(click.ClickException, match="Config file not found"):
            MdvSettings.from_cli(config_path=str(tmp_path / "nope.toml"))

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "mdviews.toml").write_text("display = [unclosed\n", encoding="utf-8")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            MdvSettings.from_cli(start=tmp_path)

    def test_unknown_operator_in_view_is_deferred(self, tmp_path: Path) -> None:
        (tmp_path / "mdviews.toml").write_text(
            '[views.bad]\nfrom = "x"\nwhere = { a = { op = "like", value = 1 } }\n',
            encoding="utf-8",
        )
        settings = MdvSettings.from_cli(start=tmp_path)
        with pytest.raises(ValidationError, match="Unknown operator"):
            settings.views["bad"].to_query_spec()

    def test_invalid_section_value(self, tmp_path: Path) -> None:
        (tmp_path / "mdviews.toml").write_text("[scan]\nworkers = 0\n", encoding="utf-8")
        with pytest.raises(click.ClickException, match="Invalid configuration"):
            MdvSettings.from_cli(start=tmp_path)


class TestPriority:
    def test_cli_flags_override_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MDVIEWS_VERBOSE", "false")
        settings = MdvSettings.from_cli(start=tmp_path, verbose=True)
        assert settings.verbose is True

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "mdviews.toml").write_text('display = "markdown"\n', encoding="utf-8")
        monkeypatch.setenv("MDVIEWS_DISPLAY", "table")
        settings = MdvSettings.from_cli(start=tmp_path)
        assert settings.display == DisplayMode.TABLE

    def test_nested_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MDVIEWS_SCAN__WORKERS", "3")
        settings = MdvSettings.from_cli(start=tmp_path)
        assert settings.scan.workers == 3


class TestViewConfig:
    def test_columns_fall_back(self) -> None:
        assert ViewConfig(fields=["a", "b"]).columns == ["a", "b"]
        assert ViewConfig().columns == DEFAULT_FIELDS

    def test_to_query_spec(self) -> None:
        view = ViewConfig.model_validate(
            {"from": "x", "where": {"type": "book"}, "limit": 3, "fields": ["title"]}
        )
        spec = view.to_query_spec()
        assert spec.where == {"type": Literal("book")}
        assert spec.limit == 3
        assert spec.fields == ["title"]
        assert spec.sort is None
