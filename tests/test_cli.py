"""Tests for the CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from outlinegrid.cli import app

runner = CliRunner()


@pytest.fixture()
def outline_file(tmp_path: Path) -> Path:
    nodes = [
        {
            "id": "n1",
            "text": "Project",
            "children": [
                {"id": "n2", "text": "#p1 #urgent-high review this", "mentions": ["@ann"]},
                {"id": "n3", "text": "plain note"},
            ],
        }
    ]
    path = tmp_path / "outline.json"
    path.write_text(json.dumps(nodes), encoding="utf-8")
    return path


def test_show_prints_summary(outline_file: Path) -> None:
    """It should extract records and report how many were found."""

    result = runner.invoke(app, ["show", str(outline_file), "--sort", "P", "--filter", "review"])

    assert result.exit_code == 0, result.output
    assert "Found 1 record(s) in 3 item(s)." in result.output


def test_columns_lists_discovered_keys(outline_file: Path) -> None:
    """It should list fixed columns followed by discovered property keys."""

    result = runner.invoke(app, ["columns", str(outline_file)])

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines.index("P") < lines.index("urgent")
    assert "Parent" in lines


def test_show_reports_empty_outline(tmp_path: Path) -> None:
    """It should report an empty outline without failing."""

    path = tmp_path / "empty.json"
    path.write_text("[]", encoding="utf-8")

    result = runner.invoke(app, ["show", str(path)])

    assert result.exit_code == 0
    assert "The outline has no items to scan." in result.output


def test_show_reports_no_qualifying_records(tmp_path: Path) -> None:
    """It should say the outline was scanned when nothing carries a property."""

    path = tmp_path / "plain.json"
    path.write_text(json.dumps([{"id": "a", "text": "#todo nothing structured"}]), encoding="utf-8")

    result = runner.invoke(app, ["show", str(path)])

    assert result.exit_code == 0
    assert "none carry a property tag" in result.output


@pytest.mark.parametrize(
    "args",
    [
        ["--sort", "missing"],
        ["--where", "missing=x"],
        ["--where", "no-equals-sign"],
    ],
)
def test_show_rejects_bad_arguments(outline_file: Path, args: list[str]) -> None:
    """It should exit with a usage error for unknown columns or malformed filters."""

    result = runner.invoke(app, ["show", str(outline_file), *args])

    assert result.exit_code == 2


def test_show_missing_file(tmp_path: Path) -> None:
    """It should exit with a usage error when the outline cannot be read."""

    result = runner.invoke(app, ["show", str(tmp_path / "nope.json")])

    assert result.exit_code == 2


def test_show_titles_table_from_outline(tmp_path: Path) -> None:
    """It should use the outline's own title above the table."""

    path = tmp_path / "export.json"
    path.write_text(
        json.dumps({"title": "Roadmap", "nodes": [{"id": "a", "text": "#p1 ship"}]}),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["show", str(path)])

    assert result.exit_code == 0, result.output
    assert "Roadmap" in result.output
