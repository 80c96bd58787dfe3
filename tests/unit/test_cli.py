"""Tests for the plant catalog CLI."""

import json
from pathlib import Path

from typer.testing import CliRunner

from plant_catalog.cli import app

runner = CliRunner()


def test_search_command_lists_matches(data_dir: Path) -> None:
    result = runner.invoke(app, ["search", "rhod", "--source", str(data_dir)])
    assert result.exit_code == 0, result.output
    assert "Found 1 plants" in result.output
    assert "Rhododendron catawbiense (Catawba Rhododendron)" in result.output
    assert "zones 4a - 8" in result.output


def test_search_command_filters_by_facets(data_dir: Path) -> None:
    result = runner.invoke(
        app, ["search", "--type", "Shrub", "--no-problem-plants", "--json", "--source", str(data_dir)]
    )
    assert result.exit_code == 0, result.output
    parsed = json.loads(result.output)
    assert parsed["total"] == 1
    assert parsed["results"][0]["key"] == "rosa-rugosa"


def test_search_command_respects_window(data_dir: Path) -> None:
    result = runner.invoke(app, ["search", "--window", "2", "--json", "--source", str(data_dir)])
    assert result.exit_code == 0, result.output
    parsed = json.loads(result.output)
    assert parsed["count"] == 2
    assert parsed["total"] == 4
    assert parsed["has_more"] is True


def test_search_command_fails_without_dataset(tmp_path: Path) -> None:
    result = runner.invoke(app, ["search", "rose", "--source", str(tmp_path)])
    assert result.exit_code == 1


def test_facets_json_outputs_sorted_values(data_dir: Path) -> None:
    result = runner.invoke(app, ["facets", "--json", "--source", str(data_dir)])
    assert result.exit_code == 0, result.output
    parsed = json.loads(result.output)
    assert [v["value"] for v in parsed["maintenance"]] == ["Low", "Medium"]
    assert parsed["type"][1] == {"value": "Shrub", "count": 2}


def test_show_command_renders_detail(data_dir: Path) -> None:
    result = runner.invoke(app, ["show", "rosa-rugosa", "--source", str(data_dir)])
    assert result.exit_code == 0, result.output
    assert "Rosa rugosa" in result.output
    assert "Family: Rosaceae" in result.output


def test_show_json_outputs_valid_json(data_dir: Path) -> None:
    result = runner.invoke(app, ["show", "rosa-rugosa", "--json", "--source", str(data_dir)])
    assert result.exit_code == 0, result.output
    parsed = json.loads(result.output)
    assert parsed["key"] == "rosa-rugosa"
    assert parsed["sections"][0]["title"] == "Basic Information"


def test_show_command_fails_for_unknown_plant(data_dir: Path) -> None:
    result = runner.invoke(app, ["show", "no-such-plant", "--source", str(data_dir)])
    assert result.exit_code == 1


def test_serve_command_shows_help() -> None:
    result = runner.invoke(app, ["serve", "--help"])
    assert result.exit_code == 0, result.output
    assert "MCP" in result.output or "server" in result.output.lower()
