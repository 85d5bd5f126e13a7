from __future__ import annotations

import json
from typing import TYPE_CHECKING

from critpath import cli, loaders

if TYPE_CHECKING:
    import pathlib

    import click.testing


# =============================================================================
# schema
# =============================================================================


def test_schema_json(runner: click.testing.CliRunner) -> None:
    result = runner.invoke(cli.cli, ["schema"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == loaders.GraphSpec.model_json_schema()
    assert "\n  " in result.stdout


def test_schema_compact(runner: click.testing.CliRunner) -> None:
    result = runner.invoke(cli.cli, ["schema", "--indent", "0"])

    assert result.exit_code == 0
    assert result.stdout.count("\n") == 1


# =============================================================================
# config
# =============================================================================


def test_config_shows_defaults(runner: click.testing.CliRunner) -> None:
    result = runner.invoke(cli.cli, ["config"])

    assert result.exit_code == 0, result.output
    assert "analysis.default_source = 0 (default)" in result.stdout
    assert "display.color = (not set) (default)" in result.stdout
    assert "# Decimal places for millisecond timings" in result.stdout


def test_config_marks_overrides(
    runner: click.testing.CliRunner, isolated_config: pathlib.Path
) -> None:
    (isolated_config / ".critpath.yaml").write_text("display:\n  precision: 6\n")

    result = runner.invoke(cli.cli, ["config"])

    assert "display.precision = 6 (config)" in result.stdout


def test_config_json(runner: click.testing.CliRunner, tmp_path: pathlib.Path) -> None:
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("analysis:\n  show_paths: false\n")

    result = runner.invoke(cli.cli, ["--config", str(cfg), "config", "--json"])

    data = json.loads(result.stdout)
    assert data["analysis"] == {"default_source": 0, "show_paths": False}
    assert data["display"] == {"precision": 3, "color": None}


def test_config_files(
    runner: click.testing.CliRunner, isolated_config: pathlib.Path, tmp_path: pathlib.Path
) -> None:
    local = isolated_config / ".critpath.yaml"
    local.write_text("{}\n")
    explicit = tmp_path / "cfg.yaml"
    explicit.write_text("{}\n")

    result = runner.invoke(cli.cli, ["--config", str(explicit), "config", "--files"])

    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == [
        "default: (built-in)",
        f"local: {local}",
        f"explicit: {explicit}",
    ]


def test_config_files_none(runner: click.testing.CliRunner) -> None:
    result = runner.invoke(cli.cli, ["config", "--files"])
    assert result.exit_code == 0
    assert result.stdout == "default: (built-in)\n"


def test_config_invalid_file(runner: click.testing.CliRunner, tmp_path: pathlib.Path) -> None:
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("display:\n  precision: 99\n")

    result = runner.invoke(cli.cli, ["--config", str(cfg), "config"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
