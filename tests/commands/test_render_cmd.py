"""Tests for the render command."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from sheetgraph.cli import cli
from tests.conftest import FakeRenderer, entry

LABELS = ["1.0.svg", "2.0.svg", "3.0.svg", "4.0.svg"]


@pytest.mark.usefixtures("_isolated_project", "sample_export")
class TestRenderCommand:
    def test_render(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["render"])
        assert result.exit_code == 0, result.output
        assert "written_count: 4" in result.output
        assert sorted(p.name for p in (tmp_path / "diagrams").iterdir()) == LABELS

    def test_render_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "render"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["op"] == "render"
        assert data["data"]["written_count"] == 4
        assert [d["label"] for d in data["data"]["diagrams"]] == ["1.0", "2.0", "3.0", "4.0"]

    def test_render_quiet_prints_paths(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["-q", "render"])
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert [Path(line).name for line in lines] == LABELS

    def test_render_verbose_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "render"])
        assert result.exit_code == 0
        assert "2.0 Costs" in result.output

    def test_output_dir_option(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["render", "--output-dir", "out/d"])
        assert result.exit_code == 0
        assert (tmp_path / "out" / "d" / "2.0.svg").is_file()

    def test_input_option(
        self, cli_runner: CliRunner, write_export: Callable[..., Path], tmp_path: Path
    ) -> None:
        other = write_export([entry(1, "9.9 A", [2]), entry(2, "9.8 B", [1])], name="other.json")
        result = cli_runner.invoke(cli, ["render", "--input", str(other)])
        assert result.exit_code == 0
        assert sorted(p.name for p in (tmp_path / "diagrams").iterdir()) == ["9.8.svg", "9.9.svg"]

    def test_workers(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["render", "--workers", "3"])
        assert result.exit_code == 0
        assert sorted(p.name for p in (tmp_path / "diagrams").iterdir()) == LABELS

    def test_workers_must_be_positive(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["render", "--workers", "0"])
        assert result.exit_code == 2

    def test_fail_fast(
        self, cli_runner: CliRunner, fake_renderer: FakeRenderer, tmp_path: Path
    ) -> None:
        fake_renderer.fail_on = ("'2.0' -> '4.0'",)
        result = cli_runner.invoke(cli, ["--json", "render"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["error"]["code"] == "RENDER_FAILURE"
        assert data["error"]["detail"]["label"] == "2.0"
        assert sorted(p.name for p in (tmp_path / "diagrams").iterdir()) == ["1.0.svg"]

    def test_continue_on_error(self, cli_runner: CliRunner, fake_renderer: FakeRenderer) -> None:
        fake_renderer.fail_on = ("'2.0' -> '4.0'",)
        result = cli_runner.invoke(cli, ["--json", "render", "--continue-on-error"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["error"]["code"] == "PARTIAL_FAILURE"
        assert data["data"]["written_count"] == 2

    def test_failure_human_output(self, cli_runner: CliRunner, fake_renderer: FakeRenderer) -> None:
        fake_renderer.fail_on = ("'1.0'",)
        result = cli_runner.invoke(cli, ["render"])
        assert result.exit_code == 1
        assert "ERROR" in result.output
        assert "fake render failure" in result.output


@pytest.mark.usefixtures("_isolated_project")
class TestRenderCommandEdgeCases:
    def test_missing_input(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "render"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "IO_FAILURE"

    def test_malformed_input(self, cli_runner: CliRunner, write_export: Callable[..., Path]) -> None:
        write_export([{"id": 1, "name": "no type"}])
        result = cli_runner.invoke(cli, ["--json", "render"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "MALFORMED_INPUT"

    def test_label_collision_warning(
        self, cli_runner: CliRunner, write_export: Callable[..., Path]
    ) -> None:
        write_export([entry(1, "1.0 A", [2]), entry(2, "1.0 B", [1])])
        result = cli_runner.invoke(cli, ["render"])
        assert result.exit_code == 0
        assert "WARNING: 2 nodes share label '1.0'" in result.output

    def test_config_file(self, cli_runner: CliRunner, tmp_path: Path, write_export: Callable[..., Path]) -> None:
        write_export([entry(1, "1.0 A", [2]), entry(2, "2.0 B", [1])], name="export.json")
        (tmp_path / "sheetgraph.toml").write_text(
            '[input]\npath = "export.json"\n[render]\noutput_dir = "svg"\n'
        )
        result = cli_runner.invoke(cli, ["render"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "svg" / "1.0.svg").is_file()
