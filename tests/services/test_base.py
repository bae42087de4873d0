"""Tests for BaseService plumbing."""

from collections.abc import Callable
from pathlib import Path

from sheetgraph.domain.errors import OutputFailureError
from sheetgraph.infrastructure.workspace import Workspace
from sheetgraph.services.base import BaseService
from tests.conftest import SAMPLE_EXPORT, entry


class TestBuild:
    def test_build_sample(self, workspace: Workspace, sample_export: Path) -> None:
        built = BaseService(workspace)._build()
        assert built.input_path == sample_export
        assert len(built.records) == len(SAMPLE_EXPORT)
        assert [r.id for r in built.eligible] == [10, 20, 30, 40, 70]
        assert list(built.store) == [10, 20, 30, 40]
        assert built.stats.pruned == 1

    def test_explicit_input(self, workspace: Workspace, write_export: Callable[..., Path]) -> None:
        other = write_export([entry(1, "1 A", [2]), entry(2, "2 B", [1])], name="other.json")
        built = BaseService(workspace)._build(other)
        assert built.input_path == other
        assert list(built.store) == [1, 2]


class TestFailure:
    def test_detail_merged(self) -> None:
        exc = OutputFailureError("Cannot write", path="/x/1.0.svg")
        result = BaseService._failure("render", exc, warnings=["w"], label="1.0")
        assert result.ok is False
        assert result.op == "render"
        assert result.warnings == ["w"]
        assert result.error is not None
        assert result.error.code == "IO_FAILURE"
        assert result.error.message == "Cannot write"
        assert result.error.detail == {"path": "/x/1.0.svg", "label": "1.0"}
