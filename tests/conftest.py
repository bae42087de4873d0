"""Shared pytest fixtures and test helpers for sheetgraph tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from sheetgraph.config.settings import SheetgraphSettings
from sheetgraph.domain.errors import RenderFailureError
from sheetgraph.infrastructure.workspace import Workspace


class FakeRenderer:
    """Stands in for the d2 binary: echoes the source inside an <svg> tag.

    Sources containing any of *fail_on* raise RenderFailureError.
    """

    def __init__(self, *, fail_on: tuple[str, ...] = ()) -> None:
        self.fail_on = fail_on
        self.sources: list[str] = []

    def render(self, source: str) -> bytes:
        self.sources.append(source)
        if any(marker in source for marker in self.fail_on):
            raise RenderFailureError("fake render failure", source=source)
        return f"<svg>{source}</svg>".encode()


def entry(
    entry_id: int,
    name: str,
    refs: list[int] | None = None,
    *,
    type_name: str = "MeasureSheet",
    parent_id: int = 1,
    is_folder: bool = False,
) -> dict[str, Any]:
    """Build one raw export entry as it appears in the JSON file."""
    return {
        "uuid": f"uuid-{entry_id}",
        "id": entry_id,
        "parentId": parent_id,
        "name": name,
        "typeName": type_name,
        "isFolder": is_folder,
        "directReferences": [
            {"id": ref, "typeName": "MeasureSheet", "dependencyType": [1]} for ref in refs or []
        ],
        "SORT_ORDER": 0,
    }


# A small solution export:
#   1.0 -> 2.0 -> 3.0 (2.0 depends on 1.0, 3.0 depends on 2.0)
#   1.0 depends on 3.0 as well, closing a cycle
#   4.0 references itself and 2.0
#   plus a folder, an archived sheet, a non-sheet and a dangling reference.
SAMPLE_EXPORT: list[dict[str, Any]] = [
    entry(1, "Root folder", [2], type_name="Folder", is_folder=True),
    entry(10, "1.0 Inputs", [30]),
    entry(20, "2.0 Costs", [10, 999]),
    entry(30, "3.0 Margin", [20]),
    entry(40, "4.0 Forecast", [40, 20]),
    entry(50, "5.0 Archived", [10], parent_id=230),
    entry(60, "Lookup table", [10], type_name="DataTable"),
    entry(70, "7.0 Standalone", [60]),
]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def write_export(tmp_path: Path) -> Callable[..., Path]:
    """Write raw entries to ``data.json`` (or *name*) and return the path."""

    def _write(entries: list[dict[str, Any]], name: str = "data.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(entries), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_export(write_export: Callable[..., Path]) -> Path:
    return write_export(SAMPLE_EXPORT)


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def workspace(tmp_path: Path, fake_renderer: FakeRenderer) -> Workspace:
    """Workspace rooted at a temp directory with the fake renderer injected."""
    settings = SheetgraphSettings.from_cli(project_root=tmp_path)
    return Workspace(settings, renderer=fake_renderer)


@pytest.fixture
def _isolated_project(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, fake_renderer: FakeRenderer
) -> None:
    """Run CLI commands inside a temp project with d2 replaced by the fake renderer.

    Use via ``@pytest.mark.usefixtures("_isolated_project")``. Tests that need
    the directory can request ``tmp_path`` (pytest hands out the same one).
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SHEETGRAPH_CONFIG", raising=False)
    monkeypatch.setattr(
        "sheetgraph.infrastructure.workspace.D2Renderer",
        lambda **_kwargs: fake_renderer,
    )
