"""Tests for the d2 subprocess renderer."""

import subprocess
from typing import Any

import pytest

from sheetgraph.domain.errors import RenderFailureError
from sheetgraph.infrastructure.renderer import D2Renderer


class _FakeRun:
    def __init__(self, *, stdout: bytes = b"<svg/>", exc: BaseException | None = None) -> None:
        self.stdout = stdout
        self.exc = exc
        self.calls: list[tuple[list[str], dict[str, Any]]] = []

    def __call__(self, cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[bytes]:
        self.calls.append((cmd, kwargs))
        if self.exc is not None:
            raise self.exc
        return subprocess.CompletedProcess(cmd, 0, stdout=self.stdout, stderr=b"")


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> _FakeRun:
    run = _FakeRun()
    monkeypatch.setattr("sheetgraph.infrastructure.renderer.subprocess.run", run)
    return run


class TestCommand:
    def test_default_command(self) -> None:
        assert D2Renderer().command() == [
            "d2",
            "--layout=elk",
            "--theme=0",
            "--pad=5",
            "--stdout-format=svg",
            "-",
            "-",
        ]

    def test_custom_options(self) -> None:
        renderer = D2Renderer(binary="/opt/d2", layout="dagre", theme=200, pad=20, output_format="png")
        cmd = renderer.command()
        assert cmd[0] == "/opt/d2"
        assert "--layout=dagre" in cmd
        assert "--theme=200" in cmd
        assert "--pad=20" in cmd
        assert "--stdout-format=png" in cmd


class TestRender:
    def test_pipes_source_and_returns_stdout(self, fake_run: _FakeRun) -> None:
        data = D2Renderer(timeout=5.0).render("'1.0' -> '2.0'")
        assert data == b"<svg/>"
        (cmd, kwargs) = fake_run.calls[0]
        assert cmd == D2Renderer().command()
        assert kwargs["input"] == b"'1.0' -> '2.0'"
        assert kwargs["check"] is True
        assert kwargs["capture_output"] is True
        assert kwargs["timeout"] == 5.0

    def test_empty_payload_still_rendered(self, fake_run: _FakeRun) -> None:
        D2Renderer().render("")
        assert fake_run.calls[0][1]["input"] == b""

    def test_missing_binary(self, fake_run: _FakeRun) -> None:
        fake_run.exc = FileNotFoundError(2, "No such file")
        with pytest.raises(RenderFailureError, match="d2 binary not found") as excinfo:
            D2Renderer(binary="d2-missing").render("x")
        assert excinfo.value.code == "RENDER_FAILURE"
        assert excinfo.value.detail["binary"] == "d2-missing"

    def test_non_zero_exit(self, fake_run: _FakeRun) -> None:
        fake_run.exc = subprocess.CalledProcessError(
            1, ["d2"], output=b"", stderr=b"compiling\nerr: 1:5: unexpected token\n"
        )
        with pytest.raises(RenderFailureError, match="status 1: err: 1:5: unexpected token") as excinfo:
            D2Renderer().render("'a' ->")
        assert excinfo.value.detail["returncode"] == 1

    def test_timeout(self, fake_run: _FakeRun) -> None:
        fake_run.exc = subprocess.TimeoutExpired(["d2"], 1.5)
        with pytest.raises(RenderFailureError, match="timed out"):
            D2Renderer(timeout=1.5).render("x")

    def test_os_error(self, fake_run: _FakeRun) -> None:
        fake_run.exc = PermissionError(13, "Permission denied")
        with pytest.raises(RenderFailureError, match="could not be started"):
            D2Renderer().render("x")
