"""Diagram renderers — compile D2 source into image bytes.

The core only needs :class:`DiagramRenderer`: a callable-like object that
takes the edge payload and returns opaque image data, raising
:class:`~sheetgraph.domain.errors.RenderFailureError` on failure.

:class:`D2Renderer` shells out to the ``d2`` binary. A missing binary is a
render failure like any other.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Protocol

from sheetgraph.domain.errors import RenderFailureError

logger = logging.getLogger(__name__)


class DiagramRenderer(Protocol):
    """Anything that turns D2 source into image bytes."""

    def render(self, source: str) -> bytes: ...


@dataclass(frozen=True)
class D2Renderer:
    """Render through the ``d2`` CLI, reading stdin and writing stdout."""

    binary: str = "d2"
    layout: str = "elk"
    theme: int = 0
    pad: int = 5
    output_format: str = "svg"
    timeout: float | None = None

    def command(self) -> list[str]:
        return [
            self.binary,
            f"--layout={self.layout}",
            f"--theme={self.theme}",
            f"--pad={self.pad}",
            f"--stdout-format={self.output_format}",
            "-",
            "-",
        ]

    def render(self, source: str) -> bytes:
        try:
            proc = subprocess.run(
                self.command(),
                input=source.encode("utf-8"),
                capture_output=True,
                timeout=self.timeout,
                check=True,
            )
        except FileNotFoundError as exc:
            msg = f"d2 binary not found: {self.binary}"
            raise RenderFailureError(msg, binary=self.binary) from exc
        except subprocess.TimeoutExpired as exc:
            msg = f"d2 timed out after {self.timeout}s"
            raise RenderFailureError(msg, timeout=self.timeout) from exc
        except subprocess.CalledProcessError as exc:
            stderr = exc.stderr.decode("utf-8", errors="replace").strip() if exc.stderr else ""
            msg = f"d2 exited with status {exc.returncode}"
            if stderr:
                msg += f": {stderr.splitlines()[-1]}"
            raise RenderFailureError(msg, returncode=exc.returncode, stderr=stderr) from exc
        except OSError as exc:
            msg = f"d2 could not be started: {exc}"
            raise RenderFailureError(msg, binary=self.binary) from exc

        logger.debug("d2 rendered %d bytes", len(proc.stdout))
        return proc.stdout
