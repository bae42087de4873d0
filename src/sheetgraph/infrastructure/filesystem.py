"""Filesystem operations for diagram output.

One file per node: ``{output_dir}/{label}.{ext}``. Existing files are
overwritten.
"""

from __future__ import annotations

from pathlib import Path

from sheetgraph.domain.errors import OutputFailureError


def ensure_output_dir(output_dir: Path) -> Path:
    """Create *output_dir* (and parents) if needed and return it resolved."""
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Cannot create output directory {output_dir}: {exc.strerror or exc}"
        raise OutputFailureError(msg, path=str(output_dir)) from exc
    return output_dir.resolve()


def diagram_path(output_dir: Path, label: str, ext: str) -> Path:
    """Resolve the output file for a diagram labelled *label*.

    Raises:
        OutputFailureError: The label would escape *output_dir*.
    """
    result = output_dir / f"{label}.{ext}"
    if result.resolve().parent != output_dir.resolve():
        msg = f"Diagram path escapes output directory: {result}"
        raise OutputFailureError(msg, path=str(result), label=label)
    return result


def write_diagram(output_dir: Path, label: str, ext: str, data: bytes) -> Path:
    """Write rendered *data* for *label* and return the file path."""
    path = diagram_path(output_dir, label, ext)
    try:
        path.write_bytes(data)
    except OSError as exc:
        msg = f"Cannot write diagram {path}: {exc.strerror or exc}"
        raise OutputFailureError(msg, path=str(path), label=label) from exc
    return path
