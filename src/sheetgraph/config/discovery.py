"""Locating and reading ``sheetgraph.toml``.

Resolution order for the config file:

1. ``-c/--config`` on the command line (must exist)
2. ``SHEETGRAPH_CONFIG`` (a file, or a directory holding ``sheetgraph.toml``)
3. the first ``sheetgraph.toml`` found walking up from the start directory

No file at all is fine: every setting has a code default.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import click

CONFIG_FILENAME = "sheetgraph.toml"
CONFIG_ENV_VAR = "SHEETGRAPH_CONFIG"


def _walk_up(start: Path) -> Iterator[Path]:
    here = start.resolve()
    yield here
    yield from here.parents


def _from_env() -> Path | None:
    path = Path(os.environ[CONFIG_ENV_VAR]).expanduser()
    if path.is_dir():
        path = path / CONFIG_FILENAME
    return path if path.is_file() else None


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file for a project rooted at or above *start*.

    ``SHEETGRAPH_CONFIG`` short-circuits the walk; when it points nowhere,
    no config is used.
    """
    if os.environ.get(CONFIG_ENV_VAR):
        return _from_env()
    for directory in _walk_up(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def locate_config(explicit: str | Path | None = None, start: Path | None = None) -> Path | None:
    """Resolve the config file for one invocation.

    Raises:
        click.ClickException: *explicit* was given but is not a file.
    """
    if explicit is None or explicit == "":
        return find_config(start)
    path = Path(explicit).expanduser()
    if not path.is_file():
        msg = f"Config file not found: {path}"
        raise click.ClickException(msg)
    return path


def read_config(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML.

    Raises:
        click.ClickException: The file is unreadable or not valid TOML.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read config {path}: {exc.strerror or exc}"
        raise click.ClickException(msg) from exc
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc
