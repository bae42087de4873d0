"""Workspace — the single dependency injected into every service.

Owns the resolved input/output paths, the filter policy, and the diagram
renderer. The renderer is created lazily so commands that never render
(``neighbors``, ``summary``, ``export``) never look for the ``d2`` binary.
"""

from __future__ import annotations

import re
from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING

from sheetgraph.domain.filters import FilterPolicy
from sheetgraph.infrastructure.loader import load_records
from sheetgraph.infrastructure.renderer import D2Renderer, DiagramRenderer

if TYPE_CHECKING:
    from sheetgraph.config.settings import SheetgraphSettings
    from sheetgraph.domain.records import Record


class Workspace:
    """Resolved runtime environment for one invocation."""

    def __init__(
        self,
        settings: SheetgraphSettings,
        *,
        renderer: DiagramRenderer | None = None,
    ) -> None:
        self.settings = settings
        self._renderer = renderer

    @property
    def root(self) -> Path:
        return self.settings.project_root

    @property
    def input_path(self) -> Path:
        return self.settings.resolve(self.settings.input.path)

    @property
    def output_dir(self) -> Path:
        return self.settings.resolve(self.settings.render.output_dir)

    @property
    def output_format(self) -> str:
        return self.settings.render.format

    @cached_property
    def filter_policy(self) -> FilterPolicy:
        cfg = self.settings.filter
        return FilterPolicy.create(
            node_type=cfg.node_type,
            excluded_parent_ids=cfg.excluded_parent_ids,
        )

    @cached_property
    def label_pattern(self) -> re.Pattern[str]:
        return self.settings.render.compiled_label_pattern

    @property
    def renderer(self) -> DiagramRenderer:
        """The diagram renderer (a :class:`D2Renderer` unless one was injected)."""
        if self._renderer is None:
            cfg = self.settings.render
            self._renderer = D2Renderer(
                binary=cfg.d2_binary,
                layout=cfg.layout,
                theme=cfg.theme,
                pad=cfg.pad,
                output_format=cfg.format,
                timeout=cfg.timeout_seconds,
            )
        return self._renderer

    def load_records(self, path: Path | None = None) -> list[Record]:
        """Load the export at *path* (default: the configured input)."""
        return load_records(path or self.input_path)
