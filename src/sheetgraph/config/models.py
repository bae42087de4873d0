"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, sheetgraph.toml only contains
overrides. A project with a ``data.json`` next to it needs no config file.
"""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from sheetgraph.domain.filters import DEFAULT_EXCLUDED_PARENT_IDS, MEASURE_SHEET
from sheetgraph.domain.labels import SHORT_LABEL_PATTERN


class InputConfig(BaseModel):
    """[input] section."""

    model_config = {"frozen": True}

    path: str = "data.json"


class FilterConfig(BaseModel):
    """[filter] section."""

    model_config = {"frozen": True}

    node_type: str = MEASURE_SHEET
    excluded_parent_ids: list[int] = Field(
        default_factory=lambda: sorted(DEFAULT_EXCLUDED_PARENT_IDS)
    )


class RenderConfig(BaseModel):
    """[render] section."""

    model_config = {"frozen": True}

    output_dir: str = "diagrams"
    # d2 writes only these two formats to stdout.
    format: Literal["svg", "png"] = "svg"
    d2_binary: str = "d2"
    layout: str = "elk"
    theme: int = 0
    pad: int = 5
    timeout_seconds: float | None = None
    workers: int = Field(default=1, ge=1)
    continue_on_error: bool = False
    label_pattern: str = SHORT_LABEL_PATTERN.pattern

    @field_validator("label_pattern")
    @classmethod
    def _compiles(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            msg = f"Invalid label_pattern {value!r}: {exc}"
            raise ValueError(msg) from exc
        return value

    @property
    def compiled_label_pattern(self) -> re.Pattern[str]:
        return re.compile(self.label_pattern)


class SheetgraphConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    input: InputConfig = Field(default_factory=InputConfig)
    filter: FilterConfig = Field(default_factory=FilterConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
