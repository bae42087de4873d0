"""Exception taxonomy for a sheetgraph run.

Every failure here ends the operation that raised it, except render
failures under ``continue_on_error``. Services translate them into a
failed :class:`~sheetgraph.services.result.ServiceResult` with the
matching ``code``. Unresolved references have no exception:
they are dropped silently during graph construction.
"""

from __future__ import annotations

from typing import Any


class SheetgraphError(Exception):
    """Base class for all sheetgraph failures."""

    code = "ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class MalformedInputError(SheetgraphError):
    """The input document cannot be parsed into records."""

    code = "MALFORMED_INPUT"


class IOFailureError(SheetgraphError):
    """Reading the input or writing an output file failed."""

    code = "IO_FAILURE"


class InputFailureError(IOFailureError):
    """The input file is missing or unreadable."""


class OutputFailureError(IOFailureError):
    """A diagram file or the output directory could not be written."""


class RenderFailureError(SheetgraphError):
    """The diagram renderer failed to compile or render a payload."""

    code = "RENDER_FAILURE"
