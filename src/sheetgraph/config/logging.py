"""structlog configuration for sheetgraph.

Log lines go to stderr so stdout stays free for results and piped output.
Human mode uses the structlog console renderer; ``--log-json`` writes one
JSON object per line.

Levels:

========================  =========  ==========  ===========  ===========
logger                    default    ``-q``      ``-v``       ``--log-json``
========================  =========  ==========  ===========  ===========
``sheetgraph``            WARNING    ERROR       DEBUG        as default
``sheetgraph.render``     inherits   inherits    inherits     INFO
========================  =========  ==========  ===========  ===========

``sheetgraph.render`` carries one event per diagram (written or failed).
JSON logs are meant for collectors, so they get those events without ``-v``.
Third-party loggers stay at WARNING.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

PACKAGE_LOGGER = "sheetgraph"
RENDER_LOGGER = "sheetgraph.render"


def _package_level(*, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def _render_level(*, verbose: bool, log_json: bool) -> int:
    if log_json and not verbose:
        return logging.INFO
    return logging.NOTSET


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _handler(stream: TextIO, *, log_json: bool) -> logging.Handler:
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        isatty = getattr(stream, "isatty", None)
        renderer = structlog.dev.ConsoleRenderer(colors=bool(isatty and isatty()))

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_shared_processors(),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    return handler


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Route structlog and stdlib logging through one stderr handler.

    Safe to call repeatedly: the root handler is replaced, not stacked.

    Args:
        verbose: ``-v``; DEBUG for everything under ``sheetgraph``.
        quiet: ``-q``; only errors. Ignored when *verbose* is set.
        log_json: ``--log-json``; JSON lines plus per-diagram events.
        stream: Destination (default: the current ``sys.stderr``).

    Returns:
        The installed handler.
    """
    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = _handler(stream or sys.stderr, log_json=log_json)
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(_package_level(verbose=verbose, quiet=quiet))
    logging.getLogger(RENDER_LOGGER).setLevel(_render_level(verbose=verbose, log_json=log_json))
    return handler
