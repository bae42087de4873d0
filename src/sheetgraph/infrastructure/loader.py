"""Read a solution export into :class:`~sheetgraph.domain.records.Record` objects."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from sheetgraph.domain.errors import InputFailureError, MalformedInputError
from sheetgraph.domain.records import Record

logger = logging.getLogger(__name__)

_RECORDS = TypeAdapter(list[Record])


def parse_records(raw: str | bytes, *, source: str = "<input>") -> list[Record]:
    """Validate a JSON document into records, all or nothing."""
    try:
        return _RECORDS.validate_json(raw)
    except ValidationError as exc:
        errors = exc.errors(include_url=False)
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        msg = f"Malformed input {source}: {first.get('msg', exc)}"
        if location:
            msg += f" at {location}"
        raise MalformedInputError(msg, path=source, error_count=len(errors)) from exc


def load_records(path: Path) -> list[Record]:
    """Read and parse the export at *path*.

    Raises:
        InputFailureError: The file is missing or unreadable.
        MalformedInputError: The content is not a valid record list.
    """
    try:
        raw = path.read_bytes()
    except OSError as exc:
        msg = f"Cannot read input {path}: {exc.strerror or exc}"
        raise InputFailureError(msg, path=str(path)) from exc

    records = parse_records(raw, source=str(path))
    logger.debug("Loaded %d records from %s", len(records), path)
    return records
