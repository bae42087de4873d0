"""Filter stage — select the records eligible to become graph nodes.

Pure functions, no infrastructure dependencies. A record survives only if
it is not a folder, declares at least one reference, does not live under a
denylisted parent group, and carries the node type tag.

The zero-reference rule runs before graph construction, so a sheet that is
only ever *referenced* (and declares nothing itself) never becomes a node,
and every edge pointing at it is lost.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from sheetgraph.domain.records import Record

MEASURE_SHEET = "MeasureSheet"

# Archive folders in the reference solution export.
DEFAULT_EXCLUDED_PARENT_IDS: frozenset[int] = frozenset(
    {24200, 24225, 24532, 25061, 25083, 24413, 24374, 24738, 25211, 230, 23795}
)

REJECT_FOLDER = "folder"
REJECT_NO_REFERENCES = "no_references"
REJECT_EXCLUDED_PARENT = "excluded_parent"
REJECT_WRONG_TYPE = "wrong_type"


@dataclass(frozen=True)
class FilterPolicy:
    """Exclusion rules applied by :func:`filter_records`."""

    node_type: str = MEASURE_SHEET
    excluded_parent_ids: frozenset[int] = field(default=DEFAULT_EXCLUDED_PARENT_IDS)

    @classmethod
    def create(
        cls,
        *,
        node_type: str = MEASURE_SHEET,
        excluded_parent_ids: Iterable[int] = DEFAULT_EXCLUDED_PARENT_IDS,
    ) -> FilterPolicy:
        return cls(node_type=node_type, excluded_parent_ids=frozenset(excluded_parent_ids))


def explain_rejection(record: Record, policy: FilterPolicy) -> str | None:
    """Return the first rule *record* fails, or None if it is eligible."""
    if record.is_folder:
        return REJECT_FOLDER
    if not record.references:
        return REJECT_NO_REFERENCES
    if record.parent_id in policy.excluded_parent_ids:
        return REJECT_EXCLUDED_PARENT
    if record.type_name != policy.node_type:
        return REJECT_WRONG_TYPE
    return None


def filter_records(records: Sequence[Record], policy: FilterPolicy) -> list[Record]:
    """Return the eligible subsequence of *records*, order preserved.

    Records are kept or dropped whole; nothing is reordered or deduplicated.
    """
    return [record for record in records if explain_rejection(record, policy) is None]


def summarize_rejections(records: Sequence[Record], policy: FilterPolicy) -> dict[str, int]:
    """Count rejected records per rule (first failing rule wins)."""
    counts: Counter[str] = Counter()
    for record in records:
        reason = explain_rejection(record, policy)
        if reason is not None:
            counts[reason] += 1
    return dict(counts)
