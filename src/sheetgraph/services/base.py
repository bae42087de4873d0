"""BaseService — shared plumbing for sheetgraph services.

Every service receives a :class:`Workspace` at construction time. The
workspace provides the configured input, filter policy, renderer, and
output directory.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from sheetgraph.domain.filters import filter_records
from sheetgraph.domain.graph import BuildStats, Node, build_graph_with_stats
from sheetgraph.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from sheetgraph.domain.errors import SheetgraphError
    from sheetgraph.domain.records import Record
    from sheetgraph.infrastructure.workspace import Workspace


@dataclass(frozen=True)
class BuiltGraph:
    """Everything one load-filter-build pass produces."""

    input_path: Path
    records: list[Record]
    eligible: list[Record]
    store: dict[int, Node]
    stats: BuildStats


class BaseService:
    """Base for all service-layer classes."""

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    def _build(self, input_path: Path | None = None) -> BuiltGraph:
        """Load the export, apply the filter policy, and build the node arena.

        Raises whatever the loader raises; nothing is caught here.
        """
        path = input_path or self._workspace.input_path
        records = self._workspace.load_records(path)
        eligible = filter_records(records, self._workspace.filter_policy)
        store, stats = build_graph_with_stats(eligible)
        return BuiltGraph(
            input_path=path,
            records=records,
            eligible=eligible,
            store=store,
            stats=stats,
        )

    @staticmethod
    def _failure(
        op: str,
        exc: SheetgraphError,
        *,
        warnings: list[str] | None = None,
        **extra: Any,
    ) -> ServiceResult:
        """Convert a domain exception into a failed ServiceResult."""
        return ServiceResult(
            ok=False,
            op=op,
            warnings=warnings or [],
            error=ServiceError(
                code=exc.code,
                message=exc.message,
                detail={**exc.detail, **extra},
            ),
        )
