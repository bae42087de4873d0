"""DiagramService — the load, filter, build, render pipeline.

``render_all`` draws one diagram per retained node. The default is
fail-fast: the first render or write failure ends the run and is
returned as the error, with the diagrams already written listed in the
detail. With ``continue_on_error`` every node is attempted and failures
are reported together as ``PARTIAL_FAILURE``.

Rendering may run on a thread pool (``workers > 1``). Neighbor views are
computed up front and the arena is read-only from then on, so the only
concurrent work is the renderer itself; files are still written in node
order by the calling thread.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Generator, Iterable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from sheetgraph.config.logging import RENDER_LOGGER
from sheetgraph.domain.errors import RenderFailureError, SheetgraphError
from sheetgraph.domain.filters import explain_rejection, summarize_rejections
from sheetgraph.domain.graph import Node
from sheetgraph.domain.labels import short_label
from sheetgraph.domain.views import downstream_view, neighbor_view, upstream_view
from sheetgraph.infrastructure.filesystem import ensure_output_dir, write_diagram
from sheetgraph.infrastructure.renderer import DiagramRenderer
from sheetgraph.services.base import BaseService
from sheetgraph.services.result import ServiceError, ServiceResult

log = structlog.get_logger(RENDER_LOGGER)


@dataclass(frozen=True)
class _RenderJob:
    node: Node
    label: str
    source: str
    edge_count: int


def _render_or_error(renderer: DiagramRenderer, source: str) -> bytes | RenderFailureError:
    try:
        return renderer.render(source)
    except RenderFailureError as exc:
        return exc


class DiagramService(BaseService):
    """Builds the dependency graph and renders per-node diagrams."""

    # ------------------------------------------------------------------
    # render — one diagram per node
    # ------------------------------------------------------------------

    def render_all(
        self,
        *,
        input_path: Path | None = None,
        output_dir: Path | None = None,
        workers: int | None = None,
        continue_on_error: bool | None = None,
    ) -> ServiceResult:
        """Render and save the neighbor diagram of every retained node.

        Args:
            input_path: Export to read (default: configured input).
            output_dir: Target directory (default: configured output dir).
            workers: Renderer threads; 1 renders sequentially.
            continue_on_error: Attempt every node instead of stopping at
                the first failure.
        """
        op = "render"
        cfg = self._workspace.settings.render
        workers = max(1, workers if workers is not None else cfg.workers)
        if continue_on_error is None:
            continue_on_error = cfg.continue_on_error
        ext = self._workspace.output_format

        try:
            built = self._build(input_path)
            target_dir = ensure_output_dir(output_dir or self._workspace.output_dir)
        except SheetgraphError as exc:
            return self._failure(op, exc)

        jobs = self._plan(built.store.values())
        warnings = self._label_collisions(jobs)

        written: list[dict[str, Any]] = []
        failed: list[dict[str, Any]] = []
        stream = self._render_stream(jobs, workers)
        try:
            for job, outcome in stream:
                try:
                    if isinstance(outcome, RenderFailureError):
                        raise outcome
                    path = write_diagram(target_dir, job.label, ext, outcome)
                except SheetgraphError as exc:
                    log.info(
                        "diagram.failed",
                        node_id=job.node.id,
                        label=job.label,
                        code=exc.code,
                        error=exc.message,
                    )
                    if not continue_on_error:
                        return self._failure(
                            op,
                            exc,
                            warnings=warnings,
                            node_id=job.node.id,
                            label=job.label,
                            written=[item["path"] for item in written],
                        )
                    failed.append(
                        {
                            "id": job.node.id,
                            "label": job.label,
                            "code": exc.code,
                            "message": exc.message,
                        }
                    )
                    warnings.append(f"{job.label}: {exc.message}")
                    continue

                log.info("diagram.written", node_id=job.node.id, label=job.label, path=str(path))
                written.append(
                    {
                        "id": job.node.id,
                        "label": job.label,
                        "name": job.node.name,
                        "edges": job.edge_count,
                        "path": str(path),
                    }
                )
        finally:
            stream.close()

        data: dict[str, Any] = {
            "input": str(built.input_path),
            "output_dir": str(target_dir),
            "format": ext,
            "node_count": len(jobs),
            "written_count": len(written),
            "diagrams": written,
            "failed": failed,
            "stats": built.stats.to_dict(),
        }
        if failed:
            return ServiceResult(
                ok=False,
                op=op,
                data=data,
                warnings=warnings,
                error=ServiceError(
                    code="PARTIAL_FAILURE",
                    message=f"{len(failed)} of {len(jobs)} diagrams failed",
                    detail={"failed": [item["label"] for item in failed]},
                ),
            )
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    def _plan(self, nodes: Iterable[Node]) -> list[_RenderJob]:
        pattern = self._workspace.label_pattern
        jobs: list[_RenderJob] = []
        for node in nodes:
            edges = neighbor_view(node, pattern=pattern)
            jobs.append(
                _RenderJob(
                    node=node,
                    label=short_label(node.name, pattern),
                    source="\n".join(edge.to_line() for edge in edges),
                    edge_count=len(edges),
                )
            )
        return jobs

    @staticmethod
    def _label_collisions(jobs: Sequence[_RenderJob]) -> list[str]:
        """Warn about nodes whose diagrams land on the same file."""
        counts = Counter(job.label for job in jobs)
        return [
            f"{count} nodes share label '{label}'; the last one rendered wins"
            for label, count in counts.items()
            if count > 1
        ]

    def _render_stream(
        self, jobs: Sequence[_RenderJob], workers: int
    ) -> Generator[tuple[_RenderJob, bytes | RenderFailureError]]:
        """Yield ``(job, image bytes or failure)`` in job order."""
        renderer = self._workspace.renderer
        if workers <= 1 or len(jobs) <= 1:
            for job in jobs:
                yield job, _render_or_error(renderer, job.source)
            return

        pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="sheetgraph-render")
        try:
            futures: list[Future[bytes | RenderFailureError]] = [
                pool.submit(_render_or_error, renderer, job.source) for job in jobs
            ]
            for job, future in zip(jobs, futures, strict=True):
                yield job, future.result()
        finally:
            pool.shutdown(wait=True, cancel_futures=True)

    # ------------------------------------------------------------------
    # neighbors — one node's view, no rendering
    # ------------------------------------------------------------------

    def neighbors(self, node_id: int, *, input_path: Path | None = None) -> ServiceResult:
        """Return the upstream/downstream edges and D2 source for *node_id*."""
        op = "neighbors"
        try:
            built = self._build(input_path)
        except SheetgraphError as exc:
            return self._failure(op, exc)

        node = built.store.get(node_id)
        if node is None:
            detail: dict[str, Any] = {"id": node_id}
            record = next((r for r in reversed(built.records) if r.id == node_id), None)
            if record is None:
                message = f"Node {node_id} not found in input"
            else:
                reason = explain_rejection(record, self._workspace.filter_policy)
                detail["reason"] = reason or "isolated"
                message = f"Node {node_id} is not part of the graph ({detail['reason']})"
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="NOT_FOUND", message=message, detail=detail),
            )

        pattern = self._workspace.label_pattern
        upstream = upstream_view(node, pattern=pattern)
        downstream = downstream_view(node, pattern=pattern)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": node.id,
                "name": node.name,
                "label": short_label(node.name, pattern),
                "upstream": [edge._asdict() for edge in upstream],
                "downstream": [edge._asdict() for edge in downstream],
                "source": "\n".join(edge.to_line() for edge in upstream + downstream),
            },
        )

    # ------------------------------------------------------------------
    # summary — counts only
    # ------------------------------------------------------------------

    def summary(self, *, input_path: Path | None = None) -> ServiceResult:
        """Report how many records survive each stage and why others did not."""
        op = "summary"
        try:
            built = self._build(input_path)
        except SheetgraphError as exc:
            return self._failure(op, exc)

        policy = self._workspace.filter_policy
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "input": str(built.input_path),
                "records": len(built.records),
                "eligible": len(built.eligible),
                "rejected": summarize_rejections(built.records, policy),
                "graph": built.stats.to_dict(),
            },
        )
