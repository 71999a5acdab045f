"""Step scheduling and the top-level straight skeleton solver.

The scheduler drives the wavefront simulation one atomic step at a time:
detect the earliest collisions of a partition, resolve them, materialize the
new bisectors and re-partition after splits. Pending partitions live in an
explicit FIFO queue and the number of steps is capped.

Key classes:
- StepScheduler: Queue-driven step loop over a SolverContext
- SkeletonSolver: Builds the context from settings, runs the scheduler, logs
- SolveResult: Graph plus the error, if any, and run statistics
"""

import time
from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from skeletonizer.config import SkeletonizerSettings, get_default_settings
from skeletonizer.core.collision import build_candidate_lists, select_event_slice
from skeletonizer.core.context import SolverContext
from skeletonizer.core.geometry import bounding_extent
from skeletonizer.core.resolution import group_events, materialize_bisection, resolve_group
from skeletonizer.domain import ProposedBisection, StraightSkeletonGraph, Vector2
from skeletonizer.exceptions import (
    GraphError,
    IterationCapExceededError,
    NoCollisionsGenerableError,
    SkeletonizerError,
    SolverError,
    UnassignableEdgeError,
)
from skeletonizer.utils import SolverLogger, SolverStats, get_logger


class StepScheduler:
    """Runs collision steps over partitions of the active bisectors.

    Example:
        context = SolverContext.from_vertices(vertices)
        graph = StepScheduler(context, max_steps=1000).run()
    """

    def __init__(
        self,
        context: SolverContext,
        max_steps: int = 10_000,
        solver_logger: SolverLogger | None = None,
    ) -> None:
        """Initialize the scheduler.

        Args:
            context: Solver context with primary bisectors seeded
            max_steps: Step cap; exceeding it raises IterationCapExceededError
            solver_logger: Optional progress logger
        """
        self.context = context
        self.max_steps = max_steps
        self.solver_logger = solver_logger
        self.queue: deque[list[int]] = deque()
        self.steps = 0

    def run(self) -> StraightSkeletonGraph:
        """Process partitions until every exterior edge is accepted.

        Returns:
            The completed graph

        Raises:
            IterationCapExceededError: If the step cap is reached
            NoCollisionsGenerableError: If edges remain that nothing can resolve
            UnassignableEdgeError: If a split leaves an edge outside every span
        """
        context = self.context
        if context.graph.is_empty():
            return context.graph

        self.queue.append(context.active_interior_edge_ids())

        while self.queue and not context.graph_is_complete():
            if self.steps >= self.max_steps:
                raise IterationCapExceededError(self.max_steps, context.active_interior_edge_ids())
            partition = self.queue.popleft()
            self.steps += 1
            if self.solver_logger:
                self.solver_logger.log_step(self.steps, len(partition), len(self.queue))

            self.queue.extend(self.step(partition))

            accepted = context.accept_collapsed_exterior_edges()
            if self.solver_logger:
                self.solver_logger.log_exterior_accepted(accepted)

        if not context.graph_is_complete():
            pending = context.active_interior_edge_ids() or [
                e for e in range(context.num_exterior) if not context.is_accepted(e)
            ]
            raise NoCollisionsGenerableError(pending)

        return context.graph

    def step(self, partition: Sequence[int]) -> list[list[int]]:
        """Resolve the earliest collisions of one partition.

        Args:
            partition: Interior edge ids of one region

        Returns:
            Child partitions to process next (empty when terminal)
        """
        context = self.context
        active = [e for e in partition if not context.is_accepted(e)]
        if len(active) < 2:
            if self.solver_logger:
                self.solver_logger.log_partition_terminal(active)
            return []

        candidates = build_candidate_lists(context, active)
        events, discarded = select_event_slice(candidates, context)
        if self.solver_logger:
            self.solver_logger.log_phantoms_discarded(discarded)
        if not events:
            raise NoCollisionsGenerableError(active)

        proposals: list[ProposedBisection] = []
        for group in group_events(context, events):
            group_proposals = resolve_group(context, group)
            proposals.extend(group_proposals)
            if self.solver_logger:
                self.solver_logger.log_event_resolved(
                    context.find_node(group.position),
                    group.edge_ids,
                    group.events[0].offset_distance,
                )

        created = []
        for proposal in proposals:
            edge_id = materialize_bisection(context, proposal)
            if edge_id is not None:
                created.append(edge_id)
        if self.solver_logger:
            self.solver_logger.log_bisectors_created(created)

        remaining = [e for e in active if not context.is_accepted(e)] + created
        splits = [p for p in proposals if p.from_split]
        if not splits:
            return [remaining] if remaining else []

        children = self.assign_to_spans(remaining, splits)
        if self.solver_logger:
            self.solver_logger.log_split([p.span for p in splits], children)
        return children

    def assign_to_spans(
        self,
        edge_ids: Sequence[int],
        splits: Sequence[ProposedBisection],
    ) -> list[list[int]]:
        """Partition edges by the exterior span their parents fall inside.

        A split bisector with parents ``(cw, ws)`` opens the span running
        clockwise from ``cw`` to ``ws`` (modulo the exterior count). Spans are
        ordered by start then length and only the first span at each start is
        kept. Each edge goes to the smallest span holding both its parents.

        Raises:
            UnassignableEdgeError: If an edge fits no span
        """
        n = self.context.num_exterior
        spans: dict[int, int] = {}
        for start, size in sorted(
            (p.clockwise_exterior_edge_index, p.span_size(n)) for p in splits
        ):
            spans.setdefault(start, size)

        buckets: dict[int, list[int]] = {start: [] for start in spans}
        for edge_id in edge_ids:
            clockwise, widdershins = self.context.parents(edge_id)
            fits = [
                (size, start)
                for start, size in spans.items()
                if (clockwise - start) % n <= size and (widdershins - start) % n <= size
            ]
            if not fits:
                raise UnassignableEdgeError(
                    edge_id,
                    list(edge_ids),
                    [(start, (start + size) % n) for start, size in spans.items()],
                )
            _, start = min(fits)
            buckets[start].append(edge_id)

        return [bucket for bucket in buckets.values() if bucket]


@dataclass
class SolveResult:
    """Outcome of a straight skeleton computation.

    Attributes:
        graph: Final (or partial, on failure) skeleton graph
        error: Solver or graph error that stopped the computation
        stats: Run statistics
    """

    graph: StraightSkeletonGraph
    error: SkeletonizerError | None = None
    stats: SolverStats = field(default_factory=SolverStats)

    @property
    def ok(self) -> bool:
        """Check if the computation finished without error."""
        return self.error is None

    @property
    def is_complete(self) -> bool:
        """Check if the computation succeeded and every edge is terminated."""
        return self.ok and all(edge.target is not None for edge in self.graph.edges)

    def unwrap(self) -> StraightSkeletonGraph:
        """Return the graph, raising the stored error if there is one."""
        if self.error is not None:
            raise self.error
        return self.graph


class SkeletonSolver:
    """Computes straight skeletons according to settings.

    Example:
        solver = SkeletonSolver(get_default_settings())
        result = solver.solve([Vector2(0, 0), Vector2(0, 2), Vector2(2, 2), Vector2(2, 0)])
        graph = result.unwrap()
    """

    def __init__(
        self,
        settings: SkeletonizerSettings | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.settings = settings or get_default_settings()
        self.logger = logger or get_logger("skeletonizer.solver")

    def solve(self, vertices: Sequence[Vector2]) -> SolveResult:
        """Compute the straight skeleton of a clockwise simple polygon.

        Solver failures are returned on the result rather than raised.

        Args:
            vertices: Polygon vertices in clockwise order

        Returns:
            SolveResult holding the graph and, on failure, the error
        """
        solver_logger = SolverLogger(self.logger)
        stats = solver_logger.stats
        stats.start_time = time.time()

        points = [Vector2(float(v.x), float(v.y)) for v in vertices]
        if len(points) < 3:
            stats.end_time = time.time()
            return SolveResult(graph=StraightSkeletonGraph(), stats=stats)

        tolerance = self.settings.tolerance.make_tolerance(bounding_extent(points))
        solver_logger.log_solve_start(len(points), tolerance.epsilon)

        context = SolverContext.from_vertices(
            points,
            tolerance=tolerance,
            collide_reflex_only=self.settings.solver.collide_reflex_only,
        )
        scheduler = StepScheduler(context, self.settings.solver.max_steps, solver_logger)

        try:
            graph = scheduler.run()
        except (SolverError, GraphError) as e:
            stats.end_time = time.time()
            solver_logger.log_solve_failed(e, len(context.graph.interior_nodes))
            return SolveResult(graph=context.graph, error=e, stats=stats)

        stats.end_time = time.time()
        solver_logger.log_solve_complete(len(graph.interior_nodes), stats.duration_seconds * 1000)
        return SolveResult(graph=graph, stats=stats)


def compute_straight_skeleton(
    vertices: Sequence[Vector2],
    settings: SkeletonizerSettings | None = None,
) -> SolveResult:
    """Compute the straight skeleton of a clockwise simple polygon.

    Args:
        vertices: Polygon vertices in clockwise order
        settings: Solver settings (defaults apply if None)

    Returns:
        SolveResult; fewer than three vertices yields an empty graph

    Example:
        >>> result = compute_straight_skeleton(
        ...     [Vector2(0, 0), Vector2(0, 2), Vector2(2, 2), Vector2(2, 0)]
        ... )
        >>> len(result.graph.interior_nodes)
        1
    """
    return SkeletonSolver(settings).solve(vertices)
