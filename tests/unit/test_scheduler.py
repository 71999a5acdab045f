"""Tests for step scheduling and the solver."""

from unittest.mock import MagicMock

import pytest

from skeletonizer.config import SkeletonizerSettings, SolverConfig
from skeletonizer.core.context import SolverContext
from skeletonizer.core.scheduler import (
    SkeletonSolver,
    SolveResult,
    StepScheduler,
    compute_straight_skeleton,
)
from skeletonizer.domain import ProposedBisection, StraightSkeletonGraph, Vector2
from skeletonizer.exceptions import (
    IterationCapExceededError,
    NoCollisionsGenerableError,
    UnassignableEdgeError,
)
from skeletonizer.utils import SolverLogger
from polygons import H_SHAPE, NOTCHED_SQUARE, SQUARE, T_SHAPE


def split_proposals() -> list[ProposedBisection]:
    return [
        ProposedBisection(4, 1, 5, from_split=True),
        ProposedBisection(1, 3, 5, from_split=True),
    ]


class TestStepScheduler:
    """Tests for StepScheduler."""

    def test_empty_graph(self) -> None:
        """Test an empty polygon completes immediately."""
        context = SolverContext.from_vertices([])
        graph = StepScheduler(context).run()
        assert graph.is_empty()

    def test_square_single_step(self) -> None:
        """Test the square collapses in one step."""
        context = SolverContext.from_vertices(SQUARE)
        scheduler = StepScheduler(context)
        scheduler.run()
        assert scheduler.steps == 1
        assert context.graph_is_complete()

    def test_first_step_of_notched_square_splits(self) -> None:
        """Test the notch split partitions the remaining bisectors by span."""
        context = SolverContext.from_vertices(NOTCHED_SQUARE)
        children = StepScheduler(context).step(context.active_interior_edge_ids())
        assert children == [[7, 8, 11], [5, 6, 10]]

    def test_simultaneous_junctions_resolve_in_one_step(self) -> None:
        """Test the T junction and its three arms all close in a single step."""
        context = SolverContext.from_vertices(T_SHAPE)
        scheduler = StepScheduler(context)
        scheduler.run()
        assert scheduler.steps == 1
        assert context.graph_is_complete()
        assert len(context.graph.edges) == 19

    def test_terminal_partition(self) -> None:
        """Test a partition with fewer than two active edges yields nothing."""
        context = SolverContext.from_vertices(SQUARE)
        assert StepScheduler(context).step([4]) == []

    def test_step_cap(self) -> None:
        """Test exceeding the step cap raises."""
        context = SolverContext.from_vertices(NOTCHED_SQUARE)
        with pytest.raises(IterationCapExceededError) as exc_info:
            StepScheduler(context, max_steps=1).run()
        assert exc_info.value.limit == 1
        assert exc_info.value.pending_edge_ids

    def test_no_collisions_generable(self) -> None:
        """Test bisectors that never meet are reported."""
        context = SolverContext.from_vertices(SQUARE)
        context.accept_all([5, 6, 7])
        away = context.add_interior_edge(1, Vector2(-1.0, 0.0), 1, 0)
        with pytest.raises(NoCollisionsGenerableError) as exc_info:
            StepScheduler(context).step([4, away])
        assert exc_info.value.edge_ids == [4, away]

    def test_logs_progress(self) -> None:
        """Test the solver logger sees every step."""
        context = SolverContext.from_vertices(NOTCHED_SQUARE)
        solver_logger = SolverLogger(MagicMock())
        StepScheduler(context, solver_logger=solver_logger).run()
        stats = solver_logger.stats
        assert stats.steps >= 2
        assert stats.splits == 1
        assert sorted(stats.exterior_accepted) == [0, 1, 2, 3, 4]


class TestAssignToSpans:
    """Tests for partitioning edges after a split."""

    def test_assigns_each_edge_to_its_span(self) -> None:
        """Test edges land in the span holding both parents."""
        context = SolverContext.from_vertices(NOTCHED_SQUARE)
        scheduler = StepScheduler(context)
        assert scheduler.assign_to_spans([5, 6, 7, 8], split_proposals()) == [[7, 8], [5, 6]]

    def test_unassignable_edge(self) -> None:
        """Test an edge outside every span raises."""
        context = SolverContext.from_vertices(NOTCHED_SQUARE)
        stray = context.add_interior_edge(0, Vector2(1.0, 0.0), 0, 3)
        with pytest.raises(UnassignableEdgeError) as exc_info:
            StepScheduler(context).assign_to_spans([stray], split_proposals())
        assert exc_info.value.edge_id == stray
        assert exc_info.value.spans == [(1, 3), (4, 1)]

    def test_spans_of_half_the_boundary(self) -> None:
        """Test two opposite spans each covering half the edges split the bisectors evenly."""
        context = SolverContext.from_vertices(H_SHAPE)
        splits = [
            ProposedBisection(3, 9, 12, from_split=True),
            ProposedBisection(9, 3, 12, from_split=True),
        ]
        assert splits[0].span_size(12) == 6
        assert StepScheduler(context).assign_to_spans([12, 15, 17, 21], splits) == [
            [17, 21],
            [12, 15],
        ]


class TestSolveResult:
    """Tests for SolveResult."""

    def test_ok_result(self) -> None:
        """Test a result without error unwraps to its graph."""
        graph = StraightSkeletonGraph()
        result = SolveResult(graph=graph)
        assert result.ok
        assert result.is_complete
        assert result.unwrap() is graph

    def test_failed_result(self) -> None:
        """Test unwrap raises the stored error."""
        error = NoCollisionsGenerableError([4])
        result = SolveResult(graph=StraightSkeletonGraph(), error=error)
        assert not result.ok
        assert not result.is_complete
        with pytest.raises(NoCollisionsGenerableError):
            result.unwrap()


class TestSkeletonSolver:
    """Tests for SkeletonSolver."""

    def test_too_few_vertices(self) -> None:
        """Test degenerate input returns an empty graph without error."""
        result = compute_straight_skeleton([Vector2(0.0, 0.0), Vector2(1.0, 1.0)])
        assert result.ok
        assert result.graph.is_empty()

    def test_accepts_integer_coordinates(self) -> None:
        """Test integer input is converted to floats."""
        result = compute_straight_skeleton(
            [Vector2(0, 0), Vector2(0, 2), Vector2(2, 2), Vector2(2, 0)]  # type: ignore[arg-type]
        )
        assert result.ok
        assert isinstance(result.graph.nodes[0].position.x, float)

    def test_step_cap_is_reported(self) -> None:
        """Test solver failures are returned on the result."""
        settings = SkeletonizerSettings(solver=SolverConfig(max_steps=1))
        result = SkeletonSolver(settings, logger=MagicMock()).solve(NOTCHED_SQUARE)
        assert isinstance(result.error, IterationCapExceededError)
        assert result.graph.num_exterior_nodes == 5
        with pytest.raises(IterationCapExceededError):
            result.unwrap()

    def test_logs_start_and_completion(self) -> None:
        """Test the solver reports start and completion."""
        logger = MagicMock()
        result = SkeletonSolver(logger=logger).solve(SQUARE)
        assert result.ok
        messages = [call.args[0] for call in logger.info.call_args_list]
        assert "Solving straight skeleton" in messages
        assert "Straight skeleton complete" in messages

    def test_stats(self) -> None:
        """Test run statistics are collected."""
        result = compute_straight_skeleton(SQUARE)
        assert result.stats.steps == 1
        assert result.stats.events_resolved == 1
        assert result.stats.duration_seconds >= 0.0
