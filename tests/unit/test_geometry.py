"""Tests for geometric primitives."""

import math

import pytest

from skeletonizer.core.construction import build_graph
from skeletonizer.core.geometry import (
    RayProjection,
    bisect,
    bisector_direction,
    bounding_box,
    bounding_extent,
    intersect_rays,
    make_basis,
    normalize,
    rotate_clockwise,
    signed_area,
)
from skeletonizer.domain import ZERO, IntersectionKind, Vector2
from polygons import NOTCHED_SQUARE, RECTANGLE, SQUARE

SQRT_HALF = math.sqrt(0.5)


def ray(sx: float, sy: float, dx: float, dy: float) -> RayProjection:
    return RayProjection(Vector2(sx, sy), Vector2(dx, dy))


class TestVectorOps:
    """Tests for vector arithmetic helpers."""

    def test_normalize(self) -> None:
        """Test normalize returns the unit vector and the original length."""
        unit, size = normalize(Vector2(3.0, 4.0))
        assert unit == Vector2(0.6, 0.8)
        assert size == 5.0

    def test_normalize_zero_vector(self) -> None:
        """Test the zero vector normalizes to itself with length zero."""
        assert normalize(Vector2(0.0, 0.0)) == (ZERO, 0.0)

    def test_make_basis(self) -> None:
        """Test basis points from start to end with unit length."""
        basis = make_basis(Vector2(1.0, 1.0), Vector2(4.0, 5.0))
        assert basis.x == pytest.approx(0.6)
        assert basis.y == pytest.approx(0.8)

    def test_rotate_clockwise(self) -> None:
        """Test clockwise rotation of an upward vector points right."""
        assert rotate_clockwise(Vector2(0.0, 1.0)) == Vector2(1.0, 0.0)


class TestBisect:
    """Tests for angle bisection."""

    def test_perpendicular(self) -> None:
        """Test bisecting the unit axes."""
        result = bisect(Vector2(1.0, 0.0), Vector2(0.0, 1.0))
        assert result.x == pytest.approx(SQRT_HALF)
        assert result.y == pytest.approx(SQRT_HALF)

    def test_opposite_vectors_rotate_first(self) -> None:
        """Test opposite vectors bisect to the first rotated clockwise."""
        assert bisect(Vector2(0.0, 1.0), Vector2(0.0, -1.0)) == Vector2(1.0, 0.0)


class TestIntersectRays:
    """Tests for ray/ray classification."""

    def test_converging(self) -> None:
        """Test crossing rays report forward distances on both."""
        result = intersect_rays(ray(0, 0, 1, 0), ray(2, -2, 0, 1))
        assert result.kind is IntersectionKind.CONVERGING
        assert result.t1 == pytest.approx(2.0)
        assert result.t2 == pytest.approx(2.0)

    def test_diverging(self) -> None:
        """Test rays meeting behind one source are diverging."""
        result = intersect_rays(ray(0, 0, 1, 0), ray(2, -2, 0, -1))
        assert result.kind is IntersectionKind.DIVERGING
        assert result.t1 == pytest.approx(2.0)
        assert result.t2 == pytest.approx(-2.0)

    def test_head_on(self) -> None:
        """Test opposing rays on one line report the source separation."""
        result = intersect_rays(ray(0, 0, 1, 0), ray(4, 0, -1, 0))
        assert result.kind is IntersectionKind.HEAD_ON
        assert result.t1 == pytest.approx(4.0)
        assert result.t2 == pytest.approx(4.0)

    def test_co_linear_from_first(self) -> None:
        """Test the first ray running onto the second's source."""
        result = intersect_rays(ray(0, 0, 1, 0), ray(3, 0, 1, 0))
        assert result.kind is IntersectionKind.CO_LINEAR_FROM_1
        assert result.t1 == pytest.approx(3.0)
        assert math.isinf(result.t2)

    def test_co_linear_from_second(self) -> None:
        """Test the second ray running onto the first's source."""
        result = intersect_rays(ray(3, 0, 1, 0), ray(0, 0, 1, 0))
        assert result.kind is IntersectionKind.CO_LINEAR_FROM_2
        assert math.isinf(result.t1)
        assert result.t2 == pytest.approx(3.0)

    def test_parallel(self) -> None:
        """Test offset parallel rays never meet."""
        result = intersect_rays(ray(0, 0, 1, 0), ray(0, 1, 1, 0))
        assert result.kind is IntersectionKind.PARALLEL

    def test_identical_source(self) -> None:
        """Test rays from the same point are classified before anything else."""
        result = intersect_rays(ray(1, 1, 1, 0), ray(1, 1, 0, 1))
        assert result.kind is IntersectionKind.IDENTICAL_SOURCE


class TestBisectorDirection:
    """Tests for the bisector direction policy."""

    def test_convex_vertex(self) -> None:
        """Test the square corner bisector points into the square."""
        graph = build_graph(SQUARE)
        direction = bisector_direction(graph.edges[0].basis_vector, graph.edges[3].basis_vector)
        assert direction.x == pytest.approx(SQRT_HALF)
        assert direction.y == pytest.approx(SQRT_HALF)

    def test_reflex_vertex(self) -> None:
        """Test the notch vertex bisector points up into the polygon."""
        graph = build_graph(NOTCHED_SQUARE)
        direction = bisector_direction(graph.edges[4].basis_vector, graph.edges[3].basis_vector)
        assert direction.x == pytest.approx(0.0)
        assert direction.y == pytest.approx(1.0)

    def test_anti_parallel_parents(self) -> None:
        """Test opposing parents yield a bisector along the clockwise parent."""
        direction = bisector_direction(Vector2(1.0, 0.0), Vector2(-1.0, 0.0))
        assert direction == Vector2(1.0, 0.0)

    def test_straight_vertex(self) -> None:
        """Test parents in the same direction yield the inward normal."""
        direction = bisector_direction(Vector2(1.0, 0.0), Vector2(1.0, 0.0))
        assert direction.x == pytest.approx(0.0)
        assert direction.y == pytest.approx(-1.0)

    def test_zero_bases(self) -> None:
        """Test the zero vector is returned when the parents carry no direction."""
        assert bisector_direction(ZERO, ZERO) == ZERO


class TestPolygonMeasures:
    """Tests for signed area and bounding box."""

    def test_clockwise_area_is_negative(self) -> None:
        """Test a clockwise square has negative area."""
        assert signed_area(SQUARE) == -4.0

    def test_counter_clockwise_area_is_positive(self) -> None:
        """Test reversing the winding flips the sign."""
        assert signed_area(list(reversed(SQUARE))) == 4.0

    def test_degenerate_area(self) -> None:
        """Test fewer than three points have no area."""
        assert signed_area([Vector2(0.0, 0.0), Vector2(1.0, 1.0)]) == 0.0

    def test_bounding_box(self) -> None:
        """Test the bounding box of the rectangle."""
        assert bounding_box(RECTANGLE) == (0.0, 0.0, 4.0, 2.0)
        assert bounding_extent(RECTANGLE) == 4.0

    def test_bounding_box_empty(self) -> None:
        """Test an empty vertex list has a zero box."""
        assert bounding_box([]) == (0.0, 0.0, 0.0, 0.0)
