"""Geometric primitives for wavefront propagation.

This module provides the vector arithmetic and predicates every solver
component relies on:
- Vector arithmetic (add, subtract, scale, normalize, cross, dot)
- Angle bisection with a defined fallback for opposite vectors
- Classifying ray/ray intersection
- The bisector direction policy
- Signed area and bounding box of a vertex list

All functions are pure and stateless. Comparisons go through a Tolerance
instance (see ``skeletonizer.domain.tolerance``).
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from skeletonizer.domain import (
    DEFAULT_TOLERANCE,
    ZERO,
    IntersectionKind,
    Tolerance,
    Vector2,
)


@dataclass(frozen=True, slots=True)
class RayProjection:
    """A ray from a source point along a unit direction."""

    source: Vector2
    direction: Vector2


@dataclass(frozen=True, slots=True)
class RayIntersection:
    """Result of intersecting two rays.

    Attributes:
        t1: Signed distance along the first ray
        t2: Signed distance along the second ray
        kind: Classification of the relationship
    """

    t1: float
    t2: float
    kind: IntersectionKind


def add(a: Vector2, b: Vector2) -> Vector2:
    return Vector2(a.x + b.x, a.y + b.y)


def subtract(a: Vector2, b: Vector2) -> Vector2:
    return Vector2(a.x - b.x, a.y - b.y)


def scale(v: Vector2, factor: float) -> Vector2:
    return Vector2(v.x * factor, v.y * factor)


def negate(v: Vector2) -> Vector2:
    return Vector2(-v.x, -v.y)


def dot(a: Vector2, b: Vector2) -> float:
    return a.x * b.x + a.y * b.y


def cross(a: Vector2, b: Vector2) -> float:
    """Return the z component of the 3D cross product of a and b.

    With clockwise input winding, ``cross(p - edge_source, edge_basis)`` is the
    inward perpendicular distance of point ``p`` from the edge's line.
    """
    return a.x * b.y - a.y * b.x


def length(v: Vector2) -> float:
    return math.hypot(v.x, v.y)


def normalize(v: Vector2) -> tuple[Vector2, float]:
    """Normalize a vector.

    Args:
        v: Vector to normalize

    Returns:
        Tuple of (unit vector, original length). The zero vector normalizes
        to (0, 0) with length 0.

    Examples:
        >>> normalize(Vector2(3.0, 4.0))
        (Vector2(x=0.6, y=0.8), 5.0)
        >>> normalize(Vector2(0.0, 0.0))
        (Vector2(x=0.0, y=0.0), 0.0)
    """
    size = length(v)
    if size == 0.0:
        return ZERO, 0.0
    return Vector2(v.x / size, v.y / size), size


def make_basis(start: Vector2, end: Vector2) -> Vector2:
    """Unit vector pointing from start to end."""
    basis, _ = normalize(subtract(end, start))
    return basis


def rotate_clockwise(v: Vector2) -> Vector2:
    """Rotate a vector by 90 degrees clockwise.

    For an edge basis of a clockwise polygon this yields the inward normal.
    """
    return Vector2(v.y, -v.x)


def point_along(ray: RayProjection, distance: float) -> Vector2:
    """Point at a signed distance along a ray."""
    return add(ray.source, scale(ray.direction, distance))


def bisect(a: Vector2, b: Vector2, tolerance: Tolerance = DEFAULT_TOLERANCE) -> Vector2:
    """Unit vector bisecting the angle between a and b.

    When a and b are exact opposites their sum vanishes and the bisector is
    taken as a rotated 90 degrees clockwise.

    Examples:
        >>> bisect(Vector2(1.0, 0.0), Vector2(0.0, 1.0))
        Vector2(x=0.7071067811865475, y=0.7071067811865475)
        >>> bisect(Vector2(0.0, 1.0), Vector2(0.0, -1.0))
        Vector2(x=1.0, y=-0.0)
    """
    summed, size = normalize(add(a, b))
    if size <= tolerance.epsilon:
        rotated, _ = normalize(rotate_clockwise(a))
        return rotated
    return summed


def intersect_rays(
    ray1: RayProjection,
    ray2: RayProjection,
    tolerance: Tolerance = DEFAULT_TOLERANCE,
) -> RayIntersection:
    """Classify two rays and find where they meet.

    Non-parallel pairs are canonicalized so the cross product of the two
    directions is positive before the 2x2 system is solved; distances are
    swapped back afterwards.

    Args:
        ray1: First ray (unit direction)
        ray2: Second ray (unit direction)
        tolerance: Comparison policy

    Returns:
        RayIntersection with signed distances along each ray. Distances are
        ``math.inf`` where the rays never meet.

    Examples:
        >>> r1 = RayProjection(Vector2(0.0, 0.0), Vector2(1.0, 0.0))
        >>> r2 = RayProjection(Vector2(2.0, -2.0), Vector2(0.0, 1.0))
        >>> intersect_rays(r1, r2).kind
        <IntersectionKind.CONVERGING: 'converging'>
    """
    relative = subtract(ray2.source, ray1.source)
    direction_to_second, distance = normalize(relative)

    if distance <= tolerance.epsilon:
        return RayIntersection(math.inf, math.inf, IntersectionKind.IDENTICAL_SOURCE)

    d1 = ray1.direction
    d2 = ray2.direction
    denominator = cross(d1, d2)

    if tolerance.is_zero(denominator):
        if dot(d1, d2) > 0:
            if tolerance.vectors_equal(direction_to_second, d1):
                return RayIntersection(distance, math.inf, IntersectionKind.CO_LINEAR_FROM_1)
            if tolerance.vectors_equal(direction_to_second, negate(d2)):
                return RayIntersection(math.inf, distance, IntersectionKind.CO_LINEAR_FROM_2)
            return RayIntersection(math.inf, math.inf, IntersectionKind.PARALLEL)
        if tolerance.vectors_equal(direction_to_second, d1):
            return RayIntersection(distance, distance, IntersectionKind.HEAD_ON)
        return RayIntersection(math.inf, math.inf, IntersectionKind.PARALLEL)

    if denominator < 0:
        swapped = intersect_rays(ray2, ray1, tolerance)
        return RayIntersection(swapped.t2, swapped.t1, swapped.kind)

    t1 = cross(relative, d2) / denominator
    t2 = cross(relative, d1) / denominator

    if tolerance.is_positive(t1) and tolerance.is_positive(t2):
        return RayIntersection(t1, t2, IntersectionKind.CONVERGING)
    return RayIntersection(t1, t2, IntersectionKind.DIVERGING)


def bisector_direction(
    clockwise_basis: Vector2,
    widdershins_basis: Vector2,
    tolerance: Tolerance = DEFAULT_TOLERANCE,
) -> Vector2:
    """Interior-pointing direction of the bisector between two wavefront edges.

    This is the only place a bisector's sign is decided. The rule, in order:

    1. Parents not parallel: the axis ``bisect(cw, -ws)`` is kept when
       ``cross(cw, ws) > 0`` (convex vertex) and reversed otherwise (reflex
       vertex), so the bisector moves away from both parent lines.
    2. Parents anti-parallel: both offset lines coincide at the source, so the
       bisector runs along the clockwise parent's basis.
    3. Parents pointing the same way: the vertex is straight and the bisector
       is the inward normal of their common direction.
    4. Parents without direction (zero bases): the zero vector.

    Args:
        clockwise_basis: Basis of the edge following the source
        widdershins_basis: Basis of the edge preceding the source
        tolerance: Comparison policy

    Returns:
        Unit direction of the bisector
    """
    if tolerance.is_zero_vector(clockwise_basis) and tolerance.is_zero_vector(widdershins_basis):
        return ZERO

    turn = cross(clockwise_basis, widdershins_basis)
    axis = bisect(clockwise_basis, negate(widdershins_basis), tolerance)

    if not tolerance.is_zero(turn):
        return axis if turn > 0 else negate(axis)

    if dot(clockwise_basis, widdershins_basis) < 0:
        return axis

    common, _ = normalize(add(clockwise_basis, widdershins_basis))
    return rotate_clockwise(common)


def signed_area(points: Sequence[Vector2]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates winding direction:
    - Positive area: counter-clockwise winding
    - Negative area: clockwise winding

    Args:
        points: Vertices of the polygon in order

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.

    Examples:
        >>> square = [Vector2(0, 0), Vector2(0, 2), Vector2(2, 2), Vector2(2, 0)]
        >>> signed_area(square)
        -4.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def bounding_box(points: Sequence[Vector2]) -> tuple[float, float, float, float]:
    """Bounding box of a vertex list as (min_x, min_y, max_x, max_y)."""
    if not points:
        return (0.0, 0.0, 0.0, 0.0)
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return (min(xs), min(ys), max(xs), max(ys))


def bounding_extent(points: Sequence[Vector2]) -> float:
    """Largest side of the bounding box of a vertex list."""
    min_x, min_y, max_x, max_y = bounding_box(points)
    return max(max_x - min_x, max_y - min_y)
