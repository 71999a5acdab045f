"""Skeletonizer - Straight skeletons of simple polygons.

Skeletonizer computes the straight skeleton of a simple polygon by simulating
its edges moving inwards at unit speed and recording where their bisectors
collide. The result is a graph of the original vertices plus one interior
node per collision, joined by bisector edges.

Example:
    $ skeletonizer house.json

This will create house-skeleton.json holding the skeleton graph.

From Python:
    >>> from skeletonizer import Vector2, compute_straight_skeleton
    >>> result = compute_straight_skeleton(
    ...     [Vector2(0, 0), Vector2(0, 2), Vector2(2, 2), Vector2(2, 0)]
    ... )
    >>> result.ok
    True
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

from skeletonizer.core.scheduler import SolveResult, compute_straight_skeleton  # noqa: E402
from skeletonizer.domain import StraightSkeletonGraph, Vector2  # noqa: E402

__all__ = [
    "SolveResult",
    "StraightSkeletonGraph",
    "Vector2",
    "__author__",
    "__version__",
    "compute_straight_skeleton",
]
