"""Domain models for skeletonizer.

This module contains the value types and graph model shared by every solver
component. Models are plain dataclasses with no numeric behaviour beyond
tolerance comparisons, and serialize to JSON-compatible dictionaries.

Key classes:
- Vector2: A 2D point or direction
- Tolerance: Absolute-epsilon comparison policy
- StraightSkeletonGraph: Nodes, exterior edges and interior bisectors
- CollisionEvent: A detected collision awaiting resolution
- ProposedBisection: A bisector awaiting materialization
"""

from skeletonizer.domain.events import (
    NO_COLLISION_KINDS,
    CollisionEvent,
    EdgeRank,
    EventType,
    IntersectionKind,
    ProposedBisection,
)
from skeletonizer.domain.graph import (
    InteriorEdge,
    PolygonEdge,
    PolygonNode,
    StraightSkeletonGraph,
)
from skeletonizer.domain.tolerance import DEFAULT_TOLERANCE, FLOATING_POINT_EPSILON, Tolerance
from skeletonizer.domain.vector import ZERO, Vector2

__all__: list[str] = [
    # Enums
    "EdgeRank",
    "EventType",
    "IntersectionKind",
    "NO_COLLISION_KINDS",
    # Core types
    "Vector2",
    "ZERO",
    "Tolerance",
    "DEFAULT_TOLERANCE",
    "FLOATING_POINT_EPSILON",
    "PolygonNode",
    "PolygonEdge",
    "InteriorEdge",
    "StraightSkeletonGraph",
    "CollisionEvent",
    "ProposedBisection",
]
