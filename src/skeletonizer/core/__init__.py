"""Core algorithms for skeletonizer.

This module contains the wavefront-collapse engine:

- Geometry primitives (vector arithmetic, ray intersection, bisector direction)
- Graph construction from a vertex list
- The solver context façade and node index
- Collision detection (interior x interior, interior x exterior)
- Collision resolution (grouping, bisector proposals, materialization)
- Step scheduling with explicit partition queue and step cap

Geometry, detection and resolution are pure with respect to logging; only the
solver reports progress.

Key functions:
- compute_straight_skeleton: Solve a polygon and return a SolveResult
- create_collision_events: Best collision per unresolved edge
- intersect_rays: Classify two rays and find where they meet
- bisector_direction: The single bisector sign policy

Key classes:
- SolverContext: Graph, acceptance flags and structural queries
- StepScheduler: Runs collision steps over partitions
- SkeletonSolver: Settings-driven solver with structured logging
"""

from skeletonizer.core.collision import (
    build_candidate_lists,
    collide_edges,
    collide_interior_against_exterior,
    collide_interior_edges,
    create_collision_events,
    is_within_wavefront_boundary,
    select_event_slice,
    source_offset_distance,
)
from skeletonizer.core.construction import build_graph
from skeletonizer.core.context import NodeIndex, SolverContext
from skeletonizer.core.diagnostics import compute_node_offset_distances, generate_collision_sweep
from skeletonizer.core.geometry import (
    RayIntersection,
    RayProjection,
    bisect,
    bisector_direction,
    intersect_rays,
    normalize,
    signed_area,
)
from skeletonizer.core.resolution import (
    CollisionGroup,
    group_events,
    handle_collision_event,
    materialize_bisection,
    resolve_group,
)
from skeletonizer.core.scheduler import (
    SkeletonSolver,
    SolveResult,
    StepScheduler,
    compute_straight_skeleton,
)

__all__ = [
    # Geometry
    "RayIntersection",
    "RayProjection",
    "bisect",
    "bisector_direction",
    "intersect_rays",
    "normalize",
    "signed_area",
    # Construction and context
    "NodeIndex",
    "SolverContext",
    "build_graph",
    # Collision detection
    "build_candidate_lists",
    "collide_edges",
    "collide_interior_against_exterior",
    "collide_interior_edges",
    "create_collision_events",
    "is_within_wavefront_boundary",
    "select_event_slice",
    "source_offset_distance",
    # Resolution
    "CollisionGroup",
    "group_events",
    "handle_collision_event",
    "materialize_bisection",
    "resolve_group",
    # Scheduling
    "SkeletonSolver",
    "SolveResult",
    "StepScheduler",
    "compute_straight_skeleton",
    # Diagnostics
    "compute_node_offset_distances",
    "generate_collision_sweep",
]
