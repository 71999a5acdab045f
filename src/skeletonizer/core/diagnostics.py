"""Diagnostics for inspecting collision detection and solved graphs."""

from collections.abc import Iterable

from skeletonizer.core.collision import (
    collide_interior_against_exterior,
    collide_interior_edges,
    offset_at_point,
    source_offset_distance,
)
from skeletonizer.core.context import SolverContext
from skeletonizer.domain import CollisionEvent


def generate_collision_sweep(
    context: SolverContext,
    edge_ids: Iterable[int] | None = None,
) -> list[CollisionEvent]:
    """Collide edges against every other edge without filtering.

    Unlike the scheduler's candidate lists this keeps phantom events, tests
    convex bisectors against exterior edges as well and ignores acceptance,
    so it shows everything the detector sees.

    Args:
        context: Solver context
        edge_ids: Interior edges to sweep (defaults to every interior edge)

    Returns:
        Every detected event, sorted by offset distance
    """
    instigators = list(context.interior_edge_ids()) if edge_ids is None else list(edge_ids)
    others = list(context.interior_edge_ids())
    events = []

    for instigator in instigators:
        for other in others:
            if other == instigator:
                continue
            event = collide_interior_edges(context, instigator, other)
            if event is not None:
                events.append(event)
        for exterior_id in range(context.num_exterior):
            event = collide_interior_against_exterior(
                context, instigator, exterior_id, context.interior_edge_ids()
            )
            if event is not None:
                events.append(event)

    events.sort(key=lambda e: e.sort_key)
    return events


def compute_node_offset_distances(context: SolverContext) -> dict[int, float]:
    """Offset distance at which each interior node was created.

    Uses an outgoing interior edge's source offset when the node has one,
    otherwise the node's distance to the clockwise parent of an edge ending
    there.

    Returns:
        Mapping of interior node id to offset distance
    """
    offsets = {}
    for node in context.graph.interior_nodes:
        if node.out_edges:
            offsets[node.id] = source_offset_distance(context, node.out_edges[0])
        elif node.in_edges:
            offsets[node.id] = offset_at_point(context, node.in_edges[0], node.position)
    return offsets
