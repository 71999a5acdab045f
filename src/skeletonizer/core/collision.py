"""Collision detection between wavefront bisectors and boundary edges.

Two collision shapes are detected:
- Interior x interior: two bisector rays meet at a point both wavefronts
  reach at the same offset distance.
- Interior x exterior: a reflex bisector strikes the shrinking wavefront of a
  non-adjacent exterior edge (a split).

Offset distance is the simulation's notion of time: the perpendicular
distance every exterior edge has travelled inwards when the collision happens.
"""

from collections.abc import Iterable, Sequence

from skeletonizer.core.context import SolverContext
from skeletonizer.core.geometry import (
    RayProjection,
    cross,
    dot,
    intersect_rays,
    point_along,
    subtract,
)
from skeletonizer.domain import (
    NO_COLLISION_KINDS,
    CollisionEvent,
    EdgeRank,
    EventType,
    IntersectionKind,
    Tolerance,
    Vector2,
)


def source_offset_distance(context: SolverContext, edge_id: int) -> float:
    """Offset distance at which an interior edge starts.

    Primary edges start on the boundary (offset 0). A secondary edge starts at
    a collision node whose offset is its perpendicular distance to the
    clockwise parent's supporting line.
    """
    if context.edge_rank(edge_id) is EdgeRank.PRIMARY:
        return 0.0
    return offset_at_point(context, edge_id, context.source_position(edge_id))


def offset_at_point(context: SolverContext, edge_id: int, point: Vector2) -> float:
    """Signed inward distance from a point to an interior edge's clockwise parent line."""
    parent = context.clockwise_parent(edge_id)
    return cross(subtract(point, context.node_position(parent.source)), parent.basis_vector)


def offset_rate(context: SolverContext, edge_id: int) -> float:
    """Offset gained per unit travelled along an interior edge.

    Zero when the ray runs parallel to its clockwise parent: the wavefront no
    longer moves along that edge.
    """
    rate = cross(context.edge(edge_id).basis_vector, context.clockwise_parent(edge_id).basis_vector)
    return 0.0 if context.tolerance.is_zero(rate) else rate


def offset_distance_along(context: SolverContext, edge_id: int, along: float) -> float:
    """Offset distance reached after travelling ``along`` units down an interior edge."""
    rate = offset_rate(context, edge_id)
    delta = 0.0 if rate == 0.0 else along * rate
    return source_offset_distance(context, edge_id) + delta


def point_at_offset(context: SolverContext, edge_id: int, offset: float) -> Vector2 | None:
    """Point on an interior edge's ray where the wavefront reaches ``offset``.

    Returns:
        The point, or None when the ray does not change offset
    """
    rate = offset_rate(context, edge_id)
    if rate == 0.0:
        return None
    along = (offset - source_offset_distance(context, edge_id)) / rate
    return point_along(context.ray(edge_id), along)


def shares_parent(context: SolverContext, edge_a: int, edge_b: int) -> bool:
    """Check if one edge's clockwise parent is the other's widdershins parent."""
    cw_a, ws_a = context.parents(edge_a)
    cw_b, ws_b = context.parents(edge_b)
    return cw_a == ws_b or ws_a == cw_b


def collide_interior_edges(
    context: SolverContext,
    edge_a: int,
    edge_b: int,
) -> CollisionEvent | None:
    """Collide two interior edges.

    Args:
        context: Solver context
        edge_a: Instigator interior edge
        edge_b: Target interior edge

    Returns:
        CollisionEvent (possibly phantomDivergentOffset), or None when the rays
        never meet
    """
    tolerance = context.tolerance
    ray_a = context.ray(edge_a)
    ray_b = context.ray(edge_b)
    intersection = intersect_rays(ray_a, ray_b, tolerance)
    kind = intersection.kind

    if kind in NO_COLLISION_KINDS or kind is IntersectionKind.CO_LINEAR_FROM_2:
        return None

    if kind is IntersectionKind.HEAD_ON:
        distances = _head_on_distances(context, edge_a, edge_b, intersection.t1)
        if distances is None:
            return None
        along_a, along_b = distances
    elif kind is IntersectionKind.CO_LINEAR_FROM_1:
        along_a, along_b = intersection.t1, 0.0
    else:
        along_a, along_b = intersection.t1, intersection.t2

    offset_a = offset_distance_along(context, edge_a, along_a)
    offset_b = offset_distance_along(context, edge_b, along_b)

    if not tolerance.equal(offset_a, offset_b) or not tolerance.is_positive(offset_a):
        event_type = EventType.PHANTOM_DIVERGENT_OFFSET
    elif shares_parent(context, edge_a, edge_b):
        event_type = EventType.INTERIOR_PAIR
    else:
        event_type = EventType.INTERIOR_NON_ADJACENT

    return CollisionEvent(
        instigator_id=edge_a,
        target_id=edge_b,
        offset_distance=max(offset_a, offset_b),
        position=point_along(ray_a, along_a),
        event_type=event_type,
        intersection_kind=kind,
        instigator_distance=along_a,
        target_distance=along_b,
    )


def _head_on_distances(
    context: SolverContext,
    edge_a: int,
    edge_b: int,
    separation: float,
) -> tuple[float, float] | None:
    """Where two anti-parallel collinear rays meet.

    Both wavefronts must reach the meeting point at the same offset. When
    neither ray changes offset (a ridge between two parallel parents) the
    whole gap is swept at once: the rays meet at the first active bisector
    source between them, or at the target's source when there is none.
    """
    rate_a = offset_rate(context, edge_a)
    rate_b = offset_rate(context, edge_b)
    closing = rate_a + rate_b

    if not context.tolerance.is_positive(closing):
        stop = context.nearest_source_on_ray(context.ray(edge_a), separation, (edge_a, edge_b))
        along_a = separation if stop is None else stop[1]
        return along_a, separation - along_a

    along_a = (
        source_offset_distance(context, edge_b)
        - source_offset_distance(context, edge_a)
        + rate_b * separation
    ) / closing
    along_b = separation - along_a
    if not context.tolerance.is_positive(along_a) or along_b < -context.tolerance.epsilon:
        return None
    return along_a, max(along_b, 0.0)


def collide_interior_against_exterior(
    context: SolverContext,
    interior_id: int,
    exterior_id: int,
    active: Sequence[int] | None = None,
) -> CollisionEvent | None:
    """Collide a bisector with the wavefront of a non-parent exterior edge.

    The direct strike is tried first; if the ray does not head towards the
    exterior edge's line, the wavefront strike covers the case where the
    exterior wavefront itself closes in on the ray.

    Args:
        context: Solver context
        interior_id: Instigator interior edge
        exterior_id: Exterior edge that may be split
        active: Interior edges bounding the current region (defaults to all active)

    Returns:
        interiorAgainstExterior event, or None
    """
    if exterior_id in context.parents(interior_id):
        return None

    event = _direct_strike(context, interior_id, exterior_id)
    if event is None:
        event = _wavefront_strike(context, interior_id, exterior_id)
    if event is None:
        return None

    if not is_within_wavefront_boundary(
        context, exterior_id, event.position, event.offset_distance, active
    ):
        return None
    return event


def _direct_strike(
    context: SolverContext,
    interior_id: int,
    exterior_id: int,
) -> CollisionEvent | None:
    """Split point when the bisector ray converges with the exterior edge's line.

    The ray reaches the exterior line after ``reach`` units. The collision
    happens earlier, where the distance still left to the line equals the
    offset gained so far: along the ray the gap closes at
    ``rate + approach`` per unit while ``approach`` per unit is spent on
    reaching the line.
    """
    tolerance = context.tolerance
    ray = context.ray(interior_id)
    exterior = context.edge(exterior_id)
    exterior_ray = RayProjection(context.node_position(exterior.source), exterior.basis_vector)

    approach = -cross(ray.direction, exterior.basis_vector)
    if not tolerance.is_positive(approach):
        return None

    gap = cross(subtract(ray.source, exterior_ray.source), exterior.basis_vector)
    reach = gap / approach
    rate = offset_rate(context, interior_id)
    along = (reach * approach - source_offset_distance(context, interior_id)) / (rate + approach)
    return _strike_event(context, interior_id, exterior_id, along, IntersectionKind.CONVERGING)


def _wavefront_strike(
    context: SolverContext,
    interior_id: int,
    exterior_id: int,
) -> CollisionEvent | None:
    """Split point when the exterior wavefront catches a ray that does not head at its line.

    Solves for the point along the bisector whose distance to its own parent
    equals its distance to the exterior edge's line.
    """
    tolerance = context.tolerance
    ray = context.ray(interior_id)
    exterior = context.edge(exterior_id)
    drift = cross(ray.direction, exterior.basis_vector)
    closing = offset_rate(context, interior_id) - drift
    if not tolerance.is_positive(closing):
        return None

    gap = cross(
        subtract(ray.source, context.node_position(exterior.source)), exterior.basis_vector
    )
    along = (gap - source_offset_distance(context, interior_id)) / closing
    kind = IntersectionKind.PARALLEL if tolerance.is_zero(drift) else IntersectionKind.DIVERGING
    return _strike_event(context, interior_id, exterior_id, along, kind)


def _strike_event(
    context: SolverContext,
    interior_id: int,
    exterior_id: int,
    along: float,
    kind: IntersectionKind,
) -> CollisionEvent | None:
    tolerance = context.tolerance
    if not tolerance.is_positive(along):
        return None
    offset = offset_distance_along(context, interior_id, along)
    if not tolerance.is_positive(offset):
        return None
    return CollisionEvent(
        instigator_id=interior_id,
        target_id=exterior_id,
        offset_distance=offset,
        position=point_along(context.ray(interior_id), along),
        event_type=EventType.INTERIOR_AGAINST_EXTERIOR,
        intersection_kind=kind,
        instigator_distance=along,
        target_distance=0.0,
    )


def is_within_wavefront_boundary(
    context: SolverContext,
    exterior_id: int,
    position: Vector2,
    offset: float,
    active: Sequence[int] | None = None,
) -> bool:
    """Check a split point lies on the shrunk extent of an exterior edge.

    Each end of the exterior wavefront is advanced along its bounding bisector
    to ``offset``; the point must lie forward of the start and behind the end
    along the exterior edge's basis. An end whose bisector does not change
    offset does not constrain the point. Ends without an active bounding
    bisector fall back to the primary bisectors at the edge's vertices.
    """
    tolerance = context.tolerance
    basis = context.edge(exterior_id).basis_vector
    n = context.num_exterior
    start_edge, end_edge = context.bounding_bisectors(exterior_id, active)
    if start_edge is None:
        start_edge = n + exterior_id
    if end_edge is None:
        end_edge = n + (exterior_id + 1) % n

    start = point_at_offset(context, start_edge, offset)
    end = point_at_offset(context, end_edge, offset)

    if start is not None and end is not None:
        if dot(subtract(end, start), basis) < -tolerance.epsilon:
            return False
    if start is not None and dot(subtract(position, start), basis) < -tolerance.epsilon:
        return False
    if end is not None and dot(subtract(end, position), basis) < -tolerance.epsilon:
        return False
    return True


def collide_edges(
    context: SolverContext,
    edge_a: int,
    edge_b: int,
    active: Sequence[int] | None = None,
) -> CollisionEvent | None:
    """Dispatch a collision test between an interior edge and any other edge.

    Returns None when either edge is already accepted, when the instigator is
    exterior, or when an exterior target is tested against a non-reflex
    bisector while reflex-only collisions are configured. Each edge's
    provisional length is lowered to the forward distance of a genuine event.

    Args:
        context: Solver context
        edge_a: Instigator (must be interior)
        edge_b: Interior or exterior target
        active: Interior edges bounding the current region

    Returns:
        CollisionEvent or None
    """
    if edge_a == edge_b or context.is_accepted(edge_a) or context.is_accepted(edge_b):
        return None
    if context.edge_rank(edge_a) is EdgeRank.EXTERIOR:
        return None

    if context.edge_rank(edge_b) is EdgeRank.EXTERIOR:
        if context.collide_reflex_only and not context.is_reflex(edge_a):
            return None
        event = collide_interior_against_exterior(context, edge_a, edge_b, active)
    else:
        event = collide_interior_edges(context, edge_a, edge_b)

    if event is not None and not event.is_phantom:
        _record_length(context, edge_a, event.instigator_distance)
        if not context.graph.is_exterior(edge_b):
            _record_length(context, edge_b, event.target_distance)
    return event


def _record_length(context: SolverContext, edge_id: int, along: float) -> None:
    record = context.interior_edge(edge_id)
    if 0.0 < along < record.length:
        record.length = along


def build_candidate_lists(
    context: SolverContext,
    edge_ids: Sequence[int],
) -> dict[int, list[CollisionEvent]]:
    """Every collision of each edge against the rest of its region.

    Each instigator is collided with every other edge in ``edge_ids`` and, when
    reflex, with the region's unaccepted exterior parents.

    Args:
        context: Solver context
        edge_ids: Interior edges of one region

    Returns:
        Mapping of instigator id to its events sorted by ``sort_key``,
        including phantomDivergentOffset events
    """
    active = [e for e in edge_ids if not context.is_accepted(e)]
    exterior_parents = context.exterior_parents(active)
    lists: dict[int, list[CollisionEvent]] = {}

    for instigator in active:
        events = []
        for other in active:
            if other == instigator:
                continue
            event = collide_edges(context, instigator, other, active)
            if event is not None:
                events.append(event)
        if context.is_reflex(instigator) or not context.collide_reflex_only:
            for exterior_id in exterior_parents:
                event = collide_edges(context, instigator, exterior_id, active)
                if event is not None:
                    events.append(event)
        events.sort(key=lambda e: e.sort_key)
        lists[instigator] = events

    return lists


def create_collision_events(
    context: SolverContext,
    edge_ids: Iterable[int] | None = None,
) -> list[CollisionEvent]:
    """Best genuine collision of every unresolved interior edge.

    Args:
        context: Solver context
        edge_ids: Interior edges to consider (defaults to every active one)

    Returns:
        One event per instigator that has a non-phantom collision, sorted
        ascending by offset distance (ties by event priority, then ids)
    """
    ids = context.active_interior_edge_ids() if edge_ids is None else list(edge_ids)
    best = []
    for events in build_candidate_lists(context, ids).values():
        genuine = [e for e in events if not e.is_phantom]
        if genuine:
            best.append(genuine[0])
    best.sort(key=lambda e: e.sort_key)
    return best


def select_event_slice(
    candidate_lists: dict[int, list[CollisionEvent]],
    context: SolverContext,
) -> tuple[list[CollisionEvent], int]:
    """Take the smallest-offset slice of events holding a genuine collision.

    Slices are taken at the minimum remaining offset, ties within tolerance
    together. Slices made only of phantomDivergentOffset events are discarded
    and the next one is examined.

    Args:
        candidate_lists: Per-instigator sorted events
        context: Solver context

    Returns:
        Tuple of (genuine events of the selected slice, one per instigator
        ordered by event priority then ids, followed by the instigators'
        other exterior strikes at the same point; number of phantom events
        discarded)
    """
    tolerance = context.tolerance
    remaining = sorted(
        (event for events in candidate_lists.values() for event in events),
        key=lambda e: e.sort_key,
    )
    discarded = 0

    while remaining:
        floor = remaining[0].offset_distance
        cut = 0
        while cut < len(remaining) and remaining[cut].offset_distance <= floor + tolerance.epsilon:
            cut += 1
        current, remaining = remaining[:cut], remaining[cut:]

        genuine = [e for e in current if not e.is_phantom]
        discarded += len(current) - len(genuine)
        if not genuine:
            continue

        genuine.sort(key=lambda e: (e.event_type.priority, e.instigator_id, e.target_id))
        chosen: dict[int, CollisionEvent] = {}
        for event in genuine:
            chosen.setdefault(event.instigator_id, event)
        return list(chosen.values()) + _coincident_strikes(chosen, genuine, tolerance), discarded

    return [], discarded


def _coincident_strikes(
    chosen: dict[int, CollisionEvent],
    genuine: list[CollisionEvent],
    tolerance: Tolerance,
) -> list[CollisionEvent]:
    """Further exterior strikes of chosen instigators at their chosen point.

    A bisector meeting another one exactly on a third edge's wavefront also
    collapses that wavefront there.
    """
    extra = []
    for event in genuine:
        first = chosen[event.instigator_id]
        if (
            event is not first
            and event.event_type is EventType.INTERIOR_AGAINST_EXTERIOR
            and tolerance.vectors_equal(event.position, first.position)
        ):
            extra.append(event)
    return extra
