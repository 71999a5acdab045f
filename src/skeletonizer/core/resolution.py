"""Collision resolution: terminate colliding bisectors and propose new ones.

Events selected for one offset are grouped by collision point. Each group
resolves to a single node where every member bisector terminates. The
members' parent pairs are then chained (a bisector whose widdershins parent
is another's clockwise parent continues it) and every open chain leaves one
new bisector behind:

- interiorPair: one chain, one bisector spanning the chain's outer parents.
- interiorNonAdjacent / interiorAgainstExterior: two or more chains, a split
  with one bisector per resulting region.
- A closed chain (every wavefront around the node collapsed) leaves nothing.

A ridge between two parallel wavefronts is drawn once. The bisector proposed
at its far end closes the ridge already running towards it instead of
starting a second one in the opposite direction.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from skeletonizer.core.collision import offset_at_point, offset_rate, source_offset_distance
from skeletonizer.core.context import SolverContext
from skeletonizer.core.geometry import bisector_direction, dot, subtract
from skeletonizer.domain import CollisionEvent, IntersectionKind, ProposedBisection, Vector2


@dataclass
class CollisionGroup:
    """Events that meet at one point within a single step.

    Attributes:
        position: Collision point shared by every event
        edge_ids: Interior edges terminating at the point, in event order
        exterior_ids: Exterior edges struck at the point
        partners: Interior edge id to the interior edge it collided with
        head_on: Interior edges that met their partner head-on
        events: Events absorbed into the group
    """

    position: Vector2
    edge_ids: list[int] = field(default_factory=list)
    exterior_ids: list[int] = field(default_factory=list)
    partners: dict[int, int] = field(default_factory=dict)
    head_on: set[int] = field(default_factory=set)
    events: list[CollisionEvent] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class _ChainLink:
    edge_id: int
    clockwise: int
    widdershins: int


def group_events(
    context: SolverContext,
    events: Sequence[CollisionEvent],
) -> list[CollisionGroup]:
    """Group events by collision point.

    An interior edge belongs to at most one group; an event that would pull an
    already grouped edge into a different group is dropped, together with the
    instigator's later events.

    Args:
        context: Solver context
        events: Genuine events of one slice, in resolution order

    Returns:
        Groups in order of first appearance
    """
    tolerance = context.tolerance
    groups: list[CollisionGroup] = []
    owner: dict[int, int] = {}
    dropped: set[int] = set()

    for event in events:
        if event.instigator_id in dropped:
            continue
        target_is_exterior = context.graph.is_exterior(event.target_id)
        interior_ids = [event.instigator_id]
        if not target_is_exterior:
            interior_ids.append(event.target_id)

        index = next(
            (
                i
                for i, group in enumerate(groups)
                if tolerance.vectors_equal(group.position, event.position)
            ),
            len(groups),
        )
        if any(owner.get(edge_id, index) != index for edge_id in interior_ids):
            dropped.add(event.instigator_id)
            continue
        if index == len(groups):
            groups.append(CollisionGroup(position=event.position))
        group = groups[index]
        group.events.append(event)

        for edge_id in interior_ids:
            owner[edge_id] = index
            if edge_id not in group.edge_ids:
                group.edge_ids.append(edge_id)

        if target_is_exterior:
            if event.target_id not in group.exterior_ids:
                group.exterior_ids.append(event.target_id)
            continue

        group.partners.setdefault(event.instigator_id, event.target_id)
        group.partners.setdefault(event.target_id, event.instigator_id)
        if event.intersection_kind is IntersectionKind.HEAD_ON:
            group.head_on.update(interior_ids)

    return groups


def resolve_group(context: SolverContext, group: CollisionGroup) -> list[ProposedBisection]:
    """Terminate a group's bisectors at one node and propose their successors.

    A head-on member that starts at the collision node ends there with zero
    length. A proposal mirroring a bisector that already leaves the node
    closes that bisector instead.

    Args:
        context: Solver context (graph and acceptance flags are mutated)
        group: Group to resolve

    Returns:
        Proposed bisections leaving the group's node
    """
    node_id = context.find_or_add_node(group.position)
    members = []

    for edge_id in group.edge_ids:
        if context.edge(edge_id).source == node_id and edge_id not in group.head_on:
            continue
        context.graph.set_target(edge_id, node_id)
        context.accept(edge_id)
        members.append(edge_id)

    proposals = propose_bisections(context, node_id, members, group.exterior_ids)
    return [p for p in proposals if not _close_resident(context, p)]


def _close_resident(context: SolverContext, proposal: ProposedBisection) -> bool:
    """Terminate an active bisector leaving the proposal's node with mirrored parents."""
    clockwise, widdershins = proposal.span
    for edge_id in context.graph.nodes[proposal.source].out_edges:
        if context.graph.is_exterior(edge_id) or context.is_accepted(edge_id):
            continue
        if context.parents(edge_id) == (widdershins, clockwise):
            context.graph.set_target(edge_id, proposal.source)
            context.accept(edge_id)
            return True
    return False


def propose_bisections(
    context: SolverContext,
    node_id: int,
    edge_ids: Sequence[int],
    exterior_ids: Iterable[int] = (),
) -> list[ProposedBisection]:
    """Derive the bisectors left behind at a node from the edges ending there.

    Args:
        context: Solver context
        node_id: Node where the edges terminate
        edge_ids: Interior edges resolved at the node
        exterior_ids: Exterior edges struck at the node

    Returns:
        One proposal per open chain of parents, in chain order
    """
    links = [_ChainLink(edge_id, *context.parents(edge_id)) for edge_id in edge_ids]
    links.extend(_ChainLink(x, x, x) for x in exterior_ids)
    chains = _build_chains(links)
    count = len(chains)
    n = context.num_exterior
    proposals = []

    for j, chain in enumerate(chains):
        clockwise = chain[-1].clockwise
        if count == 1:
            partner = chain
        else:
            partner = min(
                (other for k, other in enumerate(chains) if k != j),
                key=lambda other: (other[0].widdershins - clockwise) % n,
            )
        widdershins = partner[0].widdershins
        if clockwise == widdershins:
            continue
        proposals.append(
            ProposedBisection(
                clockwise_exterior_edge_index=clockwise,
                widdershins_exterior_edge_index=widdershins,
                source=node_id,
                from_split=count > 1,
            )
        )

    return proposals


def _build_chains(links: list[_ChainLink]) -> list[list[_ChainLink]]:
    """Split links into maximal open chains; closed cycles are dropped."""
    successor: dict[int, int] = {}
    has_predecessor: set[int] = set()
    for a, link in enumerate(links):
        for b, other in enumerate(links):
            if b == a or b in has_predecessor:
                continue
            if other.widdershins == link.clockwise:
                successor[a] = b
                has_predecessor.add(b)
                break

    chains = []
    for a in range(len(links)):
        if a in has_predecessor:
            continue
        chain = [links[a]]
        current = a
        while current in successor:
            current = successor[current]
            chain.append(links[current])
        chains.append(chain)
    return chains


def handle_collision_event(
    context: SolverContext,
    event: CollisionEvent,
) -> list[ProposedBisection]:
    """Resolve a single collision event.

    Args:
        context: Solver context
        event: Genuine collision event

    Returns:
        Proposed bisections (one for a pair collapse, two for a split)
    """
    groups = group_events(context, [event])
    return resolve_group(context, groups[0])


def materialize_bisection(context: SolverContext, proposal: ProposedBisection) -> int | None:
    """Turn a proposed bisection into a graph edge.

    The direction is computed from the current bases of the two parents. A
    proposal that meets an opposing ridge closes that ridge at its source
    instead of adding an edge.

    Returns:
        Id of the new interior edge, or None if a parent is already accepted
        or the proposal closed a ridge
    """
    clockwise, widdershins = proposal.span
    if context.is_accepted(clockwise) or context.is_accepted(widdershins):
        return None
    if join_ridge(context, proposal) is not None:
        return None
    direction = bisector_direction(
        context.edge(clockwise).basis_vector,
        context.edge(widdershins).basis_vector,
        context.tolerance,
    )
    return context.add_interior_edge(proposal.source, direction, clockwise, widdershins)


def join_ridge(context: SolverContext, proposal: ProposedBisection) -> int | None:
    """Close the nearest ridge running towards a proposal's source.

    A ridge qualifies when its parents mirror the proposal's, it keeps a
    constant offset, and the proposal's source lies ahead of it on the same
    wavefront.

    Returns:
        Id of the closed ridge, or None when no ridge qualifies
    """
    clockwise, widdershins = proposal.span
    tolerance = context.tolerance
    source = context.node_position(proposal.source)
    best: tuple[float, int] | None = None

    for edge_id in context.active_interior_edge_ids():
        if context.parents(edge_id) != (widdershins, clockwise):
            continue
        if offset_rate(context, edge_id) != 0.0:
            continue
        ray = context.ray(edge_id)
        along = dot(subtract(source, ray.source), ray.direction)
        if not tolerance.is_positive(along):
            continue
        if not tolerance.equal(
            offset_at_point(context, edge_id, source), source_offset_distance(context, edge_id)
        ):
            continue
        if best is None or along < best[0]:
            best = (along, edge_id)

    if best is None:
        return None
    _, edge_id = best
    context.graph.set_target(edge_id, proposal.source)
    context.accept(edge_id)
    return edge_id
