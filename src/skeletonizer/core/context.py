"""Solver context: the façade every solver component works through.

The context owns the graph, the acceptance flags and the node index for one
computation. It answers structural questions (parents, rank, reflexness),
deduplicates collision nodes and decides when an exterior edge has
collapsed.
"""

import math
from collections import defaultdict
from collections.abc import Iterable, Sequence

from skeletonizer.core.construction import build_graph
from skeletonizer.core.geometry import RayProjection, bisector_direction, cross, dot, subtract
from skeletonizer.domain import (
    DEFAULT_TOLERANCE,
    EdgeRank,
    InteriorEdge,
    PolygonEdge,
    StraightSkeletonGraph,
    Tolerance,
    Vector2,
)


class NodeIndex:
    """Spatial hash of interior node positions.

    Positions are bucketed into square cells of side ``epsilon``; a lookup
    scans the 3x3 block around the query cell so every node within epsilon
    on both axes is found.
    """

    def __init__(self, tolerance: Tolerance) -> None:
        self._tolerance = tolerance
        self._cell = tolerance.epsilon
        self._buckets: dict[tuple[int, int], list[tuple[int, Vector2]]] = defaultdict(list)

    def _key(self, position: Vector2) -> tuple[int, int]:
        return (math.floor(position.x / self._cell), math.floor(position.y / self._cell))

    def add(self, node_id: int, position: Vector2) -> None:
        self._buckets[self._key(position)].append((node_id, position))

    def find(self, position: Vector2) -> int | None:
        """Return the lowest node id within tolerance of position, if any."""
        kx, ky = self._key(position)
        matches = [
            node_id
            for dx in (-1, 0, 1)
            for dy in (-1, 0, 1)
            for node_id, stored in self._buckets.get((kx + dx, ky + dy), ())
            if self._tolerance.vectors_equal(stored, position)
        ]
        return min(matches) if matches else None

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets.values())


class SolverContext:
    """Façade over the graph model for one straight skeleton computation.

    Example:
        context = SolverContext.from_vertices(vertices)
        for edge_id in context.active_interior_edge_ids():
            print(edge_id, context.edge_rank(edge_id))
    """

    def __init__(
        self,
        graph: StraightSkeletonGraph,
        tolerance: Tolerance = DEFAULT_TOLERANCE,
        collide_reflex_only: bool = True,
    ) -> None:
        """Initialize the context around an existing graph.

        Args:
            graph: Graph to operate on (mutated in place)
            tolerance: Comparison policy for every predicate
            collide_reflex_only: Only test reflex bisectors against exterior edges
        """
        self.graph = graph
        self.tolerance = tolerance
        self.collide_reflex_only = collide_reflex_only
        self.accepted: list[bool] = [False] * len(graph.edges)
        self.node_index = NodeIndex(tolerance)
        for node in graph.interior_nodes:
            self.node_index.add(node.id, node.position)

    @classmethod
    def from_vertices(
        cls,
        vertices: Sequence[Vector2],
        tolerance: Tolerance = DEFAULT_TOLERANCE,
        collide_reflex_only: bool = True,
    ) -> "SolverContext":
        """Build the graph for a vertex list and seed the primary bisectors.

        Args:
            vertices: Polygon vertices in clockwise order
            tolerance: Comparison policy
            collide_reflex_only: Only test reflex bisectors against exterior edges

        Returns:
            Context whose graph holds one primary bisector per vertex
        """
        context = cls(build_graph(vertices), tolerance, collide_reflex_only)
        context.seed_primary_bisectors()
        return context

    @property
    def num_exterior(self) -> int:
        return self.graph.num_exterior_nodes

    def seed_primary_bisectors(self) -> list[int]:
        """Create one primary bisector per exterior vertex.

        The bisector at vertex ``i`` separates exterior edge ``i`` (clockwise
        parent) from exterior edge ``i - 1`` (widdershins parent).

        Returns:
            Ids of the created interior edges
        """
        n = self.num_exterior
        created = []
        for i in range(n):
            clockwise = i
            widdershins = (i - 1 + n) % n
            direction = bisector_direction(
                self.graph.edges[clockwise].basis_vector,
                self.graph.edges[widdershins].basis_vector,
                tolerance=self.tolerance,
            )
            created.append(self.add_interior_edge(i, direction, clockwise, widdershins))
        return created

    def edge(self, edge_id: int) -> PolygonEdge:
        return self.graph.get_edge(edge_id)

    def interior_edge(self, edge_id: int) -> InteriorEdge:
        return self.graph.get_interior_edge(edge_id)

    def clockwise_parent(self, edge_id: int) -> PolygonEdge:
        """Exterior edge following the bisector's source."""
        return self.graph.edges[self.interior_edge(edge_id).clockwise_exterior_edge_index]

    def widdershins_parent(self, edge_id: int) -> PolygonEdge:
        """Exterior edge preceding the bisector's source."""
        return self.graph.edges[self.interior_edge(edge_id).widdershins_exterior_edge_index]

    def parents(self, edge_id: int) -> tuple[int, int]:
        """Clockwise and widdershins parent ids of an interior edge."""
        record = self.interior_edge(edge_id)
        return (record.clockwise_exterior_edge_index, record.widdershins_exterior_edge_index)

    def edge_rank(self, edge_id: int) -> EdgeRank:
        """Classify an edge as exterior, primary or secondary."""
        if self.graph.is_exterior(edge_id):
            return EdgeRank.EXTERIOR
        if self.edge(edge_id).source < self.num_exterior:
            return EdgeRank.PRIMARY
        return EdgeRank.SECONDARY

    def is_reflex(self, edge_id: int) -> bool:
        """Check if an interior edge leaves a vertex whose interior angle exceeds 180 degrees."""
        if self.graph.is_exterior(edge_id):
            return False
        turn = cross(
            self.clockwise_parent(edge_id).basis_vector,
            self.widdershins_parent(edge_id).basis_vector,
        )
        return turn < -self.tolerance.epsilon

    def node_position(self, node_id: int) -> Vector2:
        return self.graph.nodes[node_id].position

    def source_position(self, edge_id: int) -> Vector2:
        return self.node_position(self.edge(edge_id).source)

    def ray(self, edge_id: int) -> RayProjection:
        """Project an edge as a ray from its source along its basis."""
        edge = self.edge(edge_id)
        return RayProjection(self.node_position(edge.source), edge.basis_vector)

    def is_accepted(self, edge_id: int) -> bool:
        return self.accepted[edge_id]

    def accept(self, edge_id: int) -> None:
        self.accepted[edge_id] = True

    def accept_all(self, edge_ids: Iterable[int]) -> None:
        for edge_id in edge_ids:
            self.accept(edge_id)

    def find_node(self, position: Vector2) -> int | None:
        """Id of an interior node within tolerance of position, if any."""
        return self.node_index.find(position)

    def find_or_add_node(self, position: Vector2) -> int:
        """Reuse the interior node at position or create one."""
        existing = self.find_node(position)
        if existing is not None:
            return existing
        node_id = self.graph.add_node(position)
        self.node_index.add(node_id, position)
        return node_id

    def add_interior_edge(
        self,
        source: int,
        direction: Vector2,
        clockwise_parent: int,
        widdershins_parent: int,
    ) -> int:
        """Append an unaccepted interior edge to the graph."""
        edge_id = self.graph.add_interior_edge(
            source, direction, clockwise_parent, widdershins_parent
        )
        self.accepted.append(False)
        return edge_id

    def interior_edge_ids(self) -> range:
        return range(self.num_exterior, len(self.graph.edges))

    def active_interior_edge_ids(self) -> list[int]:
        """Ids of interior edges that still take part in collisions."""
        return [e for e in self.interior_edge_ids() if not self.accepted[e]]

    def exterior_parents(self, edge_ids: Iterable[int]) -> list[int]:
        """Unaccepted exterior edges that parent any of the given interior edges."""
        parents: set[int] = set()
        for edge_id in edge_ids:
            parents.update(self.parents(edge_id))
        return sorted(p for p in parents if not self.accepted[p])

    def bounding_bisectors(
        self,
        exterior_id: int,
        edge_ids: Iterable[int] | None = None,
    ) -> tuple[int | None, int | None]:
        """Active bisectors at the start and end of an exterior edge's wavefront.

        The start bisector has the exterior edge as clockwise parent, the end
        bisector has it as widdershins parent. When several qualify the most
        recently created one wins.

        Args:
            exterior_id: Exterior edge id
            edge_ids: Candidate interior edges (defaults to all active ones)

        Returns:
            Tuple of (start edge id, end edge id), either may be None
        """
        candidates = self.active_interior_edge_ids() if edge_ids is None else edge_ids
        start: int | None = None
        end: int | None = None
        for edge_id in candidates:
            if self.accepted[edge_id]:
                continue
            clockwise, widdershins = self.parents(edge_id)
            if clockwise == exterior_id and (start is None or edge_id > start):
                start = edge_id
            if widdershins == exterior_id and (end is None or edge_id > end):
                end = edge_id
        return start, end

    def nearest_source_on_ray(
        self,
        ray: RayProjection,
        limit: float,
        exclude: Iterable[int] = (),
    ) -> tuple[int, float] | None:
        """Closest active bisector source lying on a ray strictly before ``limit``.

        Returns:
            Tuple of (node id, distance along the ray), or None
        """
        tolerance = self.tolerance
        skipped = set(exclude)
        best: tuple[int, float] | None = None
        for edge_id in self.active_interior_edge_ids():
            if edge_id in skipped:
                continue
            offset = subtract(self.source_position(edge_id), ray.source)
            if not tolerance.is_zero(cross(offset, ray.direction)):
                continue
            along = dot(offset, ray.direction)
            if not (tolerance.is_positive(along) and tolerance.is_positive(limit - along)):
                continue
            if best is None or along < best[1]:
                best = (self.edge(edge_id).source, along)
        return best

    def has_closed_face(self, exterior_id: int) -> bool:
        """Check if accepted interior edges connect both ends of an exterior edge.

        Walks accepted, terminated interior edges (in either direction) from
        the exterior edge's target node and reports whether its source node is
        reachable.
        """
        edge = self.edge(exterior_id)
        start = edge.target
        goal = edge.source
        if start is None:
            return False

        visited = {start}
        frontier = [start]
        while frontier:
            node_id = frontier.pop()
            node = self.graph.nodes[node_id]
            for edge_id in (*node.out_edges, *node.in_edges):
                if self.graph.is_exterior(edge_id) or not self.accepted[edge_id]:
                    continue
                interior = self.graph.edges[edge_id]
                if interior.target is None:
                    continue
                neighbour = interior.target if interior.source == node_id else interior.source
                if neighbour == goal:
                    return True
                if neighbour not in visited:
                    visited.add(neighbour)
                    frontier.append(neighbour)
        return False

    def try_accept_exterior_edge(self, exterior_id: int) -> bool:
        """Accept an exterior edge whose wavefront has shrunk to nothing.

        The edge is accepted once no active bisector still has it as a parent
        and its face is closed by accepted interior edges.

        Returns:
            True if the edge is accepted after the call
        """
        if self.accepted[exterior_id]:
            return True
        for edge_id in self.active_interior_edge_ids():
            if exterior_id in self.parents(edge_id):
                return False
        if not self.has_closed_face(exterior_id):
            return False
        self.accept(exterior_id)
        return True

    def accept_collapsed_exterior_edges(self) -> list[int]:
        """Sweep every exterior edge and accept the collapsed ones.

        Returns:
            Ids of exterior edges accepted by this sweep
        """
        newly_accepted = []
        for exterior_id in range(self.num_exterior):
            if not self.accepted[exterior_id] and self.try_accept_exterior_edge(exterior_id):
                newly_accepted.append(exterior_id)
        return newly_accepted

    def graph_is_complete(self) -> bool:
        """Check if every exterior edge is accepted."""
        return all(self.accepted[: self.num_exterior])
