"""Straight skeleton graph model.

This module defines the arena-style graph the solver mutates:
- PolygonNode: A vertex of the input polygon or a resolved collision point
- PolygonEdge: An exterior boundary segment or an interior bisector ray
- InteriorEdge: Parent bookkeeping for an interior bisector
- StraightSkeletonGraph: Nodes and edges addressed by integer id

Exterior edges occupy ids ``0..num_exterior_nodes - 1``; every later id is an
interior edge whose auxiliary record sits at
``interior_edges[id - num_exterior_nodes]``.
"""

import math
from dataclasses import dataclass, field
from typing import Any

from skeletonizer.domain.vector import Vector2
from skeletonizer.exceptions import TargetReassignedError, UnknownEdgeError


@dataclass
class PolygonNode:
    """A node of the skeleton graph.

    Attributes:
        id: Node id (exterior nodes first, then one per resolved collision)
        position: Node location
        in_edges: Ids of edges targeting this node
        out_edges: Ids of edges leaving this node
    """

    id: int
    position: Vector2
    in_edges: list[int] = field(default_factory=list)
    out_edges: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "position": self.position.to_dict(),
            "inEdges": list(self.in_edges),
            "outEdges": list(self.out_edges),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PolygonNode":
        """Deserialize from dictionary."""
        return cls(
            id=data["id"],
            position=Vector2.from_dict(data["position"]),
            in_edges=list(data.get("inEdges", [])),
            out_edges=list(data.get("outEdges", [])),
        )


@dataclass
class PolygonEdge:
    """A directed edge of the skeleton graph.

    Attributes:
        id: Edge id
        source: Id of the node the edge leaves
        basis_vector: Unit direction from source towards target
        target: Id of the node the edge ends at, unset until resolved
    """

    id: int
    source: int
    basis_vector: Vector2
    target: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "basisVector": self.basis_vector.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PolygonEdge":
        """Deserialize from dictionary."""
        return cls(
            id=data["id"],
            source=data["source"],
            basis_vector=Vector2.from_dict(data["basisVector"]),
            target=data.get("target"),
        )


@dataclass
class InteriorEdge:
    """Parent bookkeeping for an interior bisector.

    Attributes:
        id: Id of the matching PolygonEdge
        clockwise_exterior_edge_index: Exterior edge following the bisector source
        widdershins_exterior_edge_index: Exterior edge preceding the bisector source
        length: Shortest forward distance seen in a collision test (hint only)
    """

    id: int
    clockwise_exterior_edge_index: int
    widdershins_exterior_edge_index: int
    length: float = math.inf

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "clockwiseExteriorEdgeIndex": self.clockwise_exterior_edge_index,
            "widdershinsExteriorEdgeIndex": self.widdershins_exterior_edge_index,
            "length": None if math.isinf(self.length) else self.length,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InteriorEdge":
        """Deserialize from dictionary."""
        length = data.get("length")
        return cls(
            id=data["id"],
            clockwise_exterior_edge_index=data["clockwiseExteriorEdgeIndex"],
            widdershins_exterior_edge_index=data["widdershinsExteriorEdgeIndex"],
            length=math.inf if length is None else float(length),
        )


@dataclass
class StraightSkeletonGraph:
    """Arena of nodes and edges forming a (partial) straight skeleton.

    Attributes:
        num_exterior_nodes: Number of input polygon vertices
        nodes: All nodes, indexed by id
        edges: All edges, indexed by id
        interior_edges: Parent records for every interior edge
    """

    num_exterior_nodes: int = 0
    nodes: list[PolygonNode] = field(default_factory=list)
    edges: list[PolygonEdge] = field(default_factory=list)
    interior_edges: list[InteriorEdge] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Check if the graph holds no polygon."""
        return self.num_exterior_nodes == 0

    def is_exterior(self, edge_id: int) -> bool:
        """Check if an edge id lies in the boundary range."""
        return 0 <= edge_id < self.num_exterior_nodes

    def get_edge(self, edge_id: int) -> PolygonEdge:
        """Get an edge by id.

        Raises:
            UnknownEdgeError: If no edge has this id
        """
        if not 0 <= edge_id < len(self.edges):
            raise UnknownEdgeError(edge_id)
        return self.edges[edge_id]

    def get_interior_edge(self, edge_id: int) -> InteriorEdge:
        """Get the parent record of an interior edge.

        Raises:
            UnknownEdgeError: If the id is not an interior edge
        """
        index = edge_id - self.num_exterior_nodes
        if edge_id < self.num_exterior_nodes or index >= len(self.interior_edges):
            raise UnknownEdgeError(edge_id)
        return self.interior_edges[index]

    def add_node(self, position: Vector2) -> int:
        """Append a node and return its id."""
        node_id = len(self.nodes)
        self.nodes.append(PolygonNode(id=node_id, position=position))
        return node_id

    def add_interior_edge(
        self,
        source: int,
        basis_vector: Vector2,
        clockwise_parent: int,
        widdershins_parent: int,
    ) -> int:
        """Append an interior edge with its parent record.

        The edge is registered on its source node's outgoing list.

        Args:
            source: Id of the node the bisector leaves
            basis_vector: Unit direction of the bisector
            clockwise_parent: Exterior edge following the source
            widdershins_parent: Exterior edge preceding the source

        Returns:
            Id of the new edge
        """
        edge_id = len(self.edges)
        self.edges.append(PolygonEdge(id=edge_id, source=source, basis_vector=basis_vector))
        self.interior_edges.append(
            InteriorEdge(
                id=edge_id,
                clockwise_exterior_edge_index=clockwise_parent,
                widdershins_exterior_edge_index=widdershins_parent,
            )
        )
        out_edges = self.nodes[source].out_edges
        if edge_id not in out_edges:
            out_edges.append(edge_id)
        return edge_id

    def set_target(self, edge_id: int, node_id: int) -> None:
        """Terminate an edge at a node.

        Raises:
            TargetReassignedError: If the edge already has a different target
        """
        edge = self.get_edge(edge_id)
        if edge.target is not None:
            if edge.target == node_id:
                return
            raise TargetReassignedError(edge_id, edge.target, node_id)
        edge.target = node_id
        self.nodes[node_id].in_edges.append(edge_id)

    @property
    def interior_nodes(self) -> list[PolygonNode]:
        """Get nodes created by resolved collisions."""
        return self.nodes[self.num_exterior_nodes :]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary.

        Returns:
            Dictionary with numExteriorNodes, nodes, edges and interiorEdges
        """
        return {
            "numExteriorNodes": self.num_exterior_nodes,
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "interiorEdges": [edge.to_dict() for edge in self.interior_edges],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StraightSkeletonGraph":
        """Deserialize from dictionary.

        Args:
            data: Dictionary produced by to_dict()

        Returns:
            StraightSkeletonGraph instance
        """
        return cls(
            num_exterior_nodes=data["numExteriorNodes"],
            nodes=[PolygonNode.from_dict(n) for n in data["nodes"]],
            edges=[PolygonEdge.from_dict(e) for e in data["edges"]],
            interior_edges=[InteriorEdge.from_dict(e) for e in data["interiorEdges"]],
        )
