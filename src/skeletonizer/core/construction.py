"""Graph construction from an ordered vertex list."""

from collections.abc import Sequence

from skeletonizer.core.geometry import make_basis
from skeletonizer.domain import PolygonEdge, StraightSkeletonGraph, Vector2


def build_graph(vertices: Sequence[Vector2]) -> StraightSkeletonGraph:
    """Build the bounding polygon of a straight skeleton.

    Creates one exterior node per vertex and one exterior edge per side, in
    winding order: edge ``i`` runs from node ``i`` to node ``(i + 1) % n``.
    No interior edges are created here.

    Args:
        vertices: Polygon vertices in clockwise order

    Returns:
        Graph with ``n`` exterior nodes and edges, or an empty graph when
        fewer than three vertices are given
    """
    n = len(vertices)
    graph = StraightSkeletonGraph()
    if n < 3:
        return graph

    graph.num_exterior_nodes = n
    for vertex in vertices:
        graph.add_node(Vector2(float(vertex.x), float(vertex.y)))

    for i in range(n):
        j = (i + 1) % n
        graph.edges.append(
            PolygonEdge(
                id=i,
                source=i,
                target=j,
                basis_vector=make_basis(graph.nodes[i].position, graph.nodes[j].position),
            )
        )
        graph.nodes[i].out_edges.append(i)
        graph.nodes[j].in_edges.append(i)

    return graph
