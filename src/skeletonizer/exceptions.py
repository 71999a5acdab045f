"""Exception hierarchy for Skeletonizer."""


class SkeletonizerError(Exception):
    """Base exception for all Skeletonizer errors."""

    pass


class InputError(SkeletonizerError):
    """Errors related to loading polygon input."""

    pass


class PolygonLoadError(InputError):
    """Error loading a polygon file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load polygon '{path}': {reason}")


class PolygonFormatError(InputError):
    """Polygon file content is not a recognised vertex list."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid polygon format '{path}': {details}")


class GraphError(SkeletonizerError):
    """Violations of the skeleton graph invariants."""

    pass


class TargetReassignedError(GraphError):
    """An edge target was about to be overwritten."""

    def __init__(self, edge_id: int, existing: int, attempted: int) -> None:
        self.edge_id = edge_id
        self.existing = existing
        self.attempted = attempted
        super().__init__(
            f"Edge {edge_id} already targets node {existing}; refusing to retarget to {attempted}"
        )


class UnknownEdgeError(GraphError):
    """Requested edge id does not exist in the graph."""

    def __init__(self, edge_id: int) -> None:
        self.edge_id = edge_id
        super().__init__(f"Edge {edge_id} not found in graph")


class SolverError(SkeletonizerError):
    """Errors raised while driving the wavefront simulation."""

    pass


class NoCollisionsGenerableError(SolverError):
    """Unresolved edges remain but no collision event can be produced."""

    def __init__(self, edge_ids: list[int]) -> None:
        self.edge_ids = list(edge_ids)
        super().__init__(f"No collisions generable for unresolved edges {self.edge_ids}")


class UnassignableEdgeError(SolverError):
    """An edge fits none of the spans produced by a split."""

    def __init__(
        self,
        edge_id: int,
        partition: list[int],
        spans: list[tuple[int, int]],
    ) -> None:
        self.edge_id = edge_id
        self.partition = list(partition)
        self.spans = list(spans)
        super().__init__(
            f"Edge {edge_id} fits no split span {self.spans} (partition {self.partition})"
        )


class IterationCapExceededError(SolverError):
    """The solver step cap was reached before the skeleton completed."""

    def __init__(self, limit: int, pending_edge_ids: list[int]) -> None:
        self.limit = limit
        self.pending_edge_ids = list(pending_edge_ids)
        super().__init__(
            f"Step cap of {limit} exceeded with {len(self.pending_edge_ids)} edges pending"
        )
