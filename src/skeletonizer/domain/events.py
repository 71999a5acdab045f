"""Collision event types shared by detection, resolution and scheduling."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from skeletonizer.domain.vector import Vector2


class IntersectionKind(str, Enum):
    """Relationship between two rays."""

    CONVERGING = "converging"
    DIVERGING = "diverging"
    HEAD_ON = "head-on"
    PARALLEL = "parallel"
    IDENTICAL_SOURCE = "identical-source"
    CO_LINEAR_FROM_1 = "co-linear-from-1"
    CO_LINEAR_FROM_2 = "co-linear-from-2"


NO_COLLISION_KINDS = frozenset(
    {IntersectionKind.DIVERGING, IntersectionKind.PARALLEL, IntersectionKind.IDENTICAL_SOURCE}
)


class EventType(str, Enum):
    """Collision event classification."""

    INTERIOR_PAIR = "interiorPair"
    INTERIOR_NON_ADJACENT = "interiorNonAdjacent"
    INTERIOR_AGAINST_EXTERIOR = "interiorAgainstExterior"
    PHANTOM_DIVERGENT_OFFSET = "phantomDivergentOffset"

    @property
    def priority(self) -> int:
        """Rank used to order events tied on offset (lower wins)."""
        return _EVENT_PRIORITY[self]


_EVENT_PRIORITY = {
    EventType.INTERIOR_PAIR: 0,
    EventType.INTERIOR_NON_ADJACENT: 1,
    EventType.INTERIOR_AGAINST_EXTERIOR: 2,
    EventType.PHANTOM_DIVERGENT_OFFSET: 3,
}


class EdgeRank(str, Enum):
    """Edge classification used by the solver."""

    EXTERIOR = "exterior"
    PRIMARY = "primary"
    SECONDARY = "secondary"


@dataclass(frozen=True, slots=True)
class CollisionEvent:
    """A detected intersection between an interior edge and another edge.

    Attributes:
        instigator_id: Interior edge whose ray was tested
        target_id: Interior or exterior edge it collides with
        offset_distance: Wavefront offset at which the collision happens
        position: Collision point
        event_type: Classification of the collision
        intersection_kind: Ray relationship the event was derived from
        instigator_distance: Distance travelled along the instigator ray
        target_distance: Distance travelled along the target ray (0 for exterior)
    """

    instigator_id: int
    target_id: int
    offset_distance: float
    position: Vector2
    event_type: EventType
    intersection_kind: IntersectionKind
    instigator_distance: float = 0.0
    target_distance: float = 0.0

    @property
    def is_phantom(self) -> bool:
        """Check if the event is an artifact rather than a real collision."""
        return self.event_type is EventType.PHANTOM_DIVERGENT_OFFSET

    @property
    def sort_key(self) -> tuple[float, int, int, int]:
        """Total ordering: offset, event priority, instigator id, target id."""
        return (
            self.offset_distance,
            self.event_type.priority,
            self.instigator_id,
            self.target_id,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "instigator": self.instigator_id,
            "target": self.target_id,
            "offsetDistance": self.offset_distance,
            "position": self.position.to_dict(),
            "eventType": self.event_type.value,
            "intersectionKind": self.intersection_kind.value,
        }


@dataclass(frozen=True, slots=True)
class ProposedBisection:
    """A bisector produced by a resolved collision, not yet in the graph.

    Attributes:
        clockwise_exterior_edge_index: Clockwise parent of the new bisector
        widdershins_exterior_edge_index: Widdershins parent of the new bisector
        source: Node the bisector will leave from
        from_split: True when the resolving collision split the wavefront
    """

    clockwise_exterior_edge_index: int
    widdershins_exterior_edge_index: int
    source: int
    from_split: bool = False

    @property
    def span(self) -> tuple[int, int]:
        """Clockwise start and widdershins end of the region this bisector opens."""
        return (self.clockwise_exterior_edge_index, self.widdershins_exterior_edge_index)

    def span_size(self, num_exterior: int) -> int:
        """Number of exterior edges the span advances clockwise, modulo num_exterior."""
        return (
            self.widdershins_exterior_edge_index - self.clockwise_exterior_edge_index
        ) % num_exterior
