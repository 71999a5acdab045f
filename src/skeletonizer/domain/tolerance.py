"""Floating point tolerance policy.

Every geometric predicate in the solver compares through a single
Tolerance instance so the epsilon can be tuned per input in one place.
"""

from dataclasses import dataclass

from skeletonizer.domain.vector import Vector2

FLOATING_POINT_EPSILON = 1e-8


@dataclass(frozen=True, slots=True)
class Tolerance:
    """Absolute-epsilon comparison policy.

    Attributes:
        epsilon: Largest difference still treated as equality
    """

    epsilon: float = FLOATING_POINT_EPSILON

    def equal(self, a: float, b: float) -> bool:
        """Return True when two scalars are within epsilon."""
        return abs(a - b) <= self.epsilon

    def is_zero(self, value: float) -> bool:
        """Return True when a scalar is within epsilon of zero."""
        return abs(value) <= self.epsilon

    def is_positive(self, value: float) -> bool:
        """Return True when a scalar is strictly greater than epsilon."""
        return value > self.epsilon

    def vectors_equal(self, a: Vector2, b: Vector2) -> bool:
        """Return True when both components are within epsilon."""
        return self.equal(a.x, b.x) and self.equal(a.y, b.y)

    def is_zero_vector(self, v: Vector2) -> bool:
        """Return True when both components are within epsilon of zero."""
        return self.is_zero(v.x) and self.is_zero(v.y)


DEFAULT_TOLERANCE = Tolerance()
