"""Two-dimensional vector value type.

Vector2 doubles as a point and as a direction. Arithmetic lives in
``skeletonizer.core.geometry`` so the domain layer stays free of numerics.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Vector2:
    """A real-valued 2D point or direction.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Vector2":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Vector2 instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))


ZERO = Vector2(0.0, 0.0)
