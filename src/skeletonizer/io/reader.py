"""Polygon reader for loading vertex lists from JSON files.

Three shapes are accepted:

    [[x, y], ...]
    [{"x": x, "y": y}, ...]
    {"vertices": <either of the above>}
"""

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from skeletonizer.core.geometry import signed_area
from skeletonizer.domain import Vector2
from skeletonizer.exceptions import PolygonFormatError, PolygonLoadError


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def parse_vertices(data: Any, source: str = "<data>") -> list[Vector2]:
    """Convert decoded JSON into a vertex list.

    Args:
        data: Decoded JSON document
        source: Name used in error messages

    Returns:
        Vertices in file order

    Raises:
        PolygonFormatError: If the document is not a recognised vertex list
    """
    if isinstance(data, dict):
        if "vertices" not in data:
            raise PolygonFormatError(source, "object has no 'vertices' key")
        data = data["vertices"]

    if not isinstance(data, list):
        raise PolygonFormatError(source, f"expected a list of vertices, got {type(data).__name__}")

    vertices = []
    for index, item in enumerate(data):
        if isinstance(item, dict):
            try:
                x, y = item["x"], item["y"]
            except KeyError as e:
                raise PolygonFormatError(source, f"vertex {index} is missing {e}") from e
        elif isinstance(item, list | tuple) and len(item) == 2:
            x, y = item
        else:
            raise PolygonFormatError(source, f"vertex {index} is not a pair or an x/y object")

        if not (_is_number(x) and _is_number(y)):
            raise PolygonFormatError(source, f"vertex {index} has non-numeric coordinates")
        vertices.append(Vector2(float(x), float(y)))

    return vertices


def ensure_clockwise(vertices: Sequence[Vector2]) -> list[Vector2]:
    """Return the vertices in clockwise order.

    Counter-clockwise input (positive signed area) is reversed; clockwise and
    degenerate input is returned unchanged.

    Examples:
        >>> ccw = [Vector2(0, 0), Vector2(2, 0), Vector2(2, 2), Vector2(0, 2)]
        >>> ensure_clockwise(ccw)[1]
        Vector2(x=0, y=2)
    """
    if signed_area(vertices) > 0:
        return list(reversed(vertices))
    return list(vertices)


class PolygonReader:
    """Loads polygon vertex lists from JSON files.

    Example:
        reader = PolygonReader(Path("polygon.json"))
        reader.load()
        print(reader.vertex_count)
    """

    def __init__(self, polygon_path: Path) -> None:
        """Initialize the polygon reader.

        Args:
            polygon_path: Path to the JSON polygon file
        """
        self._polygon_path = polygon_path
        self._vertices: list[Vector2] | None = None

    def load(self) -> None:
        """Load and parse the polygon file.

        Raises:
            FileNotFoundError: If the polygon file does not exist
            PolygonLoadError: If the file cannot be read or is not valid JSON
            PolygonFormatError: If the JSON is not a recognised vertex list
        """
        if not self._polygon_path.exists():
            raise FileNotFoundError(f"Polygon file not found: {self._polygon_path}")

        try:
            data = json.loads(self._polygon_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise PolygonLoadError(str(self._polygon_path), str(e)) from e

        self._vertices = parse_vertices(data, str(self._polygon_path))

    @property
    def vertices(self) -> list[Vector2]:
        """Return the vertices in file order.

        Raises:
            RuntimeError: If the polygon has not been loaded yet
        """
        if self._vertices is None:
            raise RuntimeError("Polygon not loaded. Call load() first.")
        return list(self._vertices)

    @property
    def vertex_count(self) -> int:
        """Return the number of vertices.

        Raises:
            RuntimeError: If the polygon has not been loaded yet
        """
        if self._vertices is None:
            raise RuntimeError("Polygon not loaded. Call load() first.")
        return len(self._vertices)

    @property
    def is_clockwise(self) -> bool:
        """Check if the vertices are in clockwise order."""
        return signed_area(self.vertices) <= 0


def read_polygon(path: Path) -> list[Vector2]:
    """Load a polygon file and return its vertices in clockwise order."""
    reader = PolygonReader(path)
    reader.load()
    return ensure_clockwise(reader.vertices)
