"""Polygon and skeleton I/O layer for skeletonizer.

This module handles reading polygon vertex lists and writing solved graphs.
It keeps file formats out of the solver, which only sees vertex lists and
returns graphs.

Key responsibilities:
- Load JSON vertex lists in the supported shapes
- Normalize winding to clockwise
- Write graphs as JSON with the skeleton naming convention

Key classes:
- PolygonReader: Load polygons and expose their vertices
- SkeletonWriter: Save solved graphs
"""

from skeletonizer.io.reader import PolygonReader, ensure_clockwise, parse_vertices, read_polygon
from skeletonizer.io.writer import SkeletonWriter

__all__ = [
    "PolygonReader",
    "SkeletonWriter",
    "ensure_clockwise",
    "parse_vertices",
    "read_polygon",
]
