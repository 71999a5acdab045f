"""Skeleton writer for saving solved graphs.

This module provides the SkeletonWriter class for writing straight skeleton
graphs as JSON with the skeleton naming convention.
"""

import json
from pathlib import Path
from typing import Any

from skeletonizer.domain import StraightSkeletonGraph


class SkeletonWriter:
    """Writes straight skeleton graphs as JSON documents.

    Example:
        writer = SkeletonWriter(Path("house-skeleton.json"))
        writer.save(graph)
    """

    def __init__(self, output_path: Path, indent: int | None = 2) -> None:
        """Initialize the skeleton writer.

        Args:
            output_path: Path where the graph will be saved
            indent: JSON indentation (None for compact output)
        """
        self._output_path = output_path
        self._indent = indent

    @property
    def output_path(self) -> Path:
        return self._output_path

    def save(self, graph: StraightSkeletonGraph, metadata: dict[str, Any] | None = None) -> None:
        """Save the graph to the output path.

        Args:
            graph: Graph to write
            metadata: Optional extra keys stored under "metadata"

        Raises:
            OSError: If file cannot be written
        """
        document = graph.to_dict()
        if metadata:
            document["metadata"] = metadata
        self._output_path.write_text(
            json.dumps(document, indent=self._indent) + "\n",
            encoding="utf-8",
        )

    @staticmethod
    def load(path: Path) -> StraightSkeletonGraph:
        """Read a graph previously written by save()."""
        return StraightSkeletonGraph.from_dict(json.loads(path.read_text(encoding="utf-8")))

    @staticmethod
    def get_skeleton_path(input_path: Path) -> Path:
        """Generate output path with skeleton naming convention.

        Converts: house.json -> house-skeleton.json
                  polygons/L-shape.txt -> polygons/L-shape-skeleton.json

        Args:
            input_path: Original polygon file path

        Returns:
            Path with -skeleton suffix and .json extension
        """
        return input_path.parent / f"{input_path.stem}-skeleton.json"
