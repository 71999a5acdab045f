"""Unit tests for the polygon I/O layer.

Tests for PolygonReader, SkeletonWriter, and vertex helpers.
"""

import json
from pathlib import Path

import pytest

from skeletonizer.core import compute_straight_skeleton
from skeletonizer.domain import Vector2
from skeletonizer.exceptions import PolygonFormatError, PolygonLoadError
from skeletonizer.io import (
    PolygonReader,
    SkeletonWriter,
    ensure_clockwise,
    parse_vertices,
    read_polygon,
)
from polygons import SQUARE

CCW_SQUARE = [[0, 0], [2, 0], [2, 2], [0, 2]]


def write_json(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestParseVertices:
    """Tests for parse_vertices."""

    def test_pairs(self):
        """Test a list of [x, y] pairs."""
        assert parse_vertices([[0, 0], [1, 2.5]]) == [Vector2(0.0, 0.0), Vector2(1.0, 2.5)]

    def test_objects(self):
        """Test a list of x/y objects."""
        assert parse_vertices([{"x": 1, "y": 2}]) == [Vector2(1.0, 2.0)]

    def test_wrapped(self):
        """Test an object holding a vertices key."""
        assert parse_vertices({"vertices": [[3, 4]]}) == [Vector2(3.0, 4.0)]

    def test_coordinates_are_floats(self):
        """Test integer coordinates are converted."""
        vertex = parse_vertices([[1, 2]])[0]
        assert isinstance(vertex.x, float)

    def test_missing_vertices_key(self):
        """Test an object without vertices is rejected."""
        with pytest.raises(PolygonFormatError, match="no 'vertices' key"):
            parse_vertices({"points": []})

    def test_not_a_list(self):
        """Test a scalar document is rejected."""
        with pytest.raises(PolygonFormatError, match="expected a list"):
            parse_vertices(42)

    def test_bad_pair(self):
        """Test a triple is rejected."""
        with pytest.raises(PolygonFormatError, match="vertex 1"):
            parse_vertices([[0, 0], [1, 2, 3]])

    def test_missing_coordinate(self):
        """Test an object without y is rejected."""
        with pytest.raises(PolygonFormatError, match="missing"):
            parse_vertices([{"x": 1}])

    def test_non_numeric(self):
        """Test strings and booleans are not coordinates."""
        with pytest.raises(PolygonFormatError, match="non-numeric"):
            parse_vertices([["a", 1]])
        with pytest.raises(PolygonFormatError, match="non-numeric"):
            parse_vertices([[True, 1]])

    def test_error_names_source(self):
        """Test the source name appears in the message."""
        with pytest.raises(PolygonFormatError, match="house.json"):
            parse_vertices(None, source="house.json")


class TestEnsureClockwise:
    """Tests for ensure_clockwise."""

    def test_clockwise_unchanged(self):
        """Test clockwise input is returned as is."""
        assert ensure_clockwise(SQUARE) == SQUARE

    def test_counter_clockwise_reversed(self):
        """Test counter-clockwise input is reversed."""
        ccw = parse_vertices(CCW_SQUARE)
        assert ensure_clockwise(ccw) == list(reversed(ccw))

    def test_returns_copy(self):
        """Test the input list is not mutated."""
        vertices = list(SQUARE)
        result = ensure_clockwise(vertices)
        result.pop()
        assert len(vertices) == 4


class TestPolygonReader:
    """Tests for PolygonReader class."""

    def test_load_nonexistent_file(self):
        """Test loading a nonexistent file raises FileNotFoundError."""
        reader = PolygonReader(Path("nonexistent.json"))
        with pytest.raises(FileNotFoundError):
            reader.load()

    def test_vertices_before_load(self):
        """Test accessing vertices before loading raises RuntimeError."""
        reader = PolygonReader(Path("polygon.json"))
        with pytest.raises(RuntimeError, match="Polygon not loaded"):
            _ = reader.vertices

    def test_vertex_count_before_load(self):
        """Test accessing vertex_count before loading raises RuntimeError."""
        reader = PolygonReader(Path("polygon.json"))
        with pytest.raises(RuntimeError, match="Polygon not loaded"):
            _ = reader.vertex_count

    def test_load(self, tmp_path):
        """Test loading a valid polygon file."""
        path = write_json(tmp_path / "square.json", CCW_SQUARE)
        reader = PolygonReader(path)
        reader.load()
        assert reader.vertex_count == 4
        assert reader.vertices[1] == Vector2(2.0, 0.0)
        assert not reader.is_clockwise

    def test_invalid_json(self, tmp_path):
        """Test malformed JSON raises PolygonLoadError."""
        path = tmp_path / "broken.json"
        path.write_text("[[0, 0], ", encoding="utf-8")
        with pytest.raises(PolygonLoadError):
            PolygonReader(path).load()

    def test_invalid_format(self, tmp_path):
        """Test well-formed JSON of the wrong shape raises PolygonFormatError."""
        path = write_json(tmp_path / "shape.json", {"edges": []})
        with pytest.raises(PolygonFormatError):
            PolygonReader(path).load()

    def test_read_polygon_normalizes_winding(self, tmp_path):
        """Test read_polygon returns clockwise vertices."""
        path = write_json(tmp_path / "square.json", {"vertices": CCW_SQUARE})
        vertices = read_polygon(path)
        assert vertices[0] == Vector2(0.0, 2.0)


class TestSkeletonWriter:
    """Tests for SkeletonWriter class."""

    def test_get_skeleton_path(self):
        """Test output path naming convention."""
        assert SkeletonWriter.get_skeleton_path(Path("house.json")) == Path("house-skeleton.json")
        assert SkeletonWriter.get_skeleton_path(Path("polygons/L-shape.txt")) == Path(
            "polygons/L-shape-skeleton.json"
        )

    def test_output_path(self):
        """Test output_path property."""
        writer = SkeletonWriter(Path("out.json"))
        assert writer.output_path == Path("out.json")

    def test_save_and_load(self, tmp_path):
        """Test a saved graph reads back unchanged."""
        graph = compute_straight_skeleton(SQUARE).unwrap()
        path = tmp_path / "square-skeleton.json"
        SkeletonWriter(path).save(graph)

        assert SkeletonWriter.load(path).to_dict() == graph.to_dict()

    def test_save_metadata(self, tmp_path):
        """Test metadata is stored under its own key."""
        graph = compute_straight_skeleton(SQUARE).unwrap()
        path = tmp_path / "square-skeleton.json"
        SkeletonWriter(path).save(graph, metadata={"complete": False})

        document = json.loads(path.read_text(encoding="utf-8"))
        assert document["metadata"] == {"complete": False}
        assert document["numExteriorNodes"] == 4

    def test_compact_output(self, tmp_path):
        """Test indent=None writes a single line."""
        graph = compute_straight_skeleton(SQUARE).unwrap()
        path = tmp_path / "square-skeleton.json"
        SkeletonWriter(path, indent=None).save(graph)
        assert path.read_text(encoding="utf-8").count("\n") == 1
