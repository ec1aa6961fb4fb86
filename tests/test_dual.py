"""Tests for dual tile construction."""

from __future__ import annotations

import pytest

from polysphere.algorithms import build_tile_adjacency
from polysphere.dual import (
    build_tile,
    build_tiles,
    incident_faces,
    is_outward,
    order_faces_around,
)
from polysphere.errors import DegenerateGeometryError, InvariantViolationError
from polysphere.geometry import magnitude, normalize
from polysphere.icosahedron import icosahedron
from polysphere.projection import corner_points, project_vertices
from polysphere.subdivision import subdivide


def _mesh(resolution: int, radius: float = 1.0):
    flat, faces = subdivide(*icosahedron(), resolution)
    vertices = project_vertices(flat, radius)
    corners = corner_points(vertices, faces, radius)
    return vertices, faces, corners


# ═══════════════════════════════════════════════════════════════════
# Angular ordering
# ═══════════════════════════════════════════════════════════════════

class TestOrderFacesAround:
    CENTER = (0.0, 0.0, 1.0)

    def test_counter_clockwise_from_outside(self):
        corners = [(1.0, 0.0, 1.0), (-1.0, 0.0, 1.0), (0.0, 1.0, 1.0), (0.0, -1.0, 1.0)]
        # +x, then +y, then -x, then -y
        assert order_faces_around(0, self.CENTER, [0, 1, 2, 3], corners) == [3, 0, 2, 1]

    def test_independent_of_input_order(self):
        corners = [(1.0, 0.0, 1.0), (-1.0, 0.0, 1.0), (0.0, 1.0, 1.0), (0.0, -1.0, 1.0)]
        a = order_faces_around(0, self.CENTER, [0, 1, 2, 3], corners)
        b = order_faces_around(0, self.CENTER, [2, 3, 1, 0], corners)
        # Same cyclic sequence, possibly rotated
        start = b.index(a[0])
        assert b[start:] + b[:start] == a

    def test_too_few_faces(self):
        corners = [(1.0, 0.0, 1.0), (0.0, 1.0, 1.0)]
        with pytest.raises(InvariantViolationError) as info:
            order_faces_around(7, self.CENTER, [0, 1], corners)
        assert info.value.index == 7

    def test_tied_angles(self):
        corners = [(1.0, 0.0, 1.0), (2.0, 0.0, 1.0), (0.0, 1.0, 1.0)]
        with pytest.raises(InvariantViolationError) as info:
            order_faces_around(4, self.CENTER, [0, 1, 2], corners)
        assert info.value.index == 4
        assert "same angle" in str(info.value)

    def test_corner_on_normal(self):
        corners = [(1.0, 0.0, 1.0), (0.0, 0.0, 2.0), (0.0, 1.0, 1.0)]
        with pytest.raises(DegenerateGeometryError):
            order_faces_around(0, self.CENTER, [0, 1, 2], corners)

    def test_tiny_scale(self):
        s = 1e-20
        corners = [(s, 0.0, s), (-s, 0.0, s), (0.0, s, s), (0.0, -s, s)]
        assert order_faces_around(0, (0.0, 0.0, s), [0, 1, 2, 3], corners) == [3, 0, 2, 1]


class TestIsOutward:
    SQUARE = [(1.0, 0.0, 1.0), (0.0, 1.0, 1.0), (-1.0, 0.0, 1.0), (0.0, -1.0, 1.0)]

    def test_counter_clockwise(self):
        assert is_outward(self.SQUARE, (0.0, 0.0, 1.0))

    def test_reversed(self):
        assert not is_outward(self.SQUARE[::-1], (0.0, 0.0, 1.0))


# ═══════════════════════════════════════════════════════════════════
# Tiles
# ═══════════════════════════════════════════════════════════════════

class TestBuildTile:
    def test_incident_faces(self):
        _, faces, _ = _mesh(1)
        incident = incident_faces(faces, 42)
        assert len(incident) == 42
        assert all(len(ids) == 5 for ids in incident[:12])
        assert all(len(ids) == 6 for ids in incident[12:])
        for vid, ids in enumerate(incident):
            for fid in ids:
                assert vid in faces[fid].vertex_ids

    def test_pentagon_from_base_corner(self):
        vertices, faces, corners = _mesh(0)
        incident = incident_faces(faces, len(vertices))
        tile = build_tile(0, vertices, incident, corners, 1.0)
        assert tile.id == 0
        assert tile.arity == 5
        assert sorted(tile.corner_ids) == sorted(incident[0])
        assert tile.boundary == tuple(corners[c] for c in tile.corner_ids)
        assert is_outward(tile.boundary, normalize(tile.center))

    def test_scaled_tile_on_sphere(self):
        vertices, faces, corners = _mesh(1, radius=2.0)
        incident = incident_faces(faces, len(vertices))
        tile = build_tile(20, vertices, incident, corners, 2.0, tile_scale=0.5)
        assert tile.arity == 6
        for p in tile.boundary:
            assert magnitude(p) == pytest.approx(2.0)
        assert is_outward(tile.boundary, normalize(tile.center))

    @pytest.mark.parametrize("resolution", [0, 1, 3])
    def test_build_tiles(self, resolution):
        vertices, faces, corners = _mesh(resolution)
        adjacency = build_tile_adjacency(faces, len(vertices))
        tiles = build_tiles(vertices, faces, corners, adjacency, 1.0)
        assert [t.id for t in tiles] == list(range(len(vertices)))
        assert sum(1 for t in tiles if t.is_pentagon()) == 12
        for tile in tiles:
            assert tile.arity in (5, 6)
            assert tile.neighbor_ids == adjacency[tile.id]
            assert tile.center == vertices[tile.id]

    def test_workers_match_serial(self):
        vertices, faces, corners = _mesh(2)
        adjacency = build_tile_adjacency(faces, len(vertices))
        serial = build_tiles(vertices, faces, corners, adjacency, 1.0, tile_scale=0.8)
        threaded = build_tiles(vertices, faces, corners, adjacency, 1.0, tile_scale=0.8, workers=4)
        assert serial == threaded
