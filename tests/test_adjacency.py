from __future__ import annotations

import pytest

from polysphere.algorithms import adjacency_map, build_tile_adjacency, ring_tiles, shared_corners
from polysphere.models import Face
from polysphere.polyhedron import build_polyhedron


def test_tile_adjacency_from_faces():
    # Two triangles sharing edge 1–2
    faces = [Face(0, (0, 1, 2)), Face(1, (2, 1, 3))]
    adjacency = build_tile_adjacency(faces, 4)

    assert adjacency[0] == (1, 2)
    assert adjacency[1] == (0, 2, 3)
    assert adjacency[2] == (0, 1, 3)
    assert adjacency[3] == (1, 2)


@pytest.mark.parametrize("resolution", [0, 1, 2])
def test_adjacency_symmetric(resolution):
    poly = build_polyhedron(resolution)
    adjacency = poly.adjacency()
    for tile_id, neighbors in adjacency.items():
        assert len(neighbors) == poly[tile_id].arity
        assert tile_id not in neighbors
        for n in neighbors:
            assert tile_id in adjacency[n]


def test_adjacency_map_matches_tiles():
    poly = build_polyhedron(1)
    mapping = adjacency_map(poly.tiles)
    assert sorted(mapping) == list(range(42))
    assert mapping[0] == list(poly[0].neighbor_ids)
    assert [t.id for t in poly.neighbors(0)] == mapping[0]


def test_neighbors_share_exactly_two_corners():
    poly = build_polyhedron(2)
    for tile in poly:
        for n in tile.neighbor_ids:
            shared = shared_corners(tile, poly[n])
            assert len(shared) == 2
            for cid in shared:
                assert poly.corners[cid] in tile.boundary
                assert poly.corners[cid] in poly[n].boundary


def test_non_neighbors_share_no_corners():
    poly = build_polyhedron(2)
    far = ring_tiles(poly.adjacency(), 0, 2)[2][0]
    assert shared_corners(poly[0], poly[far]) == ()


class TestRingTiles:
    def test_ring_zero(self):
        poly = build_polyhedron(1)
        assert ring_tiles(poly.adjacency(), 5, 0) == {0: [5]}

    def test_pentagon_first_ring(self):
        poly = build_polyhedron(2)
        rings = ring_tiles(poly.adjacency(), 0, 1)
        assert rings[1] == list(poly[0].neighbor_ids)
        assert len(rings[1]) == 5

    def test_rings_cover_sphere(self):
        poly = build_polyhedron(1)
        rings = ring_tiles(poly.adjacency(), 0, 50)
        seen = [tid for ring in rings.values() for tid in ring]
        assert sorted(seen) == list(range(len(poly)))
        # Stops once every tile is reached
        assert max(rings) < 50

    def test_accepts_tuple_adjacency(self):
        poly = build_polyhedron(1)
        table = build_tile_adjacency(poly.faces, len(poly.vertices))
        assert ring_tiles(table, 3, 2) == ring_tiles(poly.adjacency(), 3, 2)

    def test_partial_mapping(self):
        # Tile 2 has no entry and so no neighbours of its own
        adjacency = {0: [1, 2], 1: [0, 3], 3: [1]}
        assert ring_tiles(adjacency, 0, 5) == {0: [0], 1: [1, 2], 2: [3]}
        assert ring_tiles(adjacency, 2, 3) == {0: [2]}

    def test_depth_limit(self):
        poly = build_polyhedron(2)
        rings = ring_tiles(poly.adjacency(), 0, 1)
        assert sorted(rings) == [0, 1]

    def test_negative_depth(self):
        with pytest.raises(ValueError):
            ring_tiles({0: []}, 0, -1)
