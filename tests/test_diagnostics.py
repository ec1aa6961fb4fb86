"""Tests for diagnostics module."""

import json

import pytest

from polysphere.diagnostics import diagnostics_report, radius_deviation, validate_polyhedron
from polysphere.models import Tile
from polysphere.polyhedron import Polyhedron, build_polyhedron


def _replace_tile(poly, tile_id, tile):
    tiles = list(poly.tiles)
    tiles[tile_id] = tile
    return Polyhedron(poly.config, poly.vertices, poly.faces, poly.corners, tiles)


@pytest.mark.parametrize("resolution", [0, 1, 3])
def test_validate_healthy(resolution):
    poly = build_polyhedron(resolution, radius=6.5)
    assert validate_polyhedron(poly) == []
    assert poly.validate() == []


def test_validate_scaled_tiles():
    assert build_polyhedron(2, tile_scale=0.6).validate() == []


def test_detects_reversed_boundary():
    poly = build_polyhedron(1)
    t = poly[20]
    broken = _replace_tile(
        poly, 20,
        Tile(t.id, t.center, t.boundary[::-1], t.corner_ids[::-1], t.neighbor_ids),
    )
    errors = validate_polyhedron(broken)
    assert any("wound inward" in e for e in errors)


def test_detects_asymmetric_neighbor():
    poly = build_polyhedron(1)
    t = poly[0]
    far = [n for n in range(12, 42) if n not in t.neighbor_ids][0]
    broken = _replace_tile(
        poly, 0,
        Tile(t.id, t.center, t.boundary, t.corner_ids, t.neighbor_ids[:-1] + (far,)),
    )
    errors = validate_polyhedron(broken)
    assert any("not symmetric" in e for e in errors)


def test_detects_point_off_sphere():
    poly = build_polyhedron(1)
    t = poly[5]
    moved = tuple(c * 1.01 for c in t.boundary[0])
    broken = _replace_tile(
        poly, 5,
        Tile(t.id, t.center, (moved,) + t.boundary[1:], t.corner_ids, t.neighbor_ids),
    )
    assert any("off the sphere" in e for e in validate_polyhedron(broken))
    assert radius_deviation(broken) == pytest.approx(0.01)


def test_detects_wrong_arity():
    poly = build_polyhedron(1)
    t = poly[30]
    broken = _replace_tile(
        poly, 30,
        Tile(t.id, t.center, t.boundary[:4], t.corner_ids[:4], t.neighbor_ids[:4]),
    )
    errors = validate_polyhedron(broken)
    assert any("4 boundary points" in e for e in errors)


def test_radius_deviation_small():
    poly = build_polyhedron(3, radius=100.0)
    assert radius_deviation(poly) < 1e-9


def test_diagnostics_report():
    poly = build_polyhedron(2, radius=3.0, tile_scale=0.9)
    report = diagnostics_report(poly)
    assert report["passed"] is True
    assert report["errors"] == []
    assert report["tile_count"] == 92
    assert report["pentagon_count"] == 12
    assert report["hexagon_count"] == 80
    assert report["vertex_count"] == 92
    assert report["face_count"] == 180
    assert report["hexagon_stats"]["hexagon_count"] == 80
    assert report["radius"] == 3.0
    # Plain data only
    json.dumps(report)


def test_diagnostics_report_flags_errors():
    poly = build_polyhedron(0)
    t = poly[0]
    broken = _replace_tile(
        poly, 0, Tile(t.id, t.center, t.boundary[::-1], t.corner_ids, t.neighbor_ids),
    )
    report = diagnostics_report(broken)
    assert report["passed"] is False
    assert report["errors"]
