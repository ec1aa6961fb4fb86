from __future__ import annotations

import math
from dataclasses import asdict
from typing import TYPE_CHECKING, Dict, List

from .dual import is_outward
from .geometry import magnitude, normalize

if TYPE_CHECKING:
    from .polyhedron import Polyhedron


def validate_polyhedron(poly: "Polyhedron", rel_tol: float = 1e-9) -> List[str]:
    """Return a list of human-readable invariant violations.

    Checks tile count, arity, pentagon count, neighbour count and
    symmetry, outward winding, corner ids and sphere distance.
    """
    from .polyhedron import PENTAGON_COUNT, tile_count

    errors: List[str] = []
    tiles = poly.tiles

    expected = tile_count(poly.resolution)
    if len(tiles) != expected:
        errors.append(f"Polyhedron has {len(tiles)} tiles, expected {expected}")

    pentagons = sum(1 for t in tiles if t.is_pentagon())
    if pentagons != PENTAGON_COUNT:
        errors.append(f"Polyhedron has {pentagons} pentagons, expected {PENTAGON_COUNT}")

    for idx, tile in enumerate(tiles):
        if tile.id != idx:
            errors.append(f"Tile at position {idx} has id {tile.id}")
        if tile.arity not in (5, 6):
            errors.append(f"Tile {tile.id} has {tile.arity} boundary points")
            continue
        if len(tile.neighbor_ids) != tile.arity:
            errors.append(
                f"Tile {tile.id} has {len(tile.neighbor_ids)} neighbours but {tile.arity} sides"
            )
        if len(tile.corner_ids) != tile.arity:
            errors.append(
                f"Tile {tile.id} has {len(tile.corner_ids)} corner ids but {tile.arity} sides"
            )
        for nid in tile.neighbor_ids:
            if not 0 <= nid < len(tiles):
                errors.append(f"Tile {tile.id} references missing neighbour {nid}")
            elif tile.id not in tiles[nid].neighbor_ids:
                errors.append(f"Tile {tile.id} neighbour {nid} is not symmetric")
        if not is_outward(tile.boundary, normalize(tile.center)):
            errors.append(f"Tile {tile.id} boundary is wound inward")
        for point in (tile.center,) + tile.boundary:
            if not math.isclose(magnitude(point), poly.radius, rel_tol=rel_tol):
                errors.append(f"Tile {tile.id} has a point off the sphere")
                break

    return errors


def radius_deviation(poly: "Polyhedron") -> float:
    """Largest ``| |p| - radius |`` over all tile centres and boundary points."""
    worst = 0.0
    for tile in poly.tiles:
        for point in (tile.center,) + tile.boundary:
            worst = max(worst, abs(magnitude(point) - poly.radius))
    return worst


def diagnostics_report(poly: "Polyhedron") -> Dict[str, object]:
    """Build a structured diagnostics report suitable for JSON export."""
    errors = validate_polyhedron(poly)
    return {
        "radius": poly.radius,
        "resolution": poly.resolution,
        "tile_scale": poly.tile_scale,
        "tile_count": len(poly),
        "pentagon_count": len(poly.pentagons()),
        "hexagon_count": len(poly.hexagons()),
        "vertex_count": len(poly.vertices),
        "face_count": len(poly.faces),
        "hexagon_stats": asdict(poly.hexagon_stats()),
        "max_radius_deviation": radius_deviation(poly),
        "errors": errors,
        "passed": not errors,
    }
