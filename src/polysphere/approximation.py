"""Regular-polygon approximation of tiles.

Tiles of a geodesic tiling are slightly irregular.  Renderers and
simulations that prefer one idealised hexagon (or pentagon) per tile
need, for every tile, a local frame to place it with and a size:

- :func:`tile_frame`: orthonormal ``(normal, right, forward)`` at the
  tile centre, *right* pointing at the first boundary point.
- :func:`hexagon_stats`: size distribution over hexagons only; the
  twelve pentagons are left out.
- :func:`regular_polygon` / :func:`regular_approximations`: the
  substitute polygons themselves.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .geometry import Vec3, add, cross, dot, normalize, scale, sub
from .models import Tile
from .workers import map_indexed


# ═══════════════════════════════════════════════════════════════════
# Orientation frames
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TileFrame:
    """Local right-handed frame anchored at a tile centre.

    ``forward = normal × right``; viewed from outside the sphere, the
    rotation from *right* to *forward* is counter-clockwise.
    """

    origin: Vec3
    normal: Vec3
    right: Vec3
    forward: Vec3

    def rotation_matrix(self) -> np.ndarray:
        """3×3 local → world rotation with columns ``right, forward, normal``.

        Local X/Y span the tangent plane and local Z points outward.
        """
        return np.column_stack([self.right, self.forward, self.normal]).astype(float)

    def transform_matrix(self) -> np.ndarray:
        """4×4 homogeneous local → world transform translating to *origin*."""
        m = np.identity(4)
        m[:3, :3] = self.rotation_matrix()
        m[:3, 3] = self.origin
        return m

    def to_world(self, u: float, v: float) -> Vec3:
        """Point at tangent-plane offsets *u* (along right), *v* (along forward)."""
        return add(self.origin, add(scale(self.right, u), scale(self.forward, v)))


def tile_frame(tile: Tile) -> TileFrame:
    """Orientation frame of *tile*.

    *right* is the direction to ``boundary[0]`` with its normal
    component removed, so the triple is orthonormal.
    """
    normal = normalize(tile.center)
    offset = sub(tile.boundary[0], tile.center)
    right = normalize(sub(offset, scale(normal, dot(offset, normal))))
    forward = cross(normal, right)
    return TileFrame(origin=tile.center, normal=normal, right=right, forward=forward)


# ═══════════════════════════════════════════════════════════════════
# Statistics
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class HexagonStats:
    """Size distribution of the hexagonal tiles of a polyhedron.

    All size fields are 0.0 when there are no hexagons (resolution 0).
    Standard deviations are population standard deviations.
    """

    hexagon_count: int
    pentagon_count: int
    mean_radius: float
    radius_std: float
    min_radius: float
    max_radius: float
    mean_edge_length: float
    edge_length_std: float
    min_edge_length: float
    max_edge_length: float
    mean_area: float

    @property
    def uniform_radius(self) -> float:
        """Single radius to use for every substitute hexagon."""
        return self.mean_radius

    @property
    def radius_variation(self) -> float:
        """Coefficient of variation of the hexagon radius."""
        return self.radius_std / self.mean_radius if self.mean_radius else 0.0


def tile_measurements(tiles: Sequence[Tile], workers: Optional[int] = None) -> np.ndarray:
    """``(len(tiles), 3)`` array of average radius, average edge length, area."""

    def _measure(i: int) -> Tuple[float, float, float]:
        tile = tiles[i]
        return (tile.average_radius(), tile.average_edge_length(), tile.area())

    rows = map_indexed(_measure, len(tiles), workers)
    return np.asarray(rows, dtype=float).reshape(len(tiles), 3)


def hexagon_stats(tiles: Sequence[Tile], workers: Optional[int] = None) -> HexagonStats:
    """Aggregate radius / edge-length / area statistics over hexagons only."""
    hexagons = [t for t in tiles if t.is_hexagon()]
    pentagon_count = sum(1 for t in tiles if t.is_pentagon())

    if not hexagons:
        return HexagonStats(
            hexagon_count=0,
            pentagon_count=pentagon_count,
            mean_radius=0.0,
            radius_std=0.0,
            min_radius=0.0,
            max_radius=0.0,
            mean_edge_length=0.0,
            edge_length_std=0.0,
            min_edge_length=0.0,
            max_edge_length=0.0,
            mean_area=0.0,
        )

    m = tile_measurements(hexagons, workers)
    radii, edges, areas = m[:, 0], m[:, 1], m[:, 2]
    return HexagonStats(
        hexagon_count=len(hexagons),
        pentagon_count=pentagon_count,
        mean_radius=float(radii.mean()),
        radius_std=float(radii.std()),
        min_radius=float(radii.min()),
        max_radius=float(radii.max()),
        mean_edge_length=float(edges.mean()),
        edge_length_std=float(edges.std()),
        min_edge_length=float(edges.min()),
        max_edge_length=float(edges.max()),
        mean_area=float(areas.mean()),
    )


# ═══════════════════════════════════════════════════════════════════
# Regular polygons
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RegularPolygon:
    """Idealised polygon standing in for one tile."""

    tile_id: int
    center: Vec3
    radius: float
    sides: int
    frame: TileFrame

    def vertices(self) -> Tuple[Vec3, ...]:
        """Corners in the tangent plane, the first one along ``frame.right``.

        Wound counter-clockwise seen from outside, like the tiles.
        """
        step = 2.0 * math.pi / self.sides
        return tuple(
            self.frame.to_world(self.radius * math.cos(k * step), self.radius * math.sin(k * step))
            for k in range(self.sides)
        )


def regular_polygon(tile: Tile, radius: Optional[float] = None) -> RegularPolygon:
    """Regular polygon matching *tile*'s centre, arity and orientation.

    *radius* defaults to the tile's own average radius.
    """
    return RegularPolygon(
        tile_id=tile.id,
        center=tile.center,
        radius=tile.average_radius() if radius is None else radius,
        sides=tile.arity,
        frame=tile_frame(tile),
    )


def regular_approximations(tiles: Sequence[Tile], uniform: bool = False) -> List[RegularPolygon]:
    """Substitute hexagons for every hexagonal tile, in tile order.

    With *uniform* every hexagon gets the hexagon mean radius instead of
    its tile's own radius.
    """
    radius = hexagon_stats(tiles).uniform_radius if uniform else None
    return [regular_polygon(t, radius) for t in tiles if t.is_hexagon()]
