"""Goldberg polyhedron builder and container.

Pipeline::

    icosahedron → subdivide → project_vertices → corner_points
                → build_tile_adjacency → build_tiles → invariant checks

Each stage is a pure function of the previous stage's output.  The
result is an immutable :class:`Polyhedron`; anything derived from it
(frames, statistics, approximations, scaled copies) is computed on
request.

Usage
-----
>>> from polysphere import build_polyhedron
>>> poly = build_polyhedron(2, radius=10.0, tile_scale=0.95)
>>> len(poly), len(poly.pentagons())
(92, 12)
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .algorithms import adjacency_map, build_tile_adjacency
from .approximation import (
    HexagonStats,
    RegularPolygon,
    TileFrame,
    hexagon_stats,
    regular_approximations,
    tile_frame,
    tile_measurements,
)
from .dual import build_tiles
from .errors import InvalidParameterError, InvariantViolationError, PolysphereError
from .geometry import Vec3, scale
from .icosahedron import icosahedron
from .models import Face, Tile
from .projection import corner_points, project_vertices
from .subdivision import frequency, subdivide, vertex_count

logger = logging.getLogger(__name__)

PENTAGON_COUNT = 12


# ═══════════════════════════════════════════════════════════════════
# Configuration
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class BuildConfig:
    """All parameters of a polyhedron build.

    Attributes
    ----------
    radius : float
        Radius of the target sphere (> 0).
    resolution : int
        Subdivision level (>= 0).  Each icosahedron edge is split into
        ``resolution + 1`` segments; tile count is
        ``10 * (resolution + 1)**2 + 2``.
    tile_scale : float
        In (0, 1].  1.0 makes neighbouring tiles share corners; smaller
        values shrink every tile toward its centre, leaving gaps.
    workers : int, optional
        Thread count for the per-tile phases.  ``None`` builds serially.
    """

    radius: float = 1.0
    resolution: int = 0
    tile_scale: float = 1.0
    workers: Optional[int] = None

    def validate(self) -> None:
        """Raise :class:`InvalidParameterError` for out-of-range fields."""
        if isinstance(self.radius, bool) or not isinstance(self.radius, (int, float)):
            raise InvalidParameterError(f"radius must be a number, got {self.radius!r}")
        if not (math.isfinite(self.radius) and self.radius > 0):
            raise InvalidParameterError(f"radius must be positive and finite, got {self.radius}")
        if isinstance(self.resolution, bool) or not isinstance(self.resolution, int):
            raise InvalidParameterError(f"resolution must be an integer, got {self.resolution!r}")
        if self.resolution < 0:
            raise InvalidParameterError(f"resolution must be >= 0, got {self.resolution}")
        if isinstance(self.tile_scale, bool) or not isinstance(self.tile_scale, (int, float)):
            raise InvalidParameterError(f"tile_scale must be a number, got {self.tile_scale!r}")
        if not 0.0 < self.tile_scale <= 1.0:
            raise InvalidParameterError(f"tile_scale must be in (0, 1], got {self.tile_scale}")
        if self.workers is not None and (
            isinstance(self.workers, bool) or not isinstance(self.workers, int) or self.workers < 1
        ):
            raise InvalidParameterError(f"workers must be a positive integer, got {self.workers!r}")


# ═══════════════════════════════════════════════════════════════════
# Preset configs
# ═══════════════════════════════════════════════════════════════════

ICOSAHEDRON = BuildConfig(resolution=0)
COARSE = BuildConfig(resolution=2)
MEDIUM = BuildConfig(resolution=8)
FINE = BuildConfig(resolution=24)


def tile_count(resolution: int) -> int:
    """Number of tiles produced at *resolution*."""
    return vertex_count(resolution)


# ═══════════════════════════════════════════════════════════════════
# Container
# ═══════════════════════════════════════════════════════════════════

class Polyhedron:
    """Immutable Goldberg polyhedron: tiles plus the mesh they came from.

    ``tiles[k]`` is the dual of ``vertices[k]``; ``corners[f]`` is the
    lifted centroid of ``faces[f]`` and is shared by the three tiles
    around that face.
    """

    __slots__ = ("_config", "_vertices", "_faces", "_corners", "_tiles")

    def __init__(
        self,
        config: BuildConfig,
        vertices: Sequence[Vec3],
        faces: Sequence[Face],
        corners: Sequence[Vec3],
        tiles: Sequence[Tile],
    ) -> None:
        self._config = config
        self._vertices: Tuple[Vec3, ...] = tuple(vertices)
        self._faces: Tuple[Face, ...] = tuple(faces)
        self._corners: Tuple[Vec3, ...] = tuple(corners)
        self._tiles: Tuple[Tile, ...] = tuple(tiles)

    # ── Properties ──────────────────────────────────────────────────

    @property
    def config(self) -> BuildConfig:
        return self._config

    @property
    def radius(self) -> float:
        return self._config.radius

    @property
    def resolution(self) -> int:
        return self._config.resolution

    @property
    def frequency(self) -> int:
        """Segments per icosahedron edge (``resolution + 1``)."""
        return frequency(self._config.resolution)

    @property
    def tile_scale(self) -> float:
        return self._config.tile_scale

    @property
    def vertices(self) -> Tuple[Vec3, ...]:
        """Projected geodesic mesh vertices (tile centres)."""
        return self._vertices

    @property
    def faces(self) -> Tuple[Face, ...]:
        return self._faces

    @property
    def corners(self) -> Tuple[Vec3, ...]:
        """Deduplicated full-size tile corners, indexed by face id."""
        return self._corners

    @property
    def tiles(self) -> Tuple[Tile, ...]:
        return self._tiles

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles)

    def __getitem__(self, tile_id: int) -> Tile:
        return self._tiles[tile_id]

    def __repr__(self) -> str:
        return (
            f"Polyhedron(radius={self.radius}, resolution={self.resolution}, "
            f"tile_scale={self.tile_scale}, tiles={len(self._tiles)})"
        )

    # ── Tile queries ────────────────────────────────────────────────

    def pentagons(self) -> List[Tile]:
        return [t for t in self._tiles if t.is_pentagon()]

    def hexagons(self) -> List[Tile]:
        return [t for t in self._tiles if t.is_hexagon()]

    def neighbors(self, tile_id: int) -> List[Tile]:
        return [self._tiles[n] for n in self._tiles[tile_id].neighbor_ids]

    def adjacency(self) -> Dict[int, List[int]]:
        return adjacency_map(self._tiles)

    # ── Approximation ───────────────────────────────────────────────

    def frames(self) -> List[TileFrame]:
        """Orientation frame of every tile, in tile order."""
        return [tile_frame(t) for t in self._tiles]

    def measurements(self, workers: Optional[int] = None) -> np.ndarray:
        """Per-tile ``(radius, edge length, area)`` rows, in tile order."""
        return tile_measurements(self._tiles, workers if workers is not None else self._config.workers)

    def hexagon_stats(self) -> HexagonStats:
        return hexagon_stats(self._tiles, self._config.workers)

    def uniform_radius(self) -> float:
        """Mean hexagon radius: one size for every substitute hexagon."""
        return self.hexagon_stats().uniform_radius

    def regular_approximations(self, uniform: bool = False) -> List[RegularPolygon]:
        return regular_approximations(self._tiles, uniform=uniform)

    # ── Derived polyhedra / export ──────────────────────────────────

    def scaled(self, radius: float) -> "Polyhedron":
        """Same tiling on a sphere of *radius* (e.g. an inner shell).

        Tile ids, neighbours and corner ids carry over unchanged, so
        ``self[k]`` and ``self.scaled(r)[k]`` correspond.
        """
        config = BuildConfig(
            radius=radius,
            resolution=self.resolution,
            tile_scale=self.tile_scale,
            workers=self._config.workers,
        )
        config.validate()
        ratio = radius / self.radius

        def _s(points: Sequence[Vec3]) -> Tuple[Vec3, ...]:
            return tuple(scale(p, ratio) for p in points)

        tiles = [
            Tile(
                id=t.id,
                center=scale(t.center, ratio),
                boundary=_s(t.boundary),
                corner_ids=t.corner_ids,
                neighbor_ids=t.neighbor_ids,
            )
            for t in self._tiles
        ]
        return Polyhedron(config, _s(self._vertices), self._faces, _s(self._corners), tiles)

    def to_mesh(self) -> Tuple[np.ndarray, Tuple[Tuple[int, ...], ...]]:
        """Return ``(points, polygons)`` for a shared-vertex mesh writer.

        *points* is an ``(N, 3)`` float array; each polygon is a tuple of
        row indices in boundary order.  At ``tile_scale == 1`` the points
        are :attr:`corners` and polygons reuse them; otherwise tiles no
        longer touch and every tile gets its own points.
        """
        if self.tile_scale == 1.0:
            points = np.asarray(self._corners, dtype=float).reshape(-1, 3)
            return points, tuple(t.corner_ids for t in self._tiles)

        rows: List[Vec3] = []
        polygons: List[Tuple[int, ...]] = []
        for t in self._tiles:
            start = len(rows)
            rows.extend(t.boundary)
            polygons.append(tuple(range(start, start + t.arity)))
        return np.asarray(rows, dtype=float).reshape(-1, 3), tuple(polygons)

    def validate(self, rel_tol: float = 1e-9) -> List[str]:
        """Structural / geometric checks; an empty list means healthy."""
        from .diagnostics import validate_polyhedron
        return validate_polyhedron(self, rel_tol=rel_tol)


# ═══════════════════════════════════════════════════════════════════
# Builder
# ═══════════════════════════════════════════════════════════════════

def build_polyhedron(
    resolution: int = 0,
    *,
    radius: float = 1.0,
    tile_scale: float = 1.0,
    workers: Optional[int] = None,
) -> Polyhedron:
    """Build a :class:`Polyhedron` at *resolution* on a sphere of *radius*.

    Parameters
    ----------
    resolution : int
        Subdivision level (>= 0).  0 → 12 tiles, 1 → 42, 2 → 92.
    radius : float
        Sphere radius (> 0).
    tile_scale : float
        Tile shrink factor in (0, 1].
    workers : int, optional
        Threads for the per-tile phases.

    Raises
    ------
    InvalidParameterError
        Before any geometry work, for out-of-range parameters.
    DegenerateGeometryError, InvariantViolationError
        If construction fails; no partial polyhedron is returned.
    """
    return build_polyhedron_from_config(
        BuildConfig(radius=radius, resolution=resolution, tile_scale=tile_scale, workers=workers)
    )


def build_polyhedron_from_config(config: BuildConfig) -> Polyhedron:
    """Build a :class:`Polyhedron` from a :class:`BuildConfig`."""
    config.validate()
    started = time.perf_counter()
    try:
        base_vertices, base_faces = icosahedron()
        flat_vertices, faces = subdivide(base_vertices, base_faces, config.resolution)
        vertices = project_vertices(flat_vertices, config.radius)
        corners = corner_points(vertices, faces, config.radius)
        adjacency = build_tile_adjacency(faces, len(vertices))
        tiles = build_tiles(
            vertices, faces, corners, adjacency, config.radius,
            tile_scale=config.tile_scale, workers=config.workers,
        )
        _check_tiles(tiles, config.resolution)
    except PolysphereError:
        logger.error("polyhedron build failed for %s", config, exc_info=True)
        raise

    logger.debug(
        "built %d tiles (resolution=%d, radius=%g) in %.3fs",
        len(tiles), config.resolution, config.radius, time.perf_counter() - started,
    )
    return Polyhedron(config, vertices, faces, corners, tiles)


def _check_tiles(tiles: Sequence[Tile], resolution: int) -> None:
    expected = tile_count(resolution)
    if len(tiles) != expected:
        raise InvariantViolationError(f"built {len(tiles)} tiles, expected {expected}")

    pentagons = 0
    for tile in tiles:
        if tile.arity not in (5, 6):
            raise InvariantViolationError(f"tile has {tile.arity} boundary points", tile.id)
        if len(tile.neighbor_ids) != tile.arity:
            raise InvariantViolationError(
                f"tile has {len(tile.neighbor_ids)} neighbours for {tile.arity} sides", tile.id,
            )
        if tile.arity == 5:
            pentagons += 1
    if pentagons != PENTAGON_COUNT:
        raise InvariantViolationError(f"found {pentagons} pentagons, expected {PENTAGON_COUNT}")
