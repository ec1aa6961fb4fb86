from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from .geometry import (
    Vec3,
    centroid,
    distance,
    lerp,
    normalize,
    project_to_sphere,
    magnitude,
    surface_normal,
    to_lat_lon,
    triangle_area,
)

if TYPE_CHECKING:
    from .approximation import TileFrame


@dataclass(frozen=True)
class Face:
    """Triangle of the geodesic mesh, by vertex index.

    Coordinates are never cached on the face; :meth:`centroid` and
    :meth:`normal` read the vertex table they are given.
    """

    id: int
    vertex_ids: tuple[int, int, int]

    def points(self, vertices: Sequence[Vec3]) -> tuple[Vec3, Vec3, Vec3]:
        a, b, c = self.vertex_ids
        return (vertices[a], vertices[b], vertices[c])

    def centroid(self, vertices: Sequence[Vec3]) -> Vec3:
        return centroid(self.points(vertices))

    def normal(self, vertices: Sequence[Vec3]) -> Vec3:
        return surface_normal(*self.points(vertices))

    def edges(self) -> tuple[tuple[int, int], ...]:
        a, b, c = self.vertex_ids
        return ((a, b), (b, c), (c, a))


@dataclass(frozen=True)
class Tile:
    """One polygon of the tiling: the dual of mesh vertex *id*.

    *corner_ids* index the owning polyhedron's corner table (one entry
    per boundary point, in boundary order).  *neighbor_ids* are tile
    ids, sorted.
    """

    id: int
    center: Vec3
    boundary: tuple[Vec3, ...]
    corner_ids: tuple[int, ...] = field(default_factory=tuple)
    neighbor_ids: tuple[int, ...] = field(default_factory=tuple)

    @property
    def arity(self) -> int:
        return len(self.boundary)

    def is_pentagon(self) -> bool:
        return self.arity == 5

    def is_hexagon(self) -> bool:
        return self.arity == 6

    # ── Measurements ────────────────────────────────────────────────

    def average_radius(self) -> float:
        """Mean distance from the centre to each boundary point."""
        if not self.boundary:
            return 0.0
        return sum(distance(self.center, p) for p in self.boundary) / len(self.boundary)

    def average_edge_length(self) -> float:
        """Mean distance between consecutive boundary points."""
        n = len(self.boundary)
        if n < 2:
            return 0.0
        total = sum(distance(self.boundary[i], self.boundary[(i + 1) % n]) for i in range(n))
        return total / n

    def area(self) -> float:
        """Area of the triangle fan from the centre over the boundary."""
        n = len(self.boundary)
        if n < 3:
            return 0.0
        return sum(
            triangle_area(self.center, self.boundary[i], self.boundary[(i + 1) % n])
            for i in range(n)
        )

    def normal(self) -> Vec3:
        """Outward unit normal at the tile centre."""
        return normalize(self.center)

    def frame(self) -> "TileFrame":
        from .approximation import tile_frame
        return tile_frame(self)

    # ── Coordinates ─────────────────────────────────────────────────

    def lat_lon(self) -> tuple[float, float]:
        """``(latitude_deg, longitude_deg)`` of the tile centre."""
        return to_lat_lon(self.center)

    def boundary_lat_lon(self) -> tuple[tuple[float, float], ...]:
        return tuple(to_lat_lon(p) for p in self.boundary)

    def scaled_boundary(self, scale: float) -> tuple[Vec3, ...]:
        """Boundary pulled toward the centre by *scale* (``0 < scale <= 1``).

        Points stay on the tile's sphere: 0.5 gives the arc midpoint
        between the centre and each current boundary point.
        """
        if not 0.0 < scale <= 1.0:
            raise ValueError(f"scale must be in (0, 1], got {scale}")
        if scale == 1.0:
            return self.boundary
        radius = magnitude(self.center)
        return tuple(
            project_to_sphere(lerp(self.center, p, scale), radius) for p in self.boundary
        )
