"""polysphere: Goldberg polyhedron tilings of the sphere.

Public API is organised into layers:

- **Core**: geometry primitives, models, errors
- **Building**: icosahedron seed, subdivision, projection, dual tiles
- **Polyhedron**: configuration, builder, immutable container
- **Approximation**: orientation frames, statistics, regular polygons
- **Queries**: adjacency rings, nearest-tile lookup
- **Diagnostics**: invariant checks and reports
"""

# ── Core ────────────────────────────────────────────────────────────
from .errors import (
    PolysphereError,
    InvalidParameterError,
    DegenerateGeometryError,
    InvariantViolationError,
)
from .geometry import Vec3, normalize, project_to_sphere, to_lat_lon
from .models import Face, Tile

# ── Building ────────────────────────────────────────────────────────
from .icosahedron import icosahedron, orient_outward
from .subdivision import subdivide, frequency, vertex_count, face_count
from .projection import project_vertices, face_centroids, corner_points
from .dual import incident_faces, order_faces_around, build_tile, build_tiles
from .algorithms import build_tile_adjacency, adjacency_map, ring_tiles, shared_corners

# ── Polyhedron ──────────────────────────────────────────────────────
from .polyhedron import (
    BuildConfig,
    Polyhedron,
    build_polyhedron,
    build_polyhedron_from_config,
    tile_count,
    ICOSAHEDRON,
    COARSE,
    MEDIUM,
    FINE,
)

# ── Approximation ───────────────────────────────────────────────────
from .approximation import (
    TileFrame,
    HexagonStats,
    RegularPolygon,
    tile_frame,
    tile_measurements,
    hexagon_stats,
    regular_polygon,
    regular_approximations,
)

# ── Queries ─────────────────────────────────────────────────────────
from .locator import TileLocator

# ── Diagnostics ─────────────────────────────────────────────────────
from .diagnostics import validate_polyhedron, radius_deviation, diagnostics_report
from .logging_config import setup_logging

__all__ = [
    # Core
    "PolysphereError",
    "InvalidParameterError",
    "DegenerateGeometryError",
    "InvariantViolationError",
    "Vec3",
    "normalize",
    "project_to_sphere",
    "to_lat_lon",
    "Face",
    "Tile",
    # Building
    "icosahedron",
    "orient_outward",
    "subdivide",
    "frequency",
    "vertex_count",
    "face_count",
    "project_vertices",
    "face_centroids",
    "corner_points",
    "incident_faces",
    "order_faces_around",
    "build_tile",
    "build_tiles",
    "build_tile_adjacency",
    "adjacency_map",
    "ring_tiles",
    "shared_corners",
    # Polyhedron
    "BuildConfig",
    "Polyhedron",
    "build_polyhedron",
    "build_polyhedron_from_config",
    "tile_count",
    "ICOSAHEDRON",
    "COARSE",
    "MEDIUM",
    "FINE",
    # Approximation
    "TileFrame",
    "HexagonStats",
    "RegularPolygon",
    "tile_frame",
    "tile_measurements",
    "hexagon_stats",
    "regular_polygon",
    "regular_approximations",
    # Queries
    "TileLocator",
    # Diagnostics
    "validate_polyhedron",
    "radius_deviation",
    "diagnostics_report",
    "setup_logging",
]
