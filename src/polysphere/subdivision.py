"""Subdivision of the icosahedron into a geodesic triangle grid.

Each base face ``(a, b, c)`` is split into ``n²`` triangles where
``n = resolution + 1`` is the number of segments per base edge.  Grid
point ``(i, j)`` (row *i*, ``0 <= j <= i <= n``) carries the integer
barycentric weights::

    a: n - i      b: i - j      c: j

i.e. it is reached by interpolating ``i / n`` along ``a → b`` and
``a → c`` and then ``j / i`` across the row.

Deduplication
-------------
Vertices are keyed by their non-zero ``(base_vertex, weight)`` pairs,
sorted.  A corner is ``((a, n),)``; a point on base edge ``a–b`` is
``((a, wa), (b, wb))`` whichever face generates it; interior points
are unique to one face.  No floating-point comparison is involved.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

from .errors import InvalidParameterError
from .geometry import Vec3
from .models import Face

logger = logging.getLogger(__name__)

VertexKey = Tuple[Tuple[int, int], ...]


def frequency(resolution: int) -> int:
    """Segments per base edge for *resolution*."""
    _check_resolution(resolution)
    return resolution + 1


def vertex_count(resolution: int) -> int:
    """Vertices of the subdivided icosahedron (== tiles of its dual)."""
    n = frequency(resolution)
    return 10 * n * n + 2


def face_count(resolution: int) -> int:
    n = frequency(resolution)
    return 20 * n * n


class _VertexArena:
    """Construction-scoped vertex table addressed by barycentric key."""

    def __init__(self, base: Sequence[Vec3], n: int) -> None:
        self._base = base
        self._n = n
        self._index: Dict[VertexKey, int] = {}
        self.points: List[Vec3] = []

    def index_of(self, weights: Sequence[Tuple[int, int]]) -> int:
        key: VertexKey = tuple(sorted((v, w) for v, w in weights if w > 0))
        idx = self._index.get(key)
        if idx is None:
            idx = len(self.points)
            self._index[key] = idx
            self.points.append(self._position(key))
        return idx

    def _position(self, key: VertexKey) -> Vec3:
        # Summed in key order so shared edge points do not depend on
        # which face created them.
        if len(key) == 1:
            return self._base[key[0][0]]
        x = y = z = 0.0
        for v, w in key:
            px, py, pz = self._base[v]
            x += px * w
            y += py * w
            z += pz * w
        n = self._n
        return (x / n, y / n, z / n)


def subdivide(
    vertices: Sequence[Vec3],
    faces: Sequence[Face],
    resolution: int,
) -> Tuple[Tuple[Vec3, ...], Tuple[Face, ...]]:
    """Split every face of *faces* into a triangular grid.

    Returns a new ``(vertices, faces)`` pair.  Vertex indices
    ``0 … len(vertices) - 1`` of the input are preserved, so the base
    corners keep their ids.  Sub-triangles inherit the winding of their
    base face.
    """
    n = frequency(resolution)
    arena = _VertexArena(vertices, n)
    for v in range(len(vertices)):
        arena.index_of(((v, n),))

    out: List[Face] = []
    for face in faces:
        a, b, c = face.vertex_ids

        def grid_point(i: int, j: int) -> int:
            return arena.index_of(((a, n - i), (b, i - j), (c, j)))

        prev_row = [grid_point(0, 0)]
        for i in range(1, n + 1):
            row = [grid_point(i, j) for j in range(i + 1)]
            for j in range(i):
                # "down" triangle
                out.append(Face(len(out), (prev_row[j], row[j], row[j + 1])))
                if j > 0:
                    # "up" triangle between two points of the previous row
                    out.append(Face(len(out), (prev_row[j - 1], row[j], prev_row[j])))
            prev_row = row

    logger.debug(
        "subdivided %d faces at resolution %d: %d vertices, %d faces",
        len(faces), resolution, len(arena.points), len(out),
    )
    return tuple(arena.points), tuple(out)


def _check_resolution(resolution: int) -> None:
    if isinstance(resolution, bool) or not isinstance(resolution, int):
        raise InvalidParameterError(f"resolution must be an integer, got {resolution!r}")
    if resolution < 0:
        raise InvalidParameterError(f"resolution must be >= 0, got {resolution}")
