"""Nearest-tile lookup for arbitrary directions.

Tile centres all sit on one sphere, so the nearest centre to a
direction is found by chord distance between unit vectors; a
``scipy.spatial.cKDTree`` over the normalised centres answers that.
The result is the tile whose *centre* is nearest; close to a tile
edge that can differ from the tile whose polygon contains the point.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

import numpy as np
from scipy.spatial import cKDTree

from .errors import DegenerateGeometryError

if TYPE_CHECKING:
    from .polyhedron import Polyhedron


class TileLocator:
    """Spatial index over the tile centres of one :class:`Polyhedron`."""

    def __init__(self, poly: "Polyhedron") -> None:
        centers = np.asarray([t.center for t in poly.tiles], dtype=float)
        self._units = centers / np.linalg.norm(centers, axis=1, keepdims=True)
        self._tree = cKDTree(self._units)

    def __len__(self) -> int:
        return len(self._units)

    def nearest(self, point) -> int:
        """Id of the tile whose centre direction is closest to *point*."""
        _, idx = self.query(np.asarray(point, dtype=float).reshape(1, 3))
        return int(idx[0])

    def query(self, points, k: int = 1) -> Tuple[np.ndarray, np.ndarray]:
        """Nearest *k* tiles for each row of *points* (shape ``(M, 3)``).

        Returns ``(angles, ids)``; *angles* are great-circle angles in
        radians.  With ``k == 1`` both arrays have shape ``(M,)``.
        """
        pts = np.atleast_2d(np.asarray(points, dtype=float))
        norms = np.linalg.norm(pts, axis=1, keepdims=True)
        if np.any(norms == 0.0):
            raise DegenerateGeometryError("cannot locate the direction of the origin")
        chords, ids = self._tree.query(pts / norms, k=k)
        angles = 2.0 * np.arcsin(np.clip(chords / 2.0, 0.0, 1.0))
        return angles, ids

    def within(self, point, angle: float) -> np.ndarray:
        """Sorted ids of tiles whose centres lie within *angle* radians of *point*."""
        p = np.asarray(point, dtype=float)
        norm = np.linalg.norm(p)
        if norm == 0.0:
            raise DegenerateGeometryError("cannot locate the direction of the origin")
        chord = 2.0 * np.sin(min(angle, np.pi) / 2.0)
        ids = self._tree.query_ball_point(p / norm, chord)
        return np.asarray(sorted(ids), dtype=int)
