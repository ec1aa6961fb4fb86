"""Icosahedron seed mesh.

Twelve vertices on three mutually perpendicular golden rectangles::

    (±1, ±φ, 0)    (0, ±1, ±φ)    (±φ, 0, ±1)

and twenty triangular faces, every one wound so that
``cross(b - a, c - a)`` points away from the origin.
"""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

from .errors import InvalidParameterError, InvariantViolationError
from .geometry import Vec3, dot
from .models import Face

PHI = (1.0 + math.sqrt(5.0)) / 2.0

_CORNERS: Tuple[Tuple[float, float, float], ...] = (
    (-1.0, PHI, 0.0),
    (1.0, PHI, 0.0),
    (-1.0, -PHI, 0.0),
    (1.0, -PHI, 0.0),
    (0.0, -1.0, PHI),
    (0.0, 1.0, PHI),
    (0.0, -1.0, -PHI),
    (0.0, 1.0, -PHI),
    (PHI, 0.0, -1.0),
    (PHI, 0.0, 1.0),
    (-PHI, 0.0, -1.0),
    (-PHI, 0.0, 1.0),
)

_FACES: Tuple[Tuple[int, int, int], ...] = (
    # 5 faces around vertex 0
    (0, 11, 5), (0, 5, 1), (0, 1, 7), (0, 7, 10), (0, 10, 11),
    # adjacent band
    (1, 5, 9), (5, 11, 4), (11, 10, 2), (10, 7, 6), (7, 1, 8),
    # 5 faces around vertex 3
    (3, 9, 4), (3, 4, 2), (3, 2, 6), (3, 6, 8), (3, 8, 9),
    # adjacent band
    (4, 9, 5), (2, 4, 11), (6, 2, 10), (8, 6, 7), (9, 8, 1),
)

VERTEX_COUNT = len(_CORNERS)
FACE_COUNT = len(_FACES)


def icosahedron(scale: float = 1.0) -> Tuple[Tuple[Vec3, ...], Tuple[Face, ...]]:
    """Return ``(vertices, faces)`` of the base icosahedron.

    *scale* multiplies every coordinate; the circumradius is
    ``scale * sqrt(1 + φ²)``.
    """
    if not (isinstance(scale, (int, float)) and math.isfinite(scale) and scale > 0):
        raise InvalidParameterError(f"icosahedron scale must be a positive number, got {scale!r}")

    vertices = tuple((x * scale, y * scale, z * scale) for x, y, z in _CORNERS)
    faces = orient_outward(
        vertices,
        [Face(id=i, vertex_ids=tri) for i, tri in enumerate(_FACES)],
    )
    return vertices, tuple(faces)


def orient_outward(vertices: Sequence[Vec3], faces: Sequence[Face]) -> List[Face]:
    """Return *faces* with any inward-wound triangle flipped.

    Only valid for convex meshes enclosing the origin.
    """
    fixed: List[Face] = []
    for face in faces:
        facing = dot(face.normal(vertices), face.centroid(vertices))
        if facing == 0.0:
            raise InvariantViolationError("face is edge-on to the origin", face.id)
        if facing < 0.0:
            a, b, c = face.vertex_ids
            face = Face(id=face.id, vertex_ids=(a, c, b))
        fixed.append(face)
    return fixed
