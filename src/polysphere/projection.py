"""Radial projection of the geodesic mesh onto its target sphere.

Faces hold vertex indices only, so anything derived from face geometry
(centroids, corners) is computed here from the *projected* table and
never carried over from the flat mesh.
"""

from __future__ import annotations

from typing import Sequence, Tuple

from .errors import DegenerateGeometryError
from .geometry import Vec3, project_to_sphere
from .models import Face


def project_vertices(vertices: Sequence[Vec3], radius: float) -> Tuple[Vec3, ...]:
    """Return a new vertex table with every point at distance *radius*."""
    projected = []
    for idx, p in enumerate(vertices):
        try:
            projected.append(project_to_sphere(p, radius))
        except DegenerateGeometryError as exc:
            raise DegenerateGeometryError(f"vertex {idx} lies at the origin") from exc
    return tuple(projected)


def face_centroids(vertices: Sequence[Vec3], faces: Sequence[Face]) -> Tuple[Vec3, ...]:
    """Centroid of every face, computed from *vertices* as they are now."""
    return tuple(face.centroid(vertices) for face in faces)


def corner_points(
    vertices: Sequence[Vec3],
    faces: Sequence[Face],
    radius: float,
) -> Tuple[Vec3, ...]:
    """Tile corner table: each face centroid lifted onto the sphere.

    Index *k* of the result belongs to the face with ``id == k``; the
    corner is shared by the three tiles around that face.
    """
    corners = []
    for face in faces:
        try:
            corners.append(project_to_sphere(face.centroid(vertices), radius))
        except DegenerateGeometryError as exc:
            raise DegenerateGeometryError(f"face {face.id} has its centroid at the origin") from exc
    return tuple(corners)
