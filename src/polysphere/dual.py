"""Dual tile construction.

Every vertex of the projected geodesic mesh becomes a tile.  Its
incident triangles, ordered angularly around the vertex, become the
tile's corners (the triangle centroids lifted onto the sphere):

    vertex  → tile centre
    face    → tile corner (shared by three tiles)
    edge    → tile edge   (shared by two tiles)

Ordering works in the tangent plane at the vertex.  With outward
normal ``n = normalize(v)`` and ``w(f)`` the tangent component of
``corner(f) - v``, faces are sorted by::

    atan2(w · (n × ref), w · ref)

where *ref* is ``w`` of the first incident face.  That walks the faces
counter-clockwise seen from outside the sphere.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

from .errors import DegenerateGeometryError, InvariantViolationError
from .geometry import (
    Vec3,
    cross,
    dot,
    lerp,
    magnitude,
    normalize,
    project_to_sphere,
    scale,
    sub,
)
from .models import Face, Tile
from .workers import map_indexed

# Angles closer than this are a tie; tangents shorter than this times
# the centre radius are degenerate.
ANGLE_TOLERANCE = 1e-12


def incident_faces(faces: Sequence[Face], vertex_count: int) -> Tuple[Tuple[int, ...], ...]:
    """Face ids touching each vertex, in face-id order."""
    incident: List[List[int]] = [[] for _ in range(vertex_count)]
    for face in faces:
        for vid in face.vertex_ids:
            incident[vid].append(face.id)
    return tuple(tuple(ids) for ids in incident)


def _tangent(offset: Vec3, normal: Vec3) -> Vec3:
    return sub(offset, scale(normal, dot(offset, normal)))


def order_faces_around(
    vertex_id: int,
    center: Vec3,
    face_ids: Sequence[int],
    corners: Sequence[Vec3],
) -> List[int]:
    """Return *face_ids* sorted counter-clockwise around *center*.

    Raises :class:`InvariantViolationError` for fewer than three faces
    or for two faces at the same angle, and
    :class:`DegenerateGeometryError` when a corner sits on the normal
    through *center*.
    """
    if len(face_ids) < 3:
        raise InvariantViolationError(
            f"vertex has {len(face_ids)} incident faces, need at least 3", vertex_id,
        )

    try:
        normal = normalize(center)
        tangents = [_tangent(sub(corners[fid], center), normal) for fid in face_ids]
        ref = normalize(tangents[0])
        perp = cross(normal, ref)
    except DegenerateGeometryError as exc:
        raise DegenerateGeometryError(f"degenerate tangent frame at vertex {vertex_id}") from exc

    tangent_floor = ANGLE_TOLERANCE * magnitude(center)
    keyed: List[Tuple[float, int]] = []
    for fid, w in zip(face_ids, tangents):
        if magnitude(w) <= tangent_floor:
            raise DegenerateGeometryError(
                f"corner of face {fid} projects onto vertex {vertex_id}"
            )
        keyed.append((math.atan2(dot(w, perp), dot(w, ref)), fid))
    keyed.sort()

    wrapped = keyed[1:] + [(keyed[0][0] + 2.0 * math.pi, keyed[0][1])]
    for (a1, f1), (a2, f2) in zip(keyed, wrapped):
        if a2 - a1 <= ANGLE_TOLERANCE:
            raise InvariantViolationError(
                f"faces {f1} and {f2} share the same angle around the vertex", vertex_id,
            )
    return [fid for _, fid in keyed]


def is_outward(boundary: Sequence[Vec3], normal: Vec3) -> bool:
    """True when the first three boundary points wind counter-clockwise about *normal*."""
    p0, p1, p2 = boundary[0], boundary[1], boundary[2]
    return dot(cross(sub(p1, p0), sub(p2, p1)), normal) > 0.0


def build_tile(
    vertex_id: int,
    vertices: Sequence[Vec3],
    incident: Sequence[Sequence[int]],
    corners: Sequence[Vec3],
    radius: float,
    tile_scale: float = 1.0,
    neighbor_ids: Tuple[int, ...] = (),
) -> Tile:
    """Build the tile dual to mesh vertex *vertex_id*.

    *tile_scale* < 1 pulls every corner toward the centre along the
    chord and lifts it back onto the sphere, so 0.5 lands on the arc
    midpoint.  At 1.0 the shared corner points are used unchanged.
    """
    center = vertices[vertex_id]
    ordered = order_faces_around(vertex_id, center, incident[vertex_id], corners)

    full = [corners[fid] for fid in ordered]
    if not is_outward(full, normalize(center)):
        ordered.reverse()
        full.reverse()

    if tile_scale == 1.0:
        boundary = tuple(full)
    else:
        boundary = tuple(project_to_sphere(lerp(center, p, tile_scale), radius) for p in full)

    return Tile(
        id=vertex_id,
        center=center,
        boundary=boundary,
        corner_ids=tuple(ordered),
        neighbor_ids=neighbor_ids,
    )


def build_tiles(
    vertices: Sequence[Vec3],
    faces: Sequence[Face],
    corners: Sequence[Vec3],
    adjacency: Sequence[Tuple[int, ...]],
    radius: float,
    tile_scale: float = 1.0,
    workers: Optional[int] = None,
) -> Tuple[Tile, ...]:
    """Build one tile per vertex, in vertex-index order.

    The mesh tables are only read; with *workers* the per-vertex builds
    run concurrently and are collected by index.
    """
    incident = incident_faces(faces, len(vertices))

    def _build(vid: int) -> Tile:
        return build_tile(
            vid, vertices, incident, corners, radius,
            tile_scale=tile_scale, neighbor_ids=adjacency[vid],
        )

    return tuple(map_indexed(_build, len(vertices), workers))
