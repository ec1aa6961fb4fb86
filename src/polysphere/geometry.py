"""Geometry helper functions used across the package.

Points and vectors are plain ``(x, y, z)`` float tuples.  Every helper is
side-effect free.
"""

from __future__ import annotations

import math
from typing import Iterable, Tuple

from .errors import DegenerateGeometryError

Vec3 = Tuple[float, float, float]


def add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale(v: Vec3, s: float) -> Vec3:
    return (v[0] * s, v[1] * s, v[2] * s)


def dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def magnitude(v: Vec3) -> float:
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def distance(a: Vec3, b: Vec3) -> float:
    """Euclidean distance between two points."""
    return magnitude(sub(a, b))


def normalize(v: Vec3) -> Vec3:
    """Unit vector along *v*.

    Raises :class:`DegenerateGeometryError` for the zero vector.
    """
    mag = magnitude(v)
    if mag == 0.0:
        raise DegenerateGeometryError(f"cannot normalise zero-length vector {v!r}")
    return (v[0] / mag, v[1] / mag, v[2] / mag)


def lerp(a: Vec3, b: Vec3, t: float) -> Vec3:
    """Point a fraction *t* of the way from *a* to *b* (``0 <= t <= 1``)."""
    if not 0.0 <= t <= 1.0:
        raise ValueError(f"interpolation fraction must be in [0, 1], got {t}")
    u = 1.0 - t
    return (a[0] * u + b[0] * t, a[1] * u + b[1] * t, a[2] * u + b[2] * t)


def project_to_sphere(p: Vec3, radius: float) -> Vec3:
    """Radially project *p* onto the origin-centred sphere of *radius*."""
    mag = magnitude(p)
    if mag == 0.0:
        raise DegenerateGeometryError("cannot project the origin onto a sphere")
    return scale(p, radius / mag)


def centroid(points: Iterable[Vec3]) -> Vec3:
    """Mean position of *points*."""
    pts = list(points)
    if not pts:
        raise ValueError("centroid of an empty point set")
    n = len(pts)
    return (
        sum(p[0] for p in pts) / n,
        sum(p[1] for p in pts) / n,
        sum(p[2] for p in pts) / n,
    )


def surface_normal(a: Vec3, b: Vec3, c: Vec3) -> Vec3:
    """Unnormalised normal of triangle *abc* (right-hand rule)."""
    return cross(sub(b, a), sub(c, a))


def triangle_area(a: Vec3, b: Vec3, c: Vec3) -> float:
    return 0.5 * magnitude(surface_normal(a, b, c))


def to_lat_lon(p: Vec3) -> tuple[float, float]:
    """``(latitude_deg, longitude_deg)`` of *p*, Y axis up.

    Latitude is the angle from the XZ plane toward +Y; longitude is
    measured in the XZ plane from +Z toward +X.
    """
    mag = magnitude(p)
    if mag == 0.0:
        raise DegenerateGeometryError("latitude/longitude of the origin is undefined")
    ratio = max(-1.0, min(1.0, p[1] / mag))
    return (math.degrees(math.asin(ratio)), math.degrees(math.atan2(p[0], p[2])))
