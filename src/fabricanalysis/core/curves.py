"""Great circles, small circles and arcs on the unit sphere, sampled as (n, 3) point arrays."""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np

from fabricanalysis.config import CROSS_EPS
from fabricanalysis.core import vec3

if TYPE_CHECKING:
    import numpy.typing as npt

    from fabricanalysis.core.vec3 import Vec3Like


def _circle_basis(axis: npt.NDArray[np.float64]) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """Two unit vectors spanning the plane perpendicular to a unit axis."""
    ref = (0.0, 0.0, 1.0) if abs(axis[2]) < 0.9 else (1.0, 0.0, 0.0)
    u = vec3.normalize(vec3.cross(axis, ref))
    v = vec3.cross(axis, u)
    return u, v

def great_circle(pole: Vec3Like, n_points: int = 180) -> npt.NDArray[np.float64]:
    """
    Points along the great circle whose pole is given.

    Args:
        pole: Pole of the great circle (normalized internally).
        n_points: Number of segments; n_points + 1 points are returned, first == last.

    Returns:
        Array of shape (n_points + 1, 3) on the unit sphere.
    """
    p = vec3.normalize(pole)
    u, v = _circle_basis(p)
    theta = np.linspace(0.0, 2.0 * np.pi, n_points + 1)
    return np.outer(np.cos(theta), u) + np.outer(np.sin(theta), v)

def small_circle(axis: Vec3Like, half_angle: float, n_points: int = 180) -> npt.NDArray[np.float64]:
    """
    Points along the small circle at `half_angle` (radians) around `axis`.

    Returns:
        Array of shape (n_points + 1, 3), closed.
    """
    a = vec3.normalize(axis)
    u, v = _circle_basis(a)
    theta = np.linspace(0.0, 2.0 * np.pi, n_points + 1)
    ring = np.outer(np.cos(theta), u) + np.outer(np.sin(theta), v)
    return a * np.cos(half_angle) + ring * np.sin(half_angle)

def arc(a: Vec3Like, b: Vec3Like, n_points: int = 60) -> npt.NDArray[np.float64]:
    """Shortest arc on the unit sphere from a to b; a single point if a == b."""
    na = vec3.normalize(a)
    nb = vec3.normalize(b)
    theta = vec3.angle(na, nb)
    if theta < CROSS_EPS:
        return na.reshape(1, 3)

    axis = vec3.normalize(vec3.cross(na, nb))
    return np.array([vec3.rotate(na, axis, t * theta) for t in np.linspace(0.0, 1.0, n_points + 1)])

def plane_intersection(pole1: Vec3Like, pole2: Vec3Like) -> Optional[tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]]:
    """
    Intersection of two planes given by their poles.

    Returns:
        The two antipodal unit vectors of the intersection line, or None if parallel.
    """
    c = vec3.cross(pole1, pole2)
    if vec3.length(c) < CROSS_EPS:
        return None
    n = vec3.normalize(c)
    return n, vec3.negate(n)

def _equator_crossing(a: npt.NDArray[np.float64], b: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    t = a[2] / (a[2] - b[2])
    x = a[0] + t * (b[0] - a[0])
    y = a[1] + t * (b[1] - a[1])
    norm = np.hypot(x, y)
    if norm > CROSS_EPS:
        return np.array([x / norm, y / norm, 0.0])
    return np.array([x, y, 0.0])

def clip_to_lower_hemisphere(points: npt.ArrayLike) -> list[npt.NDArray[np.float64]]:
    """
    Split a 3D polyline into its contiguous runs with z <= 0.

    Each run is closed off with the interpolated equator crossing where the
    polyline enters or leaves the lower hemisphere.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    runs: list[npt.NDArray[np.float64]] = []
    current: list[npt.NDArray[np.float64]] = []

    for i, p in enumerate(pts):
        if p[2] <= 0:
            if not current and i > 0 and pts[i - 1][2] > 0:
                current.append(_equator_crossing(pts[i - 1], p))
            current.append(p)
        elif current:
            current.append(_equator_crossing(pts[i - 1], p))
            runs.append(np.array(current))
            current = []

    if current:
        runs.append(np.array(current))
    return runs
