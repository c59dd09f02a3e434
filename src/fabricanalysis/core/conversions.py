"""Attitude angles <-> direction cosines, rake, plane intersections and view rotations."""
from __future__ import annotations

from math import asin, acos, atan2, cos, pi, sin
from typing import TYPE_CHECKING, Iterable, Optional

import numpy as np

from fabricanalysis.config import CROSS_EPS
from fabricanalysis.core import mat3, vec3
from fabricanalysis.utils import DEG, INV_DEG, clamp, wrap_azimuth

if TYPE_CHECKING:
    import numpy.typing as npt

    from fabricanalysis.core.vec3 import Vec3Like

NORTH = (0.0, 1.0, 0.0)
NADIR = (0.0, 0.0, -1.0)


def plane_to_dcos(dd: float, dip: float) -> npt.NDArray[np.float64]:
    """
    Direction cosines of the pole (downward normal) of a plane.

    Args:
        dd: Dip direction in degrees.
        dip: Dip in degrees.

    Returns:
        Lower-hemisphere unit vector [x (east), y (north), z (up)].
    """
    dd_r = dd * DEG
    dip_r = dip * DEG
    return np.array([
        -sin(dip_r) * sin(dd_r),
        -sin(dip_r) * cos(dd_r),
        -cos(dip_r),
    ])

def dcos_to_plane(dcos: Vec3Like) -> tuple[float, float]:
    """Pole direction cosines -> (dip direction, dip) in degrees."""
    x, y, z = _lower_hemisphere(dcos)
    dip = acos(clamp(-z)) * INV_DEG
    dd = wrap_azimuth(atan2(-x, -y) * INV_DEG)
    return dd, dip

def line_to_dcos(trend: float, plunge: float) -> npt.NDArray[np.float64]:
    """
    Direction cosines of a line.

    Args:
        trend: Trend in degrees.
        plunge: Plunge in degrees (positive downwards).

    Returns:
        Lower-hemisphere unit vector.
    """
    t = trend * DEG
    p = plunge * DEG
    return np.array([
        cos(p) * sin(t),
        cos(p) * cos(t),
        -sin(p),
    ])

def dcos_to_line(dcos: Vec3Like) -> tuple[float, float]:
    """Direction cosines -> (trend, plunge) in degrees."""
    x, y, z = _lower_hemisphere(dcos)
    plunge = asin(clamp(-z)) * INV_DEG
    trend = wrap_azimuth(atan2(x, y) * INV_DEG)
    return trend, plunge

def strike_to_dip_direction(strike: float, dip: float) -> tuple[float, float]:
    """Strike/dip (right-hand rule) -> dip direction/dip."""
    return (strike + 90.0) % 360.0, dip

def planes_to_dcos(planes: Iterable[tuple[float, float]]) -> npt.NDArray[np.float64]:
    """Batch convert (dd, dip) pairs to an (n, 3) array of poles."""
    return np.array([plane_to_dcos(dd, dip) for dd, dip in planes], dtype=np.float64).reshape(-1, 3)

def lines_to_dcos(lines: Iterable[tuple[float, float]]) -> npt.NDArray[np.float64]:
    """Batch convert (trend, plunge) pairs to an (n, 3) array."""
    return np.array([line_to_dcos(t, p) for t, p in lines], dtype=np.float64).reshape(-1, 3)

def _lower_hemisphere(dcos: Vec3Like) -> tuple[float, float, float]:
    x, y, z = (float(c) for c in dcos)
    if z > 0:
        return -x, -y, -z
    return x, y, z


# ------------------------------------------------------------------------------
# Rake
# ------------------------------------------------------------------------------
def rake_to_dcos(dd: float, dip: float, rake: float) -> npt.NDArray[np.float64]:
    """
    Direction cosines of a line lying on a plane, given by its rake.

    The rake is measured from the strike (right-hand rule, strike = dd - 90)
    towards the down-dip direction, in degrees.
    """
    dd_r = dd * DEG
    dip_r = dip * DEG
    rk = rake * DEG
    return np.array([
        sin(rk) * cos(dip_r) * sin(dd_r) - cos(rk) * cos(dd_r),
        sin(rk) * cos(dip_r) * cos(dd_r) + cos(rk) * sin(dd_r),
        -sin(rk) * sin(dip_r),
    ])

def rake_to_line(dd: float, dip: float, rake: float) -> tuple[float, float]:
    """Rake on a plane -> (trend, plunge)."""
    return dcos_to_line(rake_to_dcos(dd, dip, rake))

def line_on_plane(dd: float, dip: float, trend: float, plunge: float) -> float:
    """
    Rake in degrees of a line (trend, plunge) lying on the plane (dd, dip).

    Inverse of `rake_to_line` up to hemisphere folding: a rake r and r - 180
    describe the same undirected line.
    """
    dd_r = dd * DEG
    dip_r = dip * DEG
    line = line_to_dcos(trend, plunge)

    strike = np.array([-cos(dd_r), sin(dd_r), 0.0])
    down_dip = np.array([cos(dip_r) * sin(dd_r), cos(dip_r) * cos(dd_r), -sin(dip_r)])

    along_strike = vec3.dot(line, strike)
    along_dip = vec3.dot(line, down_dip)
    return atan2(along_dip, along_strike) * INV_DEG


# ------------------------------------------------------------------------------
# Intersections and rotations
# ------------------------------------------------------------------------------
def plane_intersection_line(dd1: float, dip1: float, dd2: float, dip2: float) -> Optional[tuple[float, float]]:
    """
    Intersection line of two planes.

    Returns:
        (trend, plunge) in degrees, or None if the planes are parallel.
    """
    c = vec3.cross(plane_to_dcos(dd1, dip1), plane_to_dcos(dd2, dip2))
    if vec3.length(c) < CROSS_EPS:
        return None
    return dcos_to_line(vec3.normalize(c))

def rotate_dcos(dcos: Vec3Like, axis: Vec3Like, angle: float) -> npt.NDArray[np.float64]:
    """Rotate direction cosines around a unit axis by an angle in degrees."""
    return vec3.rotate(dcos, axis, angle * DEG)

def rotate_dcos_array(dcos: npt.ArrayLike, axis: Vec3Like, angle: float) -> npt.NDArray[np.float64]:
    """Rotate every row of an (n, 3) array around a unit axis by an angle in degrees."""
    rotation = mat3.rotation_from_axis_angle(axis, angle * DEG)
    data = np.asarray(dcos, dtype=np.float64).reshape(-1, 3)
    return data @ rotation.T

def minimal_rotation(source: Vec3Like, target: Vec3Like) -> npt.NDArray[np.float64]:
    """
    Smallest-angle rotation taking unit vector `source` onto `target`.

    Parallel inputs give the identity; antipodal inputs give a half turn
    about the x axis.
    """
    axis = vec3.cross(source, target)
    if vec3.length(axis) < CROSS_EPS:
        if vec3.dot(source, target) > 0:
            return mat3.identity()
        return mat3.rotation_from_axis_angle((1.0, 0.0, 0.0), pi)
    theta = vec3.angle(source, target)
    return mat3.rotation_from_axis_angle(vec3.normalize(axis), theta)

def rotation_from_center(trend: float, plunge: float) -> npt.NDArray[np.float64]:
    """Rotation that brings the direction (trend, plunge) to the projection centre [0, 0, -1]."""
    return minimal_rotation(line_to_dcos(trend, plunge), NADIR)

def rotation_from_north_pole(trend: float, plunge: float, spin: float = 0.0) -> npt.NDArray[np.float64]:
    """
    Rotation placing geographic north [0, 1, 0] at (trend, plunge).

    Args:
        trend: Trend of the new north position in degrees.
        plunge: Plunge of the new north position in degrees.
        spin: Rotation about the north axis in degrees, applied before the tilt.

    Returns:
        R_tilt @ R_spin.
    """
    r_spin = mat3.rotation_from_axis_angle(NORTH, spin * DEG)
    r_tilt = minimal_rotation(NORTH, line_to_dcos(trend, plunge))
    return mat3.multiply(r_tilt, r_spin)
