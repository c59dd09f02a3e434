"""Functional operations on 3-vectors stored as NumPy arrays of shape (3,)."""
from __future__ import annotations

from typing import TYPE_CHECKING, Sequence, Union

import numpy as np

from fabricanalysis.utils import clamp

if TYPE_CHECKING:
    import numpy.typing as npt

    Vec3Like = Union[Sequence[float], npt.NDArray[np.float64]]


def create(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> npt.NDArray[np.float64]:
    return np.array([x, y, z], dtype=np.float64)

def as_vec3(v: Vec3Like) -> npt.NDArray[np.float64]:
    """Copy any 3-sequence into a fresh float64 array."""
    return np.array(v, dtype=np.float64).reshape(3)

def dot(a: Vec3Like, b: Vec3Like) -> float:
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])

def cross(a: Vec3Like, b: Vec3Like) -> npt.NDArray[np.float64]:
    return np.array([
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    ], dtype=np.float64)

def length(v: Vec3Like) -> float:
    return float(np.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2]))

def normalize(v: Vec3Like) -> npt.NDArray[np.float64]:
    """
    Return the unit vector along v.

    The zero vector is returned as a zero vector; callers check for it themselves.
    """
    norm = length(v)
    if norm == 0.0:
        return np.zeros(3, dtype=np.float64)
    return as_vec3(v) / norm

def scale(v: Vec3Like, s: float) -> npt.NDArray[np.float64]:
    return as_vec3(v) * s

def add(a: Vec3Like, b: Vec3Like) -> npt.NDArray[np.float64]:
    return as_vec3(a) + as_vec3(b)

def sub(a: Vec3Like, b: Vec3Like) -> npt.NDArray[np.float64]:
    return as_vec3(a) - as_vec3(b)

def negate(v: Vec3Like) -> npt.NDArray[np.float64]:
    return -as_vec3(v)

def angle(a: Vec3Like, b: Vec3Like) -> float:
    """Angle in radians between a and b."""
    # round-off can push the dot product of unit vectors past +-1
    d = dot(normalize(a), normalize(b))
    return float(np.arccos(clamp(d)))

def rotate(v: Vec3Like, axis: Vec3Like, theta: float) -> npt.NDArray[np.float64]:
    """
    Rodrigues' rotation of v around a unit axis by theta.

    Args:
        v: Vector to rotate.
        axis: Rotation axis. Must already be a unit vector.
        theta: Rotation angle in radians (right-hand rule).

    Returns:
        The rotated vector.
    """
    v = as_vec3(v)
    k = as_vec3(axis)
    cos_t = np.cos(theta)
    sin_t = np.sin(theta)
    return v * cos_t + cross(k, v) * sin_t + k * dot(k, v) * (1.0 - cos_t)
