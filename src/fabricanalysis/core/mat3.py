"""3x3 matrix operations on NumPy arrays of shape (3, 3), row-major."""
from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from fabricanalysis.core import vec3

if TYPE_CHECKING:
    import numpy.typing as npt

    from fabricanalysis.core.vec3 import Vec3Like


def identity() -> npt.NDArray[np.float64]:
    return np.eye(3, dtype=np.float64)

def as_mat3(m: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """Copy a (3, 3) or flat 9-element matrix into a fresh (3, 3) float64 array."""
    return np.array(m, dtype=np.float64).reshape(3, 3)

def multiply(a: npt.ArrayLike, b: npt.ArrayLike) -> npt.NDArray[np.float64]:
    return as_mat3(a) @ as_mat3(b)

def transform_vec3(m: npt.ArrayLike, v: Vec3Like) -> npt.NDArray[np.float64]:
    return as_mat3(m) @ vec3.as_vec3(v)

def transpose(m: npt.ArrayLike) -> npt.NDArray[np.float64]:
    return as_mat3(m).T.copy()

def rotation_from_axis_angle(axis: Vec3Like, theta: float) -> npt.NDArray[np.float64]:
    """
    Build the rotation matrix for a right-handed rotation about an axis (Rodrigues).

    Args:
        axis: Rotation axis. Must be a unit vector.
        theta: Rotation angle in radians.

    Returns:
        A (3, 3) orthonormal rotation matrix.
    """
    kx, ky, kz = vec3.as_vec3(axis)
    c = np.cos(theta)
    s = np.sin(theta)
    t = 1.0 - c
    return np.array([
        [c + kx * kx * t,      kx * ky * t - kz * s, kx * kz * t + ky * s],
        [ky * kx * t + kz * s, c + ky * ky * t,      ky * kz * t - kx * s],
        [kz * kx * t - ky * s, kz * ky * t + kx * s, c + kz * kz * t],
    ], dtype=np.float64)

def orthonormalize(m: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """
    Re-orthonormalize a rotation matrix via Gram-Schmidt on its rows.

    Rows 0 and 1 are orthonormalized, row 2 is their cross product, so the
    result is exactly orthonormal however large the input drift is. Used to
    correct accumulated composition error, not to validate input.
    """
    m = as_mat3(m)
    r0 = m[0] / np.sqrt(np.dot(m[0], m[0]))

    r1 = m[1] - np.dot(m[1], r0) * r0
    r1 = r1 / np.sqrt(np.dot(r1, r1))

    r2 = vec3.cross(r0, r1)
    return np.vstack((r0, r1, r2))
