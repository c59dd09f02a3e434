"""
Closed-form eigen-decomposition of 3x3 symmetric matrices.

The characteristic polynomial of a real symmetric 3x3 matrix is a depressed
cubic with three real roots, solved with the trigonometric (Cardano) method
instead of iteration. Eigenvectors of the extreme eigenvalues come from
null-space cross products and are made orthogonal to each other; the middle
one is v1 x v3, so the triple is orthonormal by construction.
"""
from __future__ import annotations

from math import acos, cos, pi, sqrt
from typing import TYPE_CHECKING

import numpy as np

from fabricanalysis.config import CROSS_EPS, DIAGONAL_EPS, NULL_VECTOR_EPS
from fabricanalysis.core import vec3
from fabricanalysis.core.mat3 import as_mat3
from fabricanalysis.model.primitives import EigenResult
from fabricanalysis.utils import clamp

if TYPE_CHECKING:
    import numpy.typing as npt

TWO_PI_OVER_3 = 2.0 * pi / 3.0


def symmetric_eigen3(m: npt.ArrayLike) -> EigenResult:
    """
    Eigenvalue decomposition of a 3x3 symmetric matrix (closed form, no iteration).

    Args:
        m: Symmetric matrix, shape (3, 3) or flat 9 elements (row-major).
           Only the upper triangle is read.

    Returns:
        EigenResult with values [l1, l2, l3] in descending order and
        vectors[i] the matching orthonormal eigenvectors.

    Note:
        acos loses precision as its argument approaches +-1, which is where
        two eigenvalues coincide. A repeated eigenvalue is then resolved to
        about 1e-8 relative to the spread of the spectrum, and A.v = l.v holds
        to the same order. The eigenvectors stay orthonormal to rounding.
    """
    a = as_mat3(m)
    a00, a01, a02 = a[0, 0], a[0, 1], a[0, 2]
    a11, a12 = a[1, 1], a[1, 2]
    a22 = a[2, 2]

    # Off-diagonal energy; zero means the matrix is already diagonal
    p1 = a01 * a01 + a02 * a02 + a12 * a12

    if p1 < DIAGONAL_EPS:
        diagonal = np.array([a00, a11, a22], dtype=np.float64)
        order = np.argsort(-diagonal, kind="stable")
        return EigenResult(
            values=diagonal[order],
            vectors=np.eye(3, dtype=np.float64)[order],
        )

    q = (a00 + a11 + a22) / 3.0
    p2 = (a00 - q) ** 2 + (a11 - q) ** 2 + (a22 - q) ** 2 + 2.0 * p1
    p = sqrt(p2 / 6.0)

    # B = (A - qI) / p
    b00, b01, b02 = (a00 - q) / p, a01 / p, a02 / p
    b11, b12 = (a11 - q) / p, a12 / p
    b22 = (a22 - q) / p

    det_b = (b00 * (b11 * b22 - b12 * b12)
             - b01 * (b01 * b22 - b12 * b02)
             + b02 * (b01 * b12 - b11 * b02))

    r = clamp(det_b / 2.0)
    phi = acos(r) / 3.0

    eig1 = q + 2.0 * p * cos(phi)
    eig3 = q + 2.0 * p * cos(phi + TWO_PI_OVER_3)
    # trace conservation instead of a third cosine
    eig2 = 3.0 * q - eig1 - eig3

    v1 = _null_vector(a, eig1)
    v3 = _null_vector(a, eig3)

    # The eigenvector of the better separated eigenvalue is kept; the other
    # is projected onto its orthogonal complement. Near a repeated eigenvalue
    # the null vector is only determined up to the degenerate plane.
    if eig1 - eig2 >= eig2 - eig3:
        v3 = _orthogonal_unit(v3, v1)
    else:
        v1 = _orthogonal_unit(v1, v3)

    v2 = vec3.normalize(vec3.cross(v1, v3))

    return EigenResult(
        values=np.array([eig1, eig2, eig3], dtype=np.float64),
        vectors=np.vstack((v1, v2, v3)),
    )


def _null_vector(a: npt.NDArray[np.float64], lam: float) -> npt.NDArray[np.float64]:
    """
    Null-space direction of (A - lam*I).

    The longest of the three row-pair cross products is the most robust
    choice. When all of them vanish (a double eigenvalue) any vector
    perpendicular to the remaining row is an eigenvector.
    """
    shifted = a - lam * np.eye(3)
    r0, r1, r2 = shifted[0], shifted[1], shifted[2]

    candidates = (vec3.cross(r0, r1), vec3.cross(r0, r2), vec3.cross(r1, r2))
    squared = [float(np.dot(c, c)) for c in candidates]

    # ties resolve to the earliest pair
    best = 0
    if squared[1] > squared[best]:
        best = 1
    if squared[2] > squared[best]:
        best = 2

    norm = sqrt(squared[best])
    if norm >= NULL_VECTOR_EPS:
        return candidates[best] / norm

    # rank <= 1: the null space is everything orthogonal to the longest row
    row = max((r0, r1, r2), key=lambda r: float(np.dot(r, r)))
    if vec3.length(row) < NULL_VECTOR_EPS:
        return np.array([1.0, 0.0, 0.0])
    return _perpendicular(row)


def _orthogonal_unit(v: npt.NDArray[np.float64], anchor: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Part of v orthogonal to the unit vector `anchor`, normalized; any perpendicular if v is parallel."""
    u = v - vec3.dot(v, anchor) * anchor
    norm = vec3.length(u)
    if norm <= CROSS_EPS:
        return _perpendicular(anchor)
    return u / norm


def _perpendicular(v: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Unit vector perpendicular to v, built from its smallest component."""
    ax, ay, az = abs(v[0]), abs(v[1]), abs(v[2])
    if ax <= ay and ax <= az:
        u = np.array([0.0, -v[2], v[1]])
    elif ay <= ax and ay <= az:
        u = np.array([-v[2], 0.0, v[0]])
    else:
        u = np.array([-v[1], v[0], 0.0])
    return u / vec3.length(u)
