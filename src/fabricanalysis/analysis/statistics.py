"""
Directional Statistics
======================
Descriptive statistics for sets of direction cosines.

All functions take an (n, 3) array-like of unit vectors (lower hemisphere).
Use `conversions.planes_to_dcos` / `lines_to_dcos` to convert attitudes first.

Functions:
    resultant: Vector sum of the set.
    mean_vector: Normalized resultant.
    fisher_stats: Fisher concentration and confidence cone.
    orientation_tensor: Normalized second-moment tensor.
    principal_axes: Eigen-analysis of the tensor with Woodcock, Vollmer and
        Bingham fabric parameters.
"""
from __future__ import annotations

from math import acos
from typing import TYPE_CHECKING

import numpy as np

from fabricanalysis.config import FALLBACK_MEAN, RESULTANT_EPS
from fabricanalysis.core import vec3
from fabricanalysis.core.eigen import symmetric_eigen3
from fabricanalysis.model.primitives import FisherStats, PrincipalAxes
from fabricanalysis.utils import INV_DEG, clamp

if TYPE_CHECKING:
    import numpy.typing as npt


def as_dcos_array(dcos: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """Coerce direction cosines into a fresh (n, 3) float64 array."""
    return np.array(dcos, dtype=np.float64).reshape(-1, 3)

def _require_data(data: npt.NDArray[np.float64]) -> None:
    if len(data) == 0:
        raise ValueError("At least one direction is required.")


def resultant(dcos: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """Sum of the unit vectors (not normalized)."""
    return as_dcos_array(dcos).sum(axis=0)

def mean_vector(dcos: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """
    Mean direction, i.e. the normalized resultant.

    A null resultant has no direction; [0, 0, -1] is returned instead.
    """
    res = resultant(dcos)
    if vec3.length(res) <= RESULTANT_EPS:
        return np.array(FALLBACK_MEAN)
    return vec3.normalize(res)

def fisher_stats(dcos: npt.ArrayLike) -> FisherStats:
    """
    Fisher statistics of a set of direction cosines.

    Args:
        dcos: (n, 3) unit vectors, n >= 1.

    Raises:
        ValueError: If the set is empty.

    Returns:
        FisherStats with the sample size, resultant length R, mean resultant
        length R/n, mean direction, concentration kappa (ML estimate with
        small-sample correction, inf for a perfect cluster) and the 95 %
        confidence cone half-angle in degrees (0 where undefined).
    """
    data = as_dcos_array(dcos)
    _require_data(data)

    n = len(data)
    res = data.sum(axis=0)
    R = vec3.length(res)
    Rbar = R / n
    mean = res / R if R > RESULTANT_EPS else np.array(FALLBACK_MEAN)

    kappa = float("inf")
    if n - R > RESULTANT_EPS:
        kappa = (n - 2) / (n - R) if n >= 3 else (n - 1) / (n - R)

    alpha95 = 0.0
    if n >= 2 and R > RESULTANT_EPS and n - R > RESULTANT_EPS:
        cos_a = 1.0 - ((n - R) / R) * (20.0 ** (1.0 / (n - 1)) - 1.0)
        alpha95 = acos(clamp(cos_a)) * INV_DEG

    return FisherStats(n=n, R=R, Rbar=Rbar, mean=mean, kappa=kappa, alpha95=alpha95)

def orientation_tensor(dcos: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """
    Normalized orientation tensor T = (1/n) sum(d_i outer d_i).

    Returns:
        A symmetric (3, 3) matrix with trace 1.

    Raises:
        ValueError: If the set is empty.
    """
    data = as_dcos_array(dcos)
    _require_data(data)
    return data.T @ data / len(data)

def principal_axes(dcos: npt.ArrayLike) -> PrincipalAxes:
    """
    Principal-axis analysis of a set of direction cosines.

    The orientation tensor is eigen-decomposed and every eigenvector with a
    positive z component is replaced by its antipode. The Woodcock ratios
    follow IEEE semantics: a zero numerator gives 0, a zero denominator gives
    inf and 0/0 gives NaN, so an undefined fabric stays distinguishable from
    a uniform one.

    Raises:
        ValueError: If the set is empty.
    """
    data = as_dcos_array(dcos)
    eigen = symmetric_eigen3(orientation_tensor(data))

    vectors = eigen.vectors.copy()
    vectors[vectors[:, 2] > 0] *= -1.0

    s1, s2, s3 = (np.float64(v) for v in eigen.values)
    with np.errstate(divide="ignore", invalid="ignore"):
        K = np.log(s1 / s2) / np.log(s2 / s3)
        C = np.log(s1 / s3)

    n = len(data)
    return PrincipalAxes(
        eigenvalues=eigen.values.copy(),
        eigenvectors=vectors,
        K=float(K),
        C=float(C),
        P=float(s1 - s2),
        G=float(2.0 * (s2 - s3)),
        R=float(3.0 * s3),
        kappa1=float(n * (s2 - s1)),
        kappa2=float(n * (s3 - s1)),
    )
