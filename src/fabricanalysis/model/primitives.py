"""
Result Records
==============
Immutable data structures produced by the numerical core.

Classes:
    Plane, Line: Attitudes in degrees.
    EigenResult: Eigenvalues (descending) and matching eigenvectors.
    FisherStats: Fisher concentration statistics of a direction set.
    PrincipalAxes: Orientation-tensor eigen-analysis and fabric parameters.
    ContourLevel: Polylines of one density level, in projected coordinates.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

import numpy as np

from fabricanalysis.core.conversions import (
    dcos_to_line,
    dcos_to_plane,
    line_to_dcos,
    plane_intersection_line,
    plane_to_dcos,
)

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class Plane:
    """A plane given by dip direction and dip, in degrees."""
    dip_direction: float
    dip: float

    @classmethod
    def from_dcos(cls, dcos: npt.ArrayLike) -> Plane:
        return cls(*dcos_to_plane(dcos))

    def to_dcos(self) -> npt.NDArray[np.float64]:
        """Direction cosines of the pole."""
        return plane_to_dcos(self.dip_direction, self.dip)

    def intersection(self, other: Plane) -> Optional[Line]:
        """Intersection line with another plane, None if parallel."""
        result = plane_intersection_line(self.dip_direction, self.dip, other.dip_direction, other.dip)
        return None if result is None else Line(*result)


@dataclass(frozen=True)
class Line:
    """A line given by trend and plunge, in degrees."""
    trend: float
    plunge: float

    @classmethod
    def from_dcos(cls, dcos: npt.ArrayLike) -> Line:
        return cls(*dcos_to_line(dcos))

    def to_dcos(self) -> npt.NDArray[np.float64]:
        return line_to_dcos(self.trend, self.plunge)


@dataclass(frozen=True)
class EigenResult:
    """
    Eigen-decomposition of a 3x3 symmetric matrix.

    `vectors[i]` is the unit eigenvector belonging to `values[i]`.
    """
    values: npt.NDArray[np.float64]
    vectors: npt.NDArray[np.float64]


@dataclass(frozen=True)
class FisherStats:
    n: int
    R: float  # resultant length
    Rbar: float  # mean resultant length, 0 = uniform, 1 = perfect cluster
    mean: npt.NDArray[np.float64]
    kappa: float  # may be inf
    alpha95: float  # degrees


@dataclass(frozen=True)
class PrincipalAxes:
    """
    Principal-axis analysis of an orientation tensor.

    Eigenvalues S1 >= S2 >= S3 sum to 1; eigenvectors are lower hemisphere.

    Woodcock: K = ln(S1/S2) / ln(S2/S3) (K > 1 cluster, K < 1 girdle),
    C = ln(S1/S3) (fabric strength).
    Vollmer: P = S1 - S2, G = 2(S2 - S3), R = 3 S3, with P + G + R = 1.
    Bingham: kappa1 = n(S2 - S1) <= 0, kappa2 = n(S3 - S1) <= kappa1.
    """
    eigenvalues: npt.NDArray[np.float64]
    eigenvectors: npt.NDArray[np.float64]
    K: float
    C: float
    P: float
    G: float
    R: float
    kappa1: float
    kappa2: float


@dataclass(frozen=True)
class ContourLevel:
    """All polylines of a single density level (MUD)."""
    level: float
    paths: list[npt.NDArray[np.float64]] = field(default_factory=list)
