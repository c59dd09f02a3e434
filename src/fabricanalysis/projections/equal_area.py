"""Schmidt-Lambert equal-area projection of the lower hemisphere."""
from __future__ import annotations

from math import sqrt
from typing import TYPE_CHECKING, Optional

import numpy as np

from fabricanalysis.projections.base import Projection, register_projection

if TYPE_CHECKING:
    import numpy.typing as npt

    from fabricanalysis.core.vec3 import Vec3Like


@register_projection
class EqualAreaProjection(Projection):
    """Lower hemisphere maps onto the disk of radius sqrt(2)."""
    NAME = "equal-area"
    RADIUS = sqrt(2.0)

    def project(self, dcos: Vec3Like) -> tuple[float, float]:
        x, y, z = (float(c) for c in dcos)
        if z > 0:
            x, y, z = -x, -y, -z
        s = sqrt(2.0 / (1.0 - z))  # z <= 0, so the denominator is >= 1
        return x * s, y * s

    def inverse(self, px: float, py: float) -> Optional[npt.NDArray[np.float64]]:
        r2 = px * px + py * py
        if r2 > 2.0:
            return None
        s = sqrt(1.0 - r2 / 4.0)
        return np.array([px * s, py * s, -(1.0 - r2 / 2.0)])
