"""Wulff stereographic (equal-angle) projection of the lower hemisphere."""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np

from fabricanalysis.projections.base import Projection, register_projection

if TYPE_CHECKING:
    import numpy.typing as npt

    from fabricanalysis.core.vec3 import Vec3Like


@register_projection
class EqualAngleProjection(Projection):
    """Lower hemisphere maps onto the unit disk."""
    NAME = "equal-angle"
    RADIUS = 1.0

    def project(self, dcos: Vec3Like) -> tuple[float, float]:
        x, y, z = (float(c) for c in dcos)
        if z > 0:
            x, y, z = -x, -y, -z
        denom = 1.0 - z
        return x / denom, y / denom

    def inverse(self, px: float, py: float) -> Optional[npt.NDArray[np.float64]]:
        r2 = px * px + py * py
        if r2 > 1.0:
            return None
        denom = 1.0 + r2
        return np.array([2.0 * px / denom, 2.0 * py / denom, -(1.0 - r2) / denom])
