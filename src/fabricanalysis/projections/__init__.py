"""
Projection strategies. Each exposes project(unit_vector) -> (x, y) and
inverse(x, y) -> unit_vector | None together with its disk RADIUS.
"""
from fabricanalysis.projections.base import Projection, get_projection, list_projections, register_projection
from fabricanalysis.projections.equal_angle import EqualAngleProjection
from fabricanalysis.projections.equal_area import EqualAreaProjection

__all__ = [
    "Projection",
    "EqualAreaProjection",
    "EqualAngleProjection",
    "get_projection",
    "list_projections",
    "register_projection",
]
