"""Directional statistics and density contouring for structural-geology orientation data."""
from fabricanalysis.analysis.contouring import compute_contours
from fabricanalysis.analysis.statistics import (
    fisher_stats,
    mean_vector,
    orientation_tensor,
    principal_axes,
    resultant,
)
from fabricanalysis.core import conversions, curves, mat3, vec3
from fabricanalysis.core.eigen import symmetric_eigen3
from fabricanalysis.model import io
from fabricanalysis.model.primitives import ContourLevel, EigenResult, FisherStats, Line, Plane, PrincipalAxes
from fabricanalysis.model.state import AnalysisState, ContourCacheState, IdCounter
from fabricanalysis.projections import EqualAngleProjection, EqualAreaProjection, get_projection

__all__ = [
    "compute_contours",
    "fisher_stats",
    "mean_vector",
    "orientation_tensor",
    "principal_axes",
    "resultant",
    "symmetric_eigen3",
    "conversions",
    "curves",
    "mat3",
    "vec3",
    "io",
    "ContourLevel",
    "EigenResult",
    "FisherStats",
    "Line",
    "Plane",
    "PrincipalAxes",
    "AnalysisState",
    "ContourCacheState",
    "IdCounter",
    "EqualAreaProjection",
    "EqualAngleProjection",
    "get_projection",
]
