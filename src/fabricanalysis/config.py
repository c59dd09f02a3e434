"""
Numerical Configuration
=======================
This module serves as the central registry for tolerances and defaults.

Why is this file needed?
------------------------
1. Consistency: Every degenerate-case check (parallel planes, null resultant,
   diagonal tensor) compares against the same named threshold.
2. Defaults: Contouring defaults live in one place so the analysis state and
   the contouring entry point agree.

Exports:
    CROSS_EPS (float): Cross-product length below which two directions are parallel.
    DEFAULT_GRID_SIZE (int): Grid cells per side for density contouring.
    DEFAULT_LEVELS (tuple): Contour levels in multiples of uniform density.
"""

# Degenerate geometry
CROSS_EPS: float = 1e-10
RESULTANT_EPS: float = 1e-10
FALLBACK_MEAN: tuple[float, float, float] = (0.0, 0.0, -1.0)

# Eigendecomposition
DIAGONAL_EPS: float = 1e-30
NULL_VECTOR_EPS: float = 1e-14

# Contouring
DEFAULT_PROJECTION: str = "equal-area"
DEFAULT_GRID_SIZE: int = 40
DEFAULT_LEVELS: tuple[float, ...] = (2.0, 4.0, 6.0, 8.0)
DEFAULT_SIGMA_NUMERATOR: float = 90.0  # degrees, divided by sqrt(n)
DISK_TOLERANCE: float = 1.02  # cells up to 1.02 * R^2 are still evaluated
SNAP_DISTANCE: float = 1e-8
