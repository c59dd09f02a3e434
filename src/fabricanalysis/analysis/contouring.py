"""
Density Contouring
==================
Kernel density estimation on the sphere and contour extraction.

Why is this file needed?
------------------------
1. Density: It evaluates an exponential (Fisher) kernel density, in multiples
   of uniform density (MUD), on a regular grid laid over the projection disk.
2. Contours: It runs marching squares on that grid for every requested level
   and chains the raw segments into polylines.

All coordinates are projected coordinates (radius sqrt(2) for equal-area,
1 for equal-angle), never pixels.

Note: This module is pure NumPy and owns no state between calls.
"""
from __future__ import annotations

import logging
from math import cos, sqrt
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from fabricanalysis.analysis.statistics import as_dcos_array
from fabricanalysis.config import (
    DEFAULT_GRID_SIZE,
    DEFAULT_LEVELS,
    DEFAULT_PROJECTION,
    DEFAULT_SIGMA_NUMERATOR,
    DISK_TOLERANCE,
    SNAP_DISTANCE,
)
from fabricanalysis.core.mat3 import as_mat3
from fabricanalysis.model.primitives import ContourLevel
from fabricanalysis.projections import Projection, get_projection
from fabricanalysis.utils import DEG

if TYPE_CHECKING:
    import numpy.typing as npt

    Point2D = tuple[float, float]
    Segment = tuple[Point2D, Point2D]

logger = logging.getLogger(__name__)


def compute_contours(
    dcos: npt.ArrayLike,
    projection: str | Projection = DEFAULT_PROJECTION,
    rotation: Optional[npt.ArrayLike] = None,
    grid_size: int = DEFAULT_GRID_SIZE,
    levels: Sequence[float] = DEFAULT_LEVELS,
    sigma: Optional[float] = None,
) -> list[ContourLevel]:
    """
    Compute density contour paths for a set of direction cosines.

    Args:
        dcos: (n, 3) unit vectors (lower hemisphere).
        projection: Projection name or instance.
        rotation: Optional (3, 3) rotation matrix applied to the data first.
        grid_size: Grid nodes per side.
        levels: Density levels in MUD.
        sigma: Kernel half-width in degrees. Defaults to 90 / sqrt(n).

    Returns:
        One ContourLevel per requested level, in request order.
    """
    data = as_dcos_array(dcos)
    n = len(data)
    if n == 0:
        return [ContourLevel(level=level, paths=[]) for level in levels]

    proj = get_projection(projection)
    sigma_deg = sigma if sigma is not None else DEFAULT_SIGMA_NUMERATOR / sqrt(n)
    kappa = 1.0 / (1.0 - cos(sigma_deg * DEG))

    if rotation is not None:
        data = data @ as_mat3(rotation).T

    grid = density_grid(data, proj, grid_size, kappa)
    step = 2.0 * proj.RADIUS / (grid_size - 1)
    logger.debug(
        f"Density grid {grid_size}x{grid_size} ({proj.NAME}) for {n} directions, "
        f"sigma={sigma_deg:.3f} deg, kappa={kappa:.3f}"
    )

    result = []
    for level in levels:
        segments = marching_squares(grid, step, proj.RADIUS, level)
        paths = assemble_segments(segments)
        logger.debug(f"Level {level}: {len(segments)} segments -> {len(paths)} paths")
        result.append(ContourLevel(level=level, paths=paths))
    return result


def density_grid(
    data: npt.NDArray[np.float64],
    projection: Projection,
    grid_size: int,
    kappa: float,
) -> npt.NDArray[np.float64]:
    """
    Evaluate the kernel density on a square grid spanning [-R, R]^2.

    Row j sits at py = R - j*step (top row first), column i at
    px = -R + i*step. Cells outside the disk, or whose inverse projection
    fails, are NaN; zero is a valid density.

    Args:
        data: (n, 3) unit vectors already in the view frame, n >= 1.
        projection: Projection providing RADIUS and inverse().
        grid_size: Grid nodes per side, at least 2.
        kappa: Kernel concentration 1 / (1 - cos(sigma)).

    Returns:
        Array of shape (grid_size, grid_size) in MUD.
    """
    if grid_size < 2:
        raise ValueError(f"grid_size must be at least 2, got {grid_size}.")

    radius = projection.RADIUS
    step = 2.0 * radius / (grid_size - 1)
    grid = np.full((grid_size, grid_size), np.nan, dtype=np.float64)

    for j in range(grid_size):
        py = radius - j * step
        for i in range(grid_size):
            px = -radius + i * step
            if px * px + py * py > radius * radius * DISK_TOLERANCE:
                continue

            d = projection.inverse(px, py)
            if d is None:
                continue

            # MUD ~ kappa/n * sum(exp(kappa * (cos(theta) - 1)))
            grid[j, i] = kappa * np.exp(kappa * (data @ d - 1.0)).sum() / len(data)

    return grid


# ------------------------------------------------------------------------------
# Marching squares
# ------------------------------------------------------------------------------
def marching_squares(
    grid: npt.NDArray[np.float64],
    step: float,
    radius: float,
    level: float,
) -> list[Segment]:
    """
    Extract raw contour segments for one level.

    Corners are coded TL=8, TR=4, BR=2, BL=1 (bit set when density >= level).
    The saddle codes 5 and 10 are resolved with the mean of the four corners;
    a mean exactly equal to the level counts as above it.

    Returns:
        List of ((x1, y1), (x2, y2)) segments in projected coordinates.
    """
    size = grid.shape[0]
    segments: list[Segment] = []

    def lerp(va: float, vb: float, pa: float, pb: float) -> float:
        return pa + (level - va) / (vb - va) * (pb - pa)

    for j in range(size - 1):
        for i in range(size - 1):
            v_tl = grid[j, i]
            v_tr = grid[j, i + 1]
            v_bl = grid[j + 1, i]
            v_br = grid[j + 1, i + 1]

            if np.isnan(v_tl) or np.isnan(v_tr) or np.isnan(v_bl) or np.isnan(v_br):
                continue

            code = ((8 if v_tl >= level else 0)
                    | (4 if v_tr >= level else 0)
                    | (2 if v_br >= level else 0)
                    | (1 if v_bl >= level else 0))

            if code == 0 or code == 15:
                continue

            x0 = -radius + i * step
            x1 = x0 + step
            y0 = radius - j * step  # top row
            y1 = y0 - step

            # each edge used below is crossed by the level, so its corners differ
            def top() -> Point2D:
                return lerp(v_tl, v_tr, x0, x1), y0

            def bottom() -> Point2D:
                return lerp(v_bl, v_br, x0, x1), y1

            def left() -> Point2D:
                return x0, lerp(v_tl, v_bl, y0, y1)

            def right() -> Point2D:
                return x1, lerp(v_tr, v_br, y0, y1)

            if code in (1, 14):
                segments.append((bottom(), left()))
            elif code in (2, 13):
                segments.append((right(), bottom()))
            elif code in (3, 12):
                segments.append((right(), left()))
            elif code in (4, 11):
                segments.append((top(), right()))
            elif code in (6, 9):
                segments.append((top(), bottom()))
            elif code in (7, 8):
                segments.append((top(), left()))
            elif code == 5:
                centre = (v_tl + v_tr + v_bl + v_br) / 4.0
                if centre >= level:
                    segments.append((left(), top()))
                    segments.append((bottom(), right()))
                else:
                    segments.append((bottom(), left()))
                    segments.append((top(), right()))
            elif code == 10:
                centre = (v_tl + v_tr + v_bl + v_br) / 4.0
                if centre >= level:
                    segments.append((top(), right()))
                    segments.append((left(), bottom()))
                else:
                    segments.append((top(), left()))
                    segments.append((right(), bottom()))

    return segments


# ------------------------------------------------------------------------------
# Segment assembly
# ------------------------------------------------------------------------------
def _close(a: Point2D, b: Point2D) -> bool:
    return abs(a[0] - b[0]) < SNAP_DISTANCE and abs(a[1] - b[1]) < SNAP_DISTANCE

def assemble_segments(segments: Sequence[Segment]) -> list[npt.NDArray[np.float64]]:
    """
    Chain raw segments into connected polylines.

    Starting from the first unused segment, the path is extended at its tail
    and then at its head with any unused segment sharing an endpoint (within
    the snap distance). Every segment is consumed once. Closed contours are
    the paths whose first and last points coincide.

    Returns:
        List of (m, 2) arrays.
    """
    used = [False] * len(segments)
    paths: list[npt.NDArray[np.float64]] = []

    for s, (start, end) in enumerate(segments):
        if used[s]:
            continue
        used[s] = True
        path: list[Point2D] = [start, end]

        extended = True
        while extended:
            extended = False
            tail = path[-1]
            for k, (a, b) in enumerate(segments):
                if used[k]:
                    continue
                if _close(tail, a):
                    path.append(b)
                elif _close(tail, b):
                    path.append(a)
                else:
                    continue
                used[k] = True
                extended = True
                break

        extended = True
        while extended:
            extended = False
            head = path[0]
            for k, (a, b) in enumerate(segments):
                if used[k]:
                    continue
                if _close(head, b):
                    path.insert(0, a)
                elif _close(head, a):
                    path.insert(0, b)
                else:
                    continue
                used[k] = True
                extended = True
                break

        paths.append(np.array(path, dtype=np.float64))

    return paths
