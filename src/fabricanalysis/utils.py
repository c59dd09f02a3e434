from __future__ import annotations

from math import pi

DEG = pi / 180.0
INV_DEG = 180.0 / pi


def clamp(value: float, lower: float = -1.0, upper: float = 1.0) -> float:
    """Clamp a value into [lower, upper]."""
    return max(lower, min(upper, value))

def wrap_azimuth(angle: float) -> float:
    """Wrap an azimuth in degrees into [0, 360)."""
    return angle % 360.0

def angle_diff(a: float, b: float) -> float:
    """Signed shortest angular difference b - a in degrees, in [-180, 180]."""
    d = wrap_azimuth(b - a)
    if d > 180.0:
        d -= 360.0
    return d
