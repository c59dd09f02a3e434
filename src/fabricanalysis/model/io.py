"""
Attitude Text Parsing
=====================
Turns free-text attitude notation into numeric angles and direction cosines.

Supported notation:
    - Azimuths as plain numbers ("120") or quadrant bearings ("N45E", "S30W").
    - Dips as plain numbers ("45") or with a dip quadrant ("45NE").
    - Dip-direction/dip (default) or strike/dip (right-hand rule, or resolved
      by the dip quadrant) conventions.
    - Text blocks with one attitude per line, delimited by '/', ',', spaces or
      tabs. Blank lines and '#' comments are ignored.

Single-token parsers raise ValueError naming the offending token. The block
parsers skip lines they cannot read and log them at DEBUG level.
"""
from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

import numpy as np

from fabricanalysis.core.conversions import line_to_dcos, plane_to_dcos
from fabricanalysis.utils import angle_diff, wrap_azimuth

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")
_QUADRANT_BEARING_RE = re.compile(r"^([NS])(\d+(?:\.\d+)?)([EW])?$")
_DIP_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*([NESW]{0,2})$")
_DELIMITER_RE = re.compile(r"[/,\s]+")
_LEADING_NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)")

QUADRANT_AZIMUTHS: dict[str, float] = {
    "N": 0.0, "NE": 45.0, "E": 90.0, "SE": 135.0,
    "S": 180.0, "SW": 225.0, "W": 270.0, "NW": 315.0,
}


def parse_direction(token: str) -> float:
    """
    Parse an azimuth token into degrees in [0, 360).

    Args:
        token: Plain number ("120") or quadrant bearing ("N45E", "S30W", "N10").

    Raises:
        ValueError: If the token is neither.

    Returns:
        The azimuth in degrees.
    """
    s = token.strip().upper()

    if _NUMBER_RE.match(s):
        return wrap_azimuth(float(s))

    m = _QUADRANT_BEARING_RE.match(s)
    if not m:
        raise ValueError(f"Cannot parse direction: '{token}'")

    origin, value, towards = m.group(1), float(m.group(2)), m.group(3) or ""
    if origin == "N":
        if towards == "W":
            return (360.0 - value) % 360.0
        return value
    if towards == "W":
        return 180.0 + value
    # "S30E" and a bare "S30" both measure east of south
    return 180.0 - value

def parse_dip(token: str) -> tuple[float, str]:
    """
    Parse a dip token into (dip, quadrant).

    "45" -> (45.0, ""), "45NE" -> (45.0, "NE").

    Raises:
        ValueError: If the token is malformed.
    """
    s = token.strip().upper()
    m = _DIP_RE.match(s)
    if not m:
        raise ValueError(f"Cannot parse dip: '{token}'")
    return float(m.group(1)), m.group(2) or ""

def quadrant_to_azimuth(quadrant: str) -> float:
    """Azimuth of a one- or two-letter cardinal quadrant ("NE", "W", ...)."""
    try:
        return QUADRANT_AZIMUTHS[quadrant]
    except KeyError:
        raise ValueError(f"Unknown dip quadrant: '{quadrant}'") from None

def translate_attitude(direction: float, dip: float, quadrant: str = "", strike: bool = False) -> tuple[float, float]:
    """
    Translate a parsed direction and dip into (dip direction, dip).

    Args:
        direction: Parsed azimuth in degrees.
        dip: Dip in degrees.
        quadrant: Dip quadrant ("" or a cardinal such as "NE").
        strike: Interpret `direction` as a strike instead of a dip direction.

    Returns:
        (dip direction, dip) in degrees. In strike mode without a quadrant the
        right-hand rule applies; with a quadrant the side of the strike closest
        to it wins (ties go to strike + 90).
    """
    if not strike:
        return wrap_azimuth(direction), dip

    if not quadrant:
        return wrap_azimuth(direction + 90.0), dip

    target = quadrant_to_azimuth(quadrant)
    right_hand = wrap_azimuth(direction + 90.0)
    left_hand = wrap_azimuth(direction - 90.0)

    if abs(angle_diff(right_hand, target)) <= abs(angle_diff(left_hand, target)):
        return right_hand, dip
    return left_hand, dip


def _data_lines(text: str):
    """Yield (line number, tokens) for each non-blank, non-comment line with two tokens or more."""
    for number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        parts = [p for p in _DELIMITER_RE.split(line) if p]
        if len(parts) < 2:
            logger.debug(f"Skipping line {number}: expected two values, got '{line}'")
            continue
        yield number, parts

def _leading_number(token: str) -> float:
    """Numeric prefix of a token ("45NE" -> 45.0); ValueError if it has none."""
    match = _LEADING_NUMBER_RE.match(token)
    if match is None:
        raise ValueError(f"No leading number in '{token}'")
    return float(match.group(0))

def parse(text: str) -> list[tuple[float, float]]:
    """
    Parse a text block into raw (direction, dip) number pairs.

    Only the numeric prefix of each value is read, so "120 45NE" gives
    (120.0, 45.0) with the quadrant letters dropped. parse_planes resolves
    quadrants.
    """
    results: list[tuple[float, float]] = []
    for number, parts in _data_lines(text):
        try:
            results.append((_leading_number(parts[0]), _leading_number(parts[1])))
        except ValueError:
            logger.debug(f"Skipping line {number}: non-numeric values {parts[:2]}")
    return results

def parse_planes(text: str, strike: bool = False) -> npt.NDArray[np.float64]:
    """
    Parse a text block of plane attitudes into pole direction cosines.

    Args:
        text: One attitude per line; azimuths may use quadrant notation and
              dips may carry a dip quadrant.
        strike: Treat the first column as strike.

    Returns:
        Array of shape (n, 3).
    """
    poles = []
    for number, parts in _data_lines(text):
        try:
            direction = parse_direction(parts[0])
            dip, quadrant = parse_dip(parts[1])
            dd, dip = translate_attitude(direction, dip, quadrant, strike)
        except ValueError as e:
            logger.debug(f"Skipping line {number}: {e}")
            continue
        poles.append(plane_to_dcos(dd, dip))
    return np.array(poles, dtype=np.float64).reshape(-1, 3)

def parse_lines(text: str) -> npt.NDArray[np.float64]:
    """Parse a text block of (trend, plunge) lines into direction cosines, shape (n, 3)."""
    lines = [line_to_dcos(trend, plunge) for trend, plunge in parse(text)]
    return np.array(lines, dtype=np.float64).reshape(-1, 3)
