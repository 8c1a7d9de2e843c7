"""
Angle unit conversion and wrapping.

All trigonometry in `geosphere.core` works in radians while every public value
(latitude, longitude, bearing) is in degrees. Keeping the conversions as plain
functions makes each unit change visible at the call site.
"""

from __future__ import annotations

import math


def to_radians(degrees: float) -> float:
    """Convert degrees to radians."""
    return degrees * math.pi / 180


def to_degrees(radians: float) -> float:
    """Convert radians to (signed) degrees."""
    return radians * 180 / math.pi


def wrap180(degrees: float) -> float:
    """Normalise a longitude into the range (-180, 180]."""
    if -180 < degrees <= 180:
        return degrees
    wrapped = (degrees + 540) % 360 - 180
    # (d + 540) % 360 - 180 maps +180 onto -180; keep the eastern edge instead.
    return 180.0 if wrapped == -180 else wrapped


def wrap360(degrees: float) -> float:
    """Normalise a bearing into the range [0, 360)."""
    if 0 <= degrees < 360:
        return degrees
    wrapped = degrees % 360
    # Tiny negative inputs round up to exactly 360.0 under float modulo.
    return 0.0 if wrapped == 360 else wrapped


def clamp_unit(x: float) -> float:
    """Clamp a value into [-1, 1] before `asin`/`acos` (guards rounding drift)."""
    return max(-1.0, min(1.0, x))
