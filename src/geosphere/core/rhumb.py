"""
Rhumb-line (loxodrome) geodesy.

A rhumb line keeps a constant bearing, so on a Mercator projection it is a straight
line. The formulas below work with the isometric latitude `psi = ln(tan(pi/4 + phi/2))`,
in which the projection is conformal and longitude differences become linear.
"""

from __future__ import annotations

import logging
import math

from geosphere.core.angles import to_degrees, to_radians, wrap180, wrap360
from geosphere.core.geo import EARTH_RADIUS_M, LatLon, require_latlon

logger = logging.getLogger(__name__)

# Below this |delta psi| an E-W course makes the stretch factor 0/0; use cos(phi1) instead.
_PSI_TOLERANCE = 10e-12


def _isometric_latitude(phi: float) -> float:
    t = math.tan(math.pi / 4 + phi / 2)
    return math.log(t) if t > 0 else -math.inf


def _shorter_dlam(dlam: float) -> float:
    # Longitude difference over 180 degrees: take the shorter way across the anti-meridian.
    if abs(dlam) > math.pi:
        return -(2 * math.pi - dlam) if dlam > 0 else 2 * math.pi + dlam
    return dlam


def _stretch_factor(dphi: float, dpsi: float, phi1: float) -> float:
    if abs(dpsi) > _PSI_TOLERANCE:
        return dphi / dpsi
    return math.cos(phi1)


def rhumb_distance_to(a: LatLon, b: LatLon, radius: float = EARTH_RADIUS_M) -> float:
    """Distance from `a` to `b` along a rhumb line, in the unit of `radius`."""
    require_latlon(a, "a")
    require_latlon(b, "b")

    phi1 = to_radians(a.lat)
    phi2 = to_radians(b.lat)
    dphi = phi2 - phi1
    dlam = _shorter_dlam(to_radians(abs(b.lon - a.lon)))

    dpsi = _isometric_latitude(phi2) - _isometric_latitude(phi1)
    q = _stretch_factor(dphi, dpsi, phi1)

    # Pythagoras on the stretched Mercator projection
    delta = math.sqrt(dphi * dphi + q * q * dlam * dlam)
    return delta * float(radius)


def rhumb_bearing_to(a: LatLon, b: LatLon) -> float:
    """Constant bearing of the rhumb line from `a` to `b`, degrees in [0, 360)."""
    require_latlon(a, "a")
    require_latlon(b, "b")

    phi1 = to_radians(a.lat)
    phi2 = to_radians(b.lat)
    dlam = _shorter_dlam(to_radians(b.lon - a.lon))

    dpsi = _isometric_latitude(phi2) - _isometric_latitude(phi1)
    return wrap360(to_degrees(math.atan2(dlam, dpsi)))


def rhumb_destination_point(
    a: LatLon, distance: float, bearing: float, radius: float = EARTH_RADIUS_M
) -> LatLon:
    """Point reached after travelling `distance` from `a` along a rhumb line on `bearing`.

    A course that would run past a pole is reflected back over it rather than clamped.
    """
    require_latlon(a, "a")
    delta = float(distance) / float(radius)
    phi1 = to_radians(a.lat)
    lam1 = to_radians(a.lon)
    theta = to_radians(float(bearing))

    dphi = delta * math.cos(theta)
    phi2 = phi1 + dphi

    if abs(phi2) > math.pi / 2:
        logger.debug("Rhumb course passes a pole; reflecting latitude %s", to_degrees(phi2))
        phi2 = math.pi - phi2 if phi2 > 0 else -math.pi - phi2

    dpsi = _isometric_latitude(phi2) - _isometric_latitude(phi1)
    q = _stretch_factor(dphi, dpsi, phi1)

    # Leaving from a pole: longitude is undefined there, keep the starting meridian.
    dlam = delta * math.sin(theta) / q if q != 0 else 0.0
    lam2 = lam1 + dlam

    return LatLon(to_degrees(phi2), wrap180(to_degrees(lam2)))


def rhumb_midpoint_to(a: LatLon, b: LatLon) -> LatLon:
    """Loxodromic midpoint between `a` and `b`."""
    require_latlon(a, "a")
    require_latlon(b, "b")

    phi1 = to_radians(a.lat)
    lam1 = to_radians(a.lon)
    phi2 = to_radians(b.lat)
    lam2 = to_radians(b.lon)

    if abs(lam2 - lam1) > math.pi:
        lam1 += 2 * math.pi  # crossing anti-meridian

    phi3 = (phi1 + phi2) / 2
    psi1 = _isometric_latitude(phi1)
    psi2 = _isometric_latitude(phi2)
    psi3 = _isometric_latitude(phi3)

    denominator = psi2 - psi1
    lam3 = math.nan
    if denominator != 0:
        lam3 = ((lam2 - lam1) * psi3 + lam1 * psi2 - lam2 * psi1) / denominator

    if not math.isfinite(lam3):
        logger.debug("Rhumb midpoint along a parallel; averaging longitudes")
        lam3 = (lam1 + lam2) / 2

    return LatLon(to_degrees(phi3), wrap180(to_degrees(lam3)))
