"""
Great-circle geodesy on a spherical earth.

Every function here is a closed-form formula over one or two `LatLon` points:
- distance / initial and final bearing / midpoint / intermediate point
- destination point for a distance and initial bearing
- intersection of two paths, cross-track distance
- Clairaut maximum latitude and crossings of a parallel

Angles are degrees at the boundary and radians inside. Longitudes of computed points
are normalised into (-180, 180], bearings into [0, 360). Distances come back in the
unit of `radius` (metres by default).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from geosphere.core.angles import clamp_unit, to_degrees, to_radians, wrap180, wrap360
from geosphere.core.dms import to_lat, to_lon
from geosphere.core.errors import InvalidArgumentTypeError

logger = logging.getLogger(__name__)

EARTH_RADIUS_M = 6_371_000.0


@dataclass(frozen=True)
class LatLon:
    """A point on the earth's surface; latitude/longitude in decimal degrees.

    Values are stored as given: latitude is expected in [-90, 90] but not checked, and
    longitude is not normalised until an operation computes a new point.
    """

    lat: float
    lon: float

    def __str__(self) -> str:
        return format_latlon(self)


@dataclass(frozen=True)
class ParallelCrossings:
    """The two longitudes at which a great circle crosses a parallel of latitude."""

    lon1: float
    lon2: float


def require_latlon(value: object, name: str = "point") -> LatLon:
    """Return `value` unchanged if it is a `LatLon`, else raise `InvalidArgumentTypeError`."""
    if not isinstance(value, LatLon):
        raise InvalidArgumentTypeError(f"{name} is not a LatLon point (got {type(value).__name__})")
    return value


def format_latlon(point: LatLon, style: str = "dms", dp: int | None = None) -> str:
    """Render a point as `lat, lon` in degrees (`d`), deg+min (`dm`) or deg+min+sec (`dms`).

    `dp` defaults to 4 for `d`, 2 for `dm` and 0 for `dms`.
    """
    require_latlon(point)
    return f"{to_lat(point.lat, style, dp)}, {to_lon(point.lon, style, dp)}"


def _angular_distance(phi1: float, lam1: float, phi2: float, lam2: float) -> float:
    # Haversine; `h` can drift just outside [0, 1] for (near-)antipodal points.
    dphi = phi2 - phi1
    dlam = lam2 - lam1
    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlam / 2) ** 2
    h = min(1.0, max(0.0, h))
    return 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def distance_to(a: LatLon, b: LatLon, radius: float = EARTH_RADIUS_M) -> float:
    """Great-circle distance between two points (haversine), in the unit of `radius`."""
    require_latlon(a, "a")
    require_latlon(b, "b")
    delta = _angular_distance(to_radians(a.lat), to_radians(a.lon), to_radians(b.lat), to_radians(b.lon))
    return float(radius) * delta


def bearing_to(a: LatLon, b: LatLon) -> float:
    """Initial bearing from `a` towards `b`, degrees from north in [0, 360)."""
    require_latlon(a, "a")
    require_latlon(b, "b")
    phi1 = to_radians(a.lat)
    phi2 = to_radians(b.lat)
    dlam = to_radians(b.lon - a.lon)

    y = math.sin(dlam) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlam)
    return wrap360(to_degrees(math.atan2(y, x)))


def final_bearing_to(a: LatLon, b: LatLon) -> float:
    """Bearing on arrival at `b` when travelling from `a` (reverse of the initial bearing b->a)."""
    require_latlon(a, "a")
    require_latlon(b, "b")
    return (bearing_to(b, a) + 180) % 360


def midpoint_to(a: LatLon, b: LatLon) -> LatLon:
    """Point half-way along the great-circle path between `a` and `b`."""
    require_latlon(a, "a")
    require_latlon(b, "b")
    phi1 = to_radians(a.lat)
    lam1 = to_radians(a.lon)
    phi2 = to_radians(b.lat)
    dlam = to_radians(b.lon - a.lon)

    bx = math.cos(phi2) * math.cos(dlam)
    by = math.cos(phi2) * math.sin(dlam)

    x = math.sqrt((math.cos(phi1) + bx) ** 2 + by * by)
    y = math.sin(phi1) + math.sin(phi2)
    phi3 = math.atan2(y, x)
    lam3 = lam1 + math.atan2(by, math.cos(phi1) + bx)

    return LatLon(to_degrees(phi3), wrap180(to_degrees(lam3)))


def intermediate_point_to(a: LatLon, b: LatLon, fraction: float) -> LatLon:
    """Point at `fraction` (0 = a, 1 = b) along the great-circle path from `a` to `b`.

    Coincident points have no defined path; the start point is returned for any fraction.
    """
    require_latlon(a, "a")
    require_latlon(b, "b")
    fraction = float(fraction)

    phi1 = to_radians(a.lat)
    lam1 = to_radians(a.lon)
    phi2 = to_radians(b.lat)
    lam2 = to_radians(b.lon)

    delta = _angular_distance(phi1, lam1, phi2, lam2)
    sin_delta = math.sin(delta)
    if sin_delta == 0:
        logger.debug("Coincident points for interpolation; returning start point %s", a)
        return LatLon(a.lat, a.lon)

    wa = math.sin((1 - fraction) * delta) / sin_delta
    wb = math.sin(fraction * delta) / sin_delta

    x = wa * math.cos(phi1) * math.cos(lam1) + wb * math.cos(phi2) * math.cos(lam2)
    y = wa * math.cos(phi1) * math.sin(lam1) + wb * math.cos(phi2) * math.sin(lam2)
    z = wa * math.sin(phi1) + wb * math.sin(phi2)

    phi3 = math.atan2(z, math.sqrt(x * x + y * y))
    lam3 = math.atan2(y, x)
    return LatLon(to_degrees(phi3), wrap180(to_degrees(lam3)))


def destination_point(a: LatLon, distance: float, bearing: float, radius: float = EARTH_RADIUS_M) -> LatLon:
    """Point reached after travelling `distance` from `a` on initial `bearing` (degrees)."""
    require_latlon(a, "a")
    delta = float(distance) / float(radius)
    theta = to_radians(float(bearing))

    phi1 = to_radians(a.lat)
    lam1 = to_radians(a.lon)

    phi2 = math.asin(
        clamp_unit(math.sin(phi1) * math.cos(delta) + math.cos(phi1) * math.sin(delta) * math.cos(theta))
    )
    x = math.cos(delta) - math.sin(phi1) * math.sin(phi2)
    y = math.sin(theta) * math.sin(delta) * math.cos(phi1)
    lam2 = lam1 + math.atan2(y, x)

    return LatLon(to_degrees(phi2), wrap180(to_degrees(lam2)))


def _acos_or_zero(numerator: float, denominator: float) -> float:
    # Out-of-domain ratios (rounding, or a zero denominator at the poles) count as angle 0.
    if denominator == 0:
        return 0.0
    ratio = numerator / denominator
    if not -1 <= ratio <= 1:
        return 0.0
    return math.acos(ratio)


def intersection(p1: LatLon, brng1: float, p2: LatLon, brng2: float) -> LatLon | None:
    """Intersection of two great-circle paths, each given by a start point and initial bearing.

    Returns None when the start points coincide, when the paths lie on the same great
    circle (infinite intersections), or when the included angles at the two start points
    have opposite signs (no consistent intersection ahead on both paths).
    """
    require_latlon(p1, "p1")
    require_latlon(p2, "p2")

    phi1 = to_radians(p1.lat)
    lam1 = to_radians(p1.lon)
    phi2 = to_radians(p2.lat)
    lam2 = to_radians(p2.lon)
    theta13 = to_radians(float(brng1))
    theta23 = to_radians(float(brng2))

    dphi = phi2 - phi1
    dlam = lam2 - lam1
    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlam / 2) ** 2
    delta12 = 2 * math.asin(math.sqrt(min(1.0, max(0.0, h))))
    if delta12 == 0:
        logger.debug("No intersection: start points coincide")
        return None

    # initial/final bearings between the two start points
    theta_a = _acos_or_zero(
        math.sin(phi2) - math.sin(phi1) * math.cos(delta12), math.sin(delta12) * math.cos(phi1)
    )
    theta_b = _acos_or_zero(
        math.sin(phi1) - math.sin(phi2) * math.cos(delta12), math.sin(delta12) * math.cos(phi2)
    )

    if math.sin(lam2 - lam1) > 0:
        theta12 = theta_a
        theta21 = 2 * math.pi - theta_b
    else:
        theta12 = 2 * math.pi - theta_a
        theta21 = theta_b

    alpha1 = math.fmod(theta13 - theta12 + math.pi, 2 * math.pi) - math.pi  # angle 2-1-3
    alpha2 = math.fmod(theta21 - theta23 + math.pi, 2 * math.pi) - math.pi  # angle 1-2-3

    # The included angles stay signed: taking abs() here breaks the ambiguity test below.
    if math.sin(alpha1) == 0 and math.sin(alpha2) == 0:
        logger.debug("No unique intersection: paths lie on the same great circle")
        return None
    if math.sin(alpha1) * math.sin(alpha2) < 0:
        logger.debug("No intersection ahead on both paths")
        return None

    alpha3 = math.acos(
        clamp_unit(-math.cos(alpha1) * math.cos(alpha2) + math.sin(alpha1) * math.sin(alpha2) * math.cos(delta12))
    )
    delta13 = math.atan2(
        math.sin(delta12) * math.sin(alpha1) * math.sin(alpha2),
        math.cos(alpha2) + math.cos(alpha1) * math.cos(alpha3),
    )
    phi3 = math.asin(
        clamp_unit(math.sin(phi1) * math.cos(delta13) + math.cos(phi1) * math.sin(delta13) * math.cos(theta13))
    )
    dlam13 = math.atan2(
        math.sin(theta13) * math.sin(delta13) * math.cos(phi1),
        math.cos(delta13) - math.sin(phi1) * math.sin(phi3),
    )
    lam3 = lam1 + dlam13

    return LatLon(to_degrees(phi3), wrap180(to_degrees(lam3)))


def cross_track_distance_to(
    point: LatLon, path_start: LatLon, path_end: LatLon, radius: float = EARTH_RADIUS_M
) -> float:
    """Signed distance from `point` to the great circle through `path_start` -> `path_end`.

    Negative when `point` is left of the path, positive when it is right of it.
    """
    require_latlon(point, "point")
    require_latlon(path_start, "path_start")
    require_latlon(path_end, "path_end")
    radius = float(radius)

    delta13 = distance_to(path_start, point, radius) / radius
    theta13 = to_radians(bearing_to(path_start, point))
    theta12 = to_radians(bearing_to(path_start, path_end))

    return math.asin(clamp_unit(math.sin(delta13) * math.sin(theta13 - theta12))) * radius


def max_latitude(point: LatLon, bearing: float) -> float:
    """Maximum latitude reached on a great circle leaving `point` on `bearing` (Clairaut).

    Negate the result for the minimum (southern-hemisphere) latitude. The value is the
    same for every point on the starting parallel.
    """
    require_latlon(point)
    theta = to_radians(float(bearing))
    phi = to_radians(point.lat)
    phi_max = math.acos(clamp_unit(abs(math.sin(theta) * math.cos(phi))))
    return to_degrees(phi_max)


def crossing_parallels(p1: LatLon, p2: LatLon, latitude: float) -> ParallelCrossings | None:
    """Longitudes where the great circle through `p1` and `p2` crosses `latitude`.

    Returns None when the great circle never reaches that latitude, or when the crossing
    is not a pair of isolated points (a meridian at a pole, the equator on itself).
    """
    require_latlon(p1, "p1")
    require_latlon(p2, "p2")
    phi = to_radians(float(latitude))

    phi1 = to_radians(p1.lat)
    lam1 = to_radians(p1.lon)
    phi2 = to_radians(p2.lat)
    lam2 = to_radians(p2.lon)
    dlam = lam2 - lam1

    x = math.sin(phi1) * math.cos(phi2) * math.cos(phi) * math.sin(dlam)
    y = (
        math.sin(phi1) * math.cos(phi2) * math.cos(phi) * math.cos(dlam)
        - math.cos(phi1) * math.sin(phi2) * math.cos(phi)
    )
    z = math.cos(phi1) * math.cos(phi2) * math.sin(phi) * math.sin(dlam)

    r2 = x * x + y * y
    if z * z > r2:
        return None  # great circle doesn't reach this latitude
    if r2 == 0:
        logger.debug("Degenerate parallel crossing for latitude %s", latitude)
        return None

    lam_max = math.atan2(-y, x)  # longitude at the maximum latitude
    dlam_i = math.acos(clamp_unit(z / math.sqrt(r2)))

    lam_i1 = lam1 + lam_max - dlam_i
    lam_i2 = lam1 + lam_max + dlam_i
    return ParallelCrossings(lon1=wrap180(to_degrees(lam_i1)), lon2=wrap180(to_degrees(lam_i2)))
