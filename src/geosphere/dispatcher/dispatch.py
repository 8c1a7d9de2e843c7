from __future__ import annotations

# Synchronous request dispatcher.
# One `GeoRequest` maps onto exactly one call into `geosphere.core`; nothing is shared
# between requests, so callers may run any number of them concurrently.

import logging
from typing import Any, Callable, Mapping

from geosphere.config.settings import Settings, get_settings
from geosphere.core.geo import LatLon, bearing_to, destination_point, distance_to, midpoint_to
from geosphere.core.rhumb import rhumb_destination_point, rhumb_distance_to, rhumb_midpoint_to
from geosphere.domain.models import BearingData, DistanceData, GeoRequest, GeoResponse, PointData

logger = logging.getLogger(__name__)

Handler = Callable[[GeoRequest, float], DistanceData | BearingData | PointData]


def _start(request: GeoRequest) -> LatLon:
    return LatLon(float(request.lat1), float(request.lon1))  # type: ignore[arg-type]


def _end(request: GeoRequest) -> LatLon:
    return LatLon(float(request.lat2), float(request.lon2))  # type: ignore[arg-type]


def _origin(request: GeoRequest) -> LatLon:
    return LatLon(float(request.lat), float(request.lon))  # type: ignore[arg-type]


def _point(p: LatLon) -> PointData:
    return PointData(lat=p.lat, lon=p.lon)


def _distance(request: GeoRequest, radius: float) -> DistanceData:
    return DistanceData(distance=distance_to(_start(request), _end(request), radius))


def _bearing(request: GeoRequest, radius: float) -> BearingData:
    return BearingData(bearing=bearing_to(_start(request), _end(request)))


def _midpoint(request: GeoRequest, radius: float) -> PointData:
    return _point(midpoint_to(_start(request), _end(request)))


def _destination(request: GeoRequest, radius: float) -> PointData:
    return _point(destination_point(_origin(request), float(request.distance), float(request.degree), radius))  # type: ignore[arg-type]


def _rhumb_distance(request: GeoRequest, radius: float) -> DistanceData:
    return DistanceData(distance=rhumb_distance_to(_start(request), _end(request), radius))


def _rhumb_midpoint(request: GeoRequest, radius: float) -> PointData:
    return _point(rhumb_midpoint_to(_start(request), _end(request)))


def _rhumb_destination(request: GeoRequest, radius: float) -> PointData:
    return _point(
        rhumb_destination_point(_origin(request), float(request.distance), float(request.degree), radius)  # type: ignore[arg-type]
    )


HANDLERS: dict[str, Handler] = {
    "distance": _distance,
    "bearing": _bearing,
    "midpoint": _midpoint,
    "destination": _destination,
    "rhumb_distance": _rhumb_distance,
    "rhumb_midpoint": _rhumb_midpoint,
    "rhumb_destination": _rhumb_destination,
}


def handle_request(request: GeoRequest | Mapping[str, Any], *, settings: Settings | None = None) -> GeoResponse:
    """Run one geodesy request and return its tagged result.

    Raw mappings (e.g. a decoded JSON message) are validated into `GeoRequest` first, so a
    malformed message raises `pydantic.ValidationError` (a `ValueError`).
    """
    if not isinstance(request, GeoRequest):
        request = GeoRequest.model_validate(request)
    settings = settings or get_settings()

    # A per-request radius wins over the configured earth radius.
    radius = float(request.radius or settings.geodesy.earth_radius_m)
    data = HANDLERS[request.action](request, radius)

    logger.info("Dispatched geodesy request nr=%s action=%s", request.nr, request.action)
    return GeoResponse(nr=request.nr, data=data)
