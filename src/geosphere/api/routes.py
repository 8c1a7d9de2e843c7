"""
API routes.

Endpoints:
- POST `/api/geodesy`: dispatch one tagged geodesy request (distance, midpoint, destination, ...).
- GET  `/api/format`: render a point as degrees / deg+min / deg+min+sec.
- GET  `/api/settings`: public geodesy settings (radius, default format).
- GET  `/api/health`: liveness probe.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from geosphere.config.settings import get_settings
from geosphere.core.geo import LatLon, format_latlon
from geosphere.dispatcher.dispatch import handle_request
from geosphere.domain.models import GeoRequest, GeoResponse

router = APIRouter()


@router.get("/api/health")
def get_health() -> dict:
    return {"status": "ok"}


@router.post("/api/geodesy", response_model=GeoResponse)
def post_geodesy(request: GeoRequest) -> GeoResponse:
    """Run one geodesy request and echo its sequence number with the result."""
    settings = get_settings()
    try:
        return handle_request(request, settings=settings)
    except ValueError as e:
        raise HTTPException(
            status_code=400,
            detail={"code": "VALIDATION_ERROR", "message": str(e)},
        ) from e
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail={"code": "INTERNAL_ERROR", "message": str(e)},
        ) from e


@router.get("/api/format")
def get_format(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(...),
    style: str | None = Query(default=None, description="d | dm | dms"),
    dp: int | None = Query(default=None, ge=0, le=12),
) -> dict:
    """Format a point using the configured default style unless one is given."""
    settings = get_settings()
    style = style or settings.geodesy.default_format
    dp = dp if dp is not None else settings.geodesy.decimal_places
    try:
        text = format_latlon(LatLon(lat, lon), style, dp)
    except ValueError as e:
        raise HTTPException(
            status_code=400,
            detail={"code": "VALIDATION_ERROR", "message": str(e)},
        ) from e
    return {"lat": lat, "lon": lon, "style": style, "text": text}


@router.get("/api/settings")
def get_public_settings() -> dict:
    """Return the geodesy defaults a front-end needs."""
    settings = get_settings()
    return {
        "app": {"name": settings.app.name},
        "geodesy": settings.geodesy.model_dump(mode="json"),
    }
