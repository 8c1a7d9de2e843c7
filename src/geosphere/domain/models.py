"""
Domain models (Pydantic).

These types are the request/response contract for dispatched geodesy calls, shared by
the API, the CLI (`--json` output) and any message-based front-end:
- `GeoRequest`: an action tag, a sequence number `nr` and the numeric inputs
- `GeoResponse`: the same `nr` plus a result payload (`distance`, `bearing` or `lat`/`lon`)

The geodesy core itself works on `geosphere.core.geo.LatLon` and never sees these models.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

GeoAction = Literal[
    "distance",
    "midpoint",
    "destination",
    "bearing",
    "rhumb_distance",
    "rhumb_midpoint",
    "rhumb_destination",
]

TWO_POINT_FIELDS = ("lat1", "lon1", "lat2", "lon2")
DESTINATION_FIELDS = ("lat", "lon", "distance", "degree")

REQUIRED_FIELDS: dict[str, tuple[str, ...]] = {
    "distance": TWO_POINT_FIELDS,
    "midpoint": TWO_POINT_FIELDS,
    "bearing": TWO_POINT_FIELDS,
    "rhumb_distance": TWO_POINT_FIELDS,
    "rhumb_midpoint": TWO_POINT_FIELDS,
    "destination": DESTINATION_FIELDS,
    "rhumb_destination": DESTINATION_FIELDS,
}


class GeoRequest(BaseModel):
    """One tagged geodesy request.

    Unknown or missing actions are treated as `destination`, matching the message-based
    front-end this contract comes from.
    """

    nr: int
    action: GeoAction = "destination"

    lat1: float | None = Field(default=None, ge=-90, le=90)
    lon1: float | None = None
    lat2: float | None = Field(default=None, ge=-90, le=90)
    lon2: float | None = None

    lat: float | None = Field(default=None, ge=-90, le=90)
    lon: float | None = None
    distance: float | None = None
    degree: float | None = None

    radius: float | None = Field(default=None, gt=0)

    @field_validator("action", mode="before")
    @classmethod
    def _default_unknown_action(cls, action: object) -> str:
        key = str(action or "").strip().lower()
        return key if key in REQUIRED_FIELDS else "destination"

    @model_validator(mode="after")
    def _validate_required_fields(self) -> "GeoRequest":
        missing = [name for name in REQUIRED_FIELDS[self.action] if getattr(self, name) is None]
        if missing:
            raise ValueError(f"action '{self.action}' requires fields: {', '.join(missing)}")
        return self


class DistanceData(BaseModel):
    distance: float


class BearingData(BaseModel):
    bearing: float


class PointData(BaseModel):
    lat: float
    lon: float


class GeoResponse(BaseModel):
    """Result for a `GeoRequest`, echoing its sequence number."""

    nr: int
    data: DistanceData | BearingData | PointData
