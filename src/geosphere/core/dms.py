"""
Degrees/minutes/seconds formatting and parsing.

Renders a decimal-degree value as:
- `d`   -> `051.4778°`
- `dm`  -> `051°28.67′`
- `dms` -> `051°28′40″`

Latitudes drop the leading pad digit and get an `N`/`S` suffix, longitudes keep three
integer digits and get `E`/`W`. `parse_dms` reverses the process for user input.
"""

from __future__ import annotations

import math
import re
from typing import Literal

DmsStyle = Literal["d", "dm", "dms"]

# Placed between the degree/minute/second components and before the hemisphere letter.
SEPARATOR = ""

_STYLE_ALIASES: dict[str, DmsStyle] = {
    "d": "d",
    "deg": "d",
    "dm": "dm",
    "deg+min": "dm",
    "dms": "dms",
    "deg+min+sec": "dms",
}

_DEFAULT_DECIMAL_PLACES: dict[DmsStyle, int] = {"d": 4, "dm": 2, "dms": 0}

_CARDINALS = [
    "N", "NNE", "NE", "ENE",
    "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW",
    "W", "WNW", "NW", "NNW",
]


def normalize_style(style: str) -> DmsStyle:
    """Map a style name (or long alias such as `deg+min`) onto `d`, `dm` or `dms`."""
    key = str(style).strip().lower()
    if key not in _STYLE_ALIASES:
        raise ValueError(f"Unknown angle format '{style}'; expected one of d, dm, dms.")
    return _STYLE_ALIASES[key]


def default_decimal_places(style: str) -> int:
    """Decimal places used when the caller does not specify any (4 for d, 2 for dm, 0 for dms)."""
    return _DEFAULT_DECIMAL_PLACES[normalize_style(style)]


def _fixed(value: float, dp: int) -> str:
    return f"{value:.{dp}f}"


def _pad(text: str, width: int) -> str:
    # Zero-pad the integer part of an already-rounded number to 2 or 3 digits.
    value = float(text)
    if width >= 3 and value < 100:
        text = "0" + text
    if value < 10:
        text = "0" + text
    return text


def to_dms(deg: float, style: str = "dms", dp: int | None = None) -> str | None:
    """Format an unsigned angle; returns None when `deg` is not a finite number."""
    try:
        deg = float(deg)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(deg):
        return None

    fmt = normalize_style(style)
    places = _DEFAULT_DECIMAL_PLACES[fmt] if dp is None else int(dp)
    deg = abs(deg)

    if fmt == "d":
        return _pad(_fixed(deg, places), 3) + "°"

    if fmt == "dm":
        total_min = float(_fixed(deg * 60, places))
        d = math.floor(total_min / 60)
        m = _fixed(total_min % 60, places)
        return f"{d:03d}°{SEPARATOR}{_pad(m, 2)}′"

    total_sec = float(_fixed(deg * 3600, places))
    d = math.floor(total_sec / 3600)
    m = math.floor(total_sec / 60) % 60
    s = _fixed(total_sec % 60, places)
    return f"{d:03d}°{SEPARATOR}{m:02d}′{SEPARATOR}{_pad(s, 2)}″"


def to_lat(deg: float, style: str = "dms", dp: int | None = None) -> str:
    """Format a latitude with a hemisphere suffix, e.g. `52°12′18″N`."""
    lat = to_dms(deg, style, dp)
    if lat is None:
        return "–"
    return lat[1:] + SEPARATOR + ("S" if float(deg) < 0 else "N")


def to_lon(deg: float, style: str = "dms", dp: int | None = None) -> str:
    """Format a longitude with a hemisphere suffix, e.g. `000°07′08″E`."""
    lon = to_dms(deg, style, dp)
    if lon is None:
        return "–"
    return lon + SEPARATOR + ("W" if float(deg) < 0 else "E")


def to_bearing(deg: float, style: str = "dms", dp: int | None = None) -> str:
    """Format a bearing in [0, 360) degrees."""
    try:
        deg = (float(deg) + 360) % 360
    except (TypeError, ValueError):
        return "–"
    brng = to_dms(deg, style, dp)
    if brng is None:
        return "–"
    return brng.replace("360", "0")


def compass_point(bearing: float, precision: int = 3) -> str:
    """Return the compass point (to 1, 2 or 3 letters) for a bearing."""
    if precision not in (1, 2, 3):
        raise ValueError("precision must be 1, 2 or 3")
    bearing = float(bearing) % 360
    n = 4 * 2 ** (precision - 1)
    index = math.floor(bearing * n / 360 + 0.5) % n
    return _CARDINALS[index * 16 // n]


_HEMISPHERE_SUFFIX = re.compile(r"[NSEW]$", re.IGNORECASE)
_NEGATIVE = re.compile(r"^-|[WS]$", re.IGNORECASE)
_NON_NUMERIC = re.compile(r"[^0-9.]+")


def parse_dms(value: str | float) -> float:
    """Parse a signed decimal or a degrees/minutes/seconds string into decimal degrees.

    Accepted forms include `-3.62`, `3° 37′ 09″W`, `3 37 9 W`, `51°28.67′N`. Any run of
    non-numeric characters separates the components; a leading `-` or a trailing
    `S`/`W` makes the result negative.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value):
            raise ValueError(f"Not a finite angle: {value!r}")
        return float(value)

    text = str(value).strip()
    body = _HEMISPHERE_SUFFIX.sub("", text.lstrip("-")).strip()
    parts = [p for p in _NON_NUMERIC.split(body) if p]
    if not parts or len(parts) > 3:
        raise ValueError(f"Unrecognised angle: {value!r}")

    try:
        numbers = [float(p) for p in parts]
    except ValueError as e:
        raise ValueError(f"Unrecognised angle: {value!r}") from e

    deg = numbers[0]
    if len(numbers) > 1:
        deg += numbers[1] / 60
    if len(numbers) > 2:
        deg += numbers[2] / 3600

    if _NEGATIVE.search(text):
        deg = -deg
    return deg
