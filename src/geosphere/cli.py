"""
geosphere CLI entrypoint.

Quick command-line access to every spherical and rhumb-line operation, e.g.:

    geosphere distance 52.205 0.119 48.857 2.351
    geosphere destination 51.4778 -0.0015 --distance 7794 --bearing 300.7

Coordinates accept signed decimals or degree/minute/second strings (`51°28′40″N`).
"""

from __future__ import annotations

import argparse
import json
from typing import Any

from geosphere.config.settings import Settings, get_settings
from geosphere.core import geo, rhumb
from geosphere.core.dms import compass_point, parse_dms, to_bearing
from geosphere.core.geo import LatLon, format_latlon
from geosphere.core.logging import configure_logging


def _angle(text: str) -> float:
    """argparse `type=` for angles given as decimals or DMS strings."""
    try:
        return parse_dms(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _radius(args: argparse.Namespace, settings: Settings) -> float:
    return float(args.radius) if args.radius is not None else settings.geodesy.earth_radius_m


def _p1(args: argparse.Namespace) -> LatLon:
    return LatLon(args.lat1, args.lon1)


def _p2(args: argparse.Namespace) -> LatLon:
    return LatLon(args.lat2, args.lon2)


def _emit_point(args: argparse.Namespace, settings: Settings, point: LatLon | None) -> int:
    if args.json:
        payload = None if point is None else {"lat": point.lat, "lon": point.lon}
        print(json.dumps(payload))
        return 0
    if point is None:
        print("none")
        return 0
    style = args.format or settings.geodesy.default_format
    print(format_latlon(point, style, args.dp if args.dp is not None else settings.geodesy.decimal_places))
    return 0


def _emit_value(args: argparse.Namespace, key: str, value: float, text: str) -> int:
    if args.json:
        print(json.dumps({key: value}))
    else:
        print(text)
    return 0


def _emit_bearing(args: argparse.Namespace, value: float) -> int:
    return _emit_value(args, "bearing", value, f"{to_bearing(value, 'd', 1)} ({compass_point(value)})")


def _cmd_distance(args: argparse.Namespace, settings: Settings) -> int:
    d = geo.distance_to(_p1(args), _p2(args), _radius(args, settings))
    return _emit_value(args, "distance", d, f"{d:.1f}")


def _cmd_bearing(args: argparse.Namespace, settings: Settings) -> int:
    return _emit_bearing(args, geo.bearing_to(_p1(args), _p2(args)))


def _cmd_final_bearing(args: argparse.Namespace, settings: Settings) -> int:
    return _emit_bearing(args, geo.final_bearing_to(_p1(args), _p2(args)))


def _cmd_midpoint(args: argparse.Namespace, settings: Settings) -> int:
    return _emit_point(args, settings, geo.midpoint_to(_p1(args), _p2(args)))


def _cmd_intermediate(args: argparse.Namespace, settings: Settings) -> int:
    return _emit_point(args, settings, geo.intermediate_point_to(_p1(args), _p2(args), args.fraction))


def _cmd_destination(args: argparse.Namespace, settings: Settings) -> int:
    p = geo.destination_point(_p1(args), args.distance, args.bearing, _radius(args, settings))
    return _emit_point(args, settings, p)


def _cmd_intersection(args: argparse.Namespace, settings: Settings) -> int:
    p = geo.intersection(_p1(args), args.bearing1, _p2(args), args.bearing2)
    return _emit_point(args, settings, p)


def _cmd_cross_track(args: argparse.Namespace, settings: Settings) -> int:
    point = LatLon(args.lat, args.lon)
    d = geo.cross_track_distance_to(point, _p1(args), _p2(args), _radius(args, settings))
    return _emit_value(args, "distance", d, f"{d:.1f}")


def _cmd_max_latitude(args: argparse.Namespace, settings: Settings) -> int:
    lat = geo.max_latitude(_p1(args), args.bearing)
    return _emit_value(args, "latitude", lat, f"{lat:.4f}")


def _cmd_crossing_parallels(args: argparse.Namespace, settings: Settings) -> int:
    crossings = geo.crossing_parallels(_p1(args), _p2(args), args.latitude)
    if args.json:
        payload = None if crossings is None else {"lon1": crossings.lon1, "lon2": crossings.lon2}
        print(json.dumps(payload))
    elif crossings is None:
        print("none")
    else:
        print(f"{crossings.lon1:.4f}, {crossings.lon2:.4f}")
    return 0


def _cmd_rhumb_distance(args: argparse.Namespace, settings: Settings) -> int:
    d = rhumb.rhumb_distance_to(_p1(args), _p2(args), _radius(args, settings))
    return _emit_value(args, "distance", d, f"{d:.1f}")


def _cmd_rhumb_bearing(args: argparse.Namespace, settings: Settings) -> int:
    return _emit_bearing(args, rhumb.rhumb_bearing_to(_p1(args), _p2(args)))


def _cmd_rhumb_destination(args: argparse.Namespace, settings: Settings) -> int:
    p = rhumb.rhumb_destination_point(_p1(args), args.distance, args.bearing, _radius(args, settings))
    return _emit_point(args, settings, p)


def _cmd_rhumb_midpoint(args: argparse.Namespace, settings: Settings) -> int:
    return _emit_point(args, settings, rhumb.rhumb_midpoint_to(_p1(args), _p2(args)))


def _cmd_format(args: argparse.Namespace, settings: Settings) -> int:
    return _emit_point(args, settings, _p1(args))


def _cmd_parse_dms(args: argparse.Namespace, settings: Settings) -> int:
    value = parse_dms(args.value)
    return _emit_value(args, "degrees", value, f"{value}")


def _add_point(parser: argparse.ArgumentParser, suffix: str = "1") -> None:
    parser.add_argument(
        f"lat{suffix}", type=_angle, help="Latitude (decimal or DMS; write southern DMS as 3°37′09″S)"
    )
    parser.add_argument(
        f"lon{suffix}", type=_angle, help="Longitude (decimal or DMS; write western DMS as 3°37′09″W)"
    )


def _add_output(parser: argparse.ArgumentParser, *, json_flag: bool = True) -> None:
    parser.add_argument("--format", choices=["d", "dm", "dms"], default=None, help="Point output style")
    parser.add_argument("--dp", type=int, default=None, help="Decimal places for point output")
    if json_flag:
        parser.add_argument("--json", action="store_true", help="Output machine-readable JSON")


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the geosphere CLI."""
    parser = argparse.ArgumentParser(
        prog="geosphere",
        epilog=(
            "Negative decimals such as -3.6 are accepted as-is. A DMS value with a leading '-' "
            "looks like an option to argparse: use a hemisphere letter (3°37′09″W) instead."
        ),
    )
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    sub = parser.add_subparsers(dest="command", required=True)

    def command(name: str, func: Any, help_text: str, *, points: int = 2, radius: bool = False):
        p = sub.add_parser(name, help=help_text)
        _add_point(p, "1")
        if points == 2:
            _add_point(p, "2")
        if radius:
            p.add_argument("--radius", type=float, default=None, help="Sphere radius (default: configured earth radius)")
        _add_output(p)
        p.set_defaults(func=func)
        return p

    command("distance", _cmd_distance, "Great-circle distance (haversine).", radius=True)
    command("bearing", _cmd_bearing, "Initial great-circle bearing.")
    command("final-bearing", _cmd_final_bearing, "Final great-circle bearing on arrival.")
    command("midpoint", _cmd_midpoint, "Great-circle midpoint.")

    inter = command("intermediate", _cmd_intermediate, "Point at a fraction along the great circle.")
    inter.add_argument("--fraction", type=float, required=True, help="0 = first point, 1 = second point")

    dest = command("destination", _cmd_destination, "Destination for a distance and initial bearing.", points=1, radius=True)
    dest.add_argument("--distance", type=float, required=True)
    dest.add_argument("--bearing", type=_angle, required=True)

    ix = command("intersection", _cmd_intersection, "Intersection of two point+bearing paths.")
    ix.add_argument("--bearing1", type=_angle, required=True)
    ix.add_argument("--bearing2", type=_angle, required=True)

    xt = command("cross-track", _cmd_cross_track, "Signed distance from a point to the path start->end.", radius=True)
    xt.add_argument("--lat", type=_angle, required=True, help="Latitude of the off-path point")
    xt.add_argument("--lon", type=_angle, required=True, help="Longitude of the off-path point")

    ml = command("max-latitude", _cmd_max_latitude, "Clairaut maximum latitude for a bearing.", points=1)
    ml.add_argument("--bearing", type=_angle, required=True)

    cp = command("crossing-parallels", _cmd_crossing_parallels, "Longitudes where a great circle crosses a latitude.")
    cp.add_argument("--latitude", type=_angle, required=True)

    command("rhumb-distance", _cmd_rhumb_distance, "Rhumb-line distance.", radius=True)
    command("rhumb-bearing", _cmd_rhumb_bearing, "Rhumb-line (constant) bearing.")
    command("rhumb-midpoint", _cmd_rhumb_midpoint, "Rhumb-line midpoint.")

    rd = command("rhumb-destination", _cmd_rhumb_destination, "Rhumb-line destination.", points=1, radius=True)
    rd.add_argument("--distance", type=float, required=True)
    rd.add_argument("--bearing", type=_angle, required=True)

    fmt = sub.add_parser("format", help="Format a point as d / dm / dms.")
    _add_point(fmt, "1")
    _add_output(fmt, json_flag=False)
    fmt.set_defaults(func=_cmd_format, json=False)

    pd = sub.add_parser("parse-dms", help="Parse a DMS string into decimal degrees.")
    pd.add_argument("value")
    pd.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    pd.set_defaults(func=_cmd_parse_dms)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m geosphere.cli`."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    settings = get_settings()
    func: Any = getattr(args, "func")
    try:
        return int(func(args, settings))
    except ValueError as e:
        parser.error(str(e))


if __name__ == "__main__":
    raise SystemExit(main())
