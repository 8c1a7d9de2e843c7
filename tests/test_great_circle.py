import math

import pytest

from geosphere.core.errors import InvalidArgumentTypeError
from geosphere.core.geo import (
    EARTH_RADIUS_M,
    LatLon,
    bearing_to,
    cross_track_distance_to,
    crossing_parallels,
    destination_point,
    distance_to,
    final_bearing_to,
    intermediate_point_to,
    intersection,
    max_latitude,
    midpoint_to,
)

CAMBRIDGE = LatLon(52.205, 0.119)
PARIS = LatLon(48.857, 2.351)

SAMPLE_PAIRS = [
    (CAMBRIDGE, PARIS),
    (LatLon(0.0, 0.0), LatLon(10.0, 10.0)),
    (LatLon(-33.8688, 151.2093), LatLon(51.5074, -0.1278)),
    (LatLon(60.0, 170.0), LatLon(62.0, -175.0)),
    (LatLon(-45.0, -60.0), LatLon(-10.0, 30.0)),
]


def test_distance_cambridge_to_paris():
    assert distance_to(CAMBRIDGE, PARIS) == pytest.approx(404_300, abs=100)


def test_distance_uses_radius_unit():
    # Same angle on a sphere measured in km gives the km distance.
    assert distance_to(CAMBRIDGE, PARIS, 6371) == pytest.approx(404.3, abs=0.1)


def test_distance_to_self_is_zero():
    for a, _ in SAMPLE_PAIRS:
        assert distance_to(a, a) == pytest.approx(0.0, abs=1e-9 * EARTH_RADIUS_M)


@pytest.mark.parametrize("a,b", SAMPLE_PAIRS)
def test_distance_is_symmetric(a, b):
    assert distance_to(a, b, 1000.0) == pytest.approx(distance_to(b, a, 1000.0), rel=1e-12)


def test_bearing_cambridge_to_paris():
    assert bearing_to(CAMBRIDGE, PARIS) == pytest.approx(156.2, abs=0.1)


def test_final_bearing_cambridge_to_paris():
    assert final_bearing_to(CAMBRIDGE, PARIS) == pytest.approx(157.9, abs=0.1)


@pytest.mark.parametrize("a,b", SAMPLE_PAIRS)
def test_final_bearing_is_reversed_initial_bearing(a, b):
    assert final_bearing_to(a, b) == (bearing_to(b, a) + 180) % 360


@pytest.mark.parametrize("a,b", SAMPLE_PAIRS)
def test_bearings_are_normalised(a, b):
    for value in (bearing_to(a, b), bearing_to(b, a), final_bearing_to(a, b)):
        assert 0 <= value < 360


def test_midpoint_cambridge_to_paris():
    mid = midpoint_to(CAMBRIDGE, PARIS)
    assert mid.lat == pytest.approx(50.5363, abs=1e-3)
    assert mid.lon == pytest.approx(1.2746, abs=1e-3)


def test_midpoint_across_antimeridian_is_normalised():
    mid = midpoint_to(LatLon(0.0, 170.0), LatLon(0.0, -170.0))
    assert mid.lat == pytest.approx(0.0, abs=1e-9)
    assert abs(mid.lon) == pytest.approx(180.0, abs=1e-9)
    assert -180 < mid.lon <= 180


def test_intermediate_point_quarter_way():
    p = intermediate_point_to(CAMBRIDGE, PARIS, 0.25)
    assert p.lat == pytest.approx(51.3721, abs=1e-3)
    assert p.lon == pytest.approx(0.7073, abs=1e-3)


@pytest.mark.parametrize("a,b", SAMPLE_PAIRS)
def test_intermediate_point_endpoints(a, b):
    start = intermediate_point_to(a, b, 0.0)
    end = intermediate_point_to(a, b, 1.0)
    assert distance_to(start, a) == pytest.approx(0.0, abs=1e-3)
    assert distance_to(end, b) == pytest.approx(0.0, abs=1e-3)


def test_intermediate_point_half_way_matches_midpoint():
    half = intermediate_point_to(CAMBRIDGE, PARIS, 0.5)
    mid = midpoint_to(CAMBRIDGE, PARIS)
    assert half.lat == pytest.approx(mid.lat, abs=1e-9)
    assert half.lon == pytest.approx(mid.lon, abs=1e-9)


def test_intermediate_point_between_coincident_points_returns_start():
    p = intermediate_point_to(CAMBRIDGE, CAMBRIDGE, 0.3)
    assert p == CAMBRIDGE
    assert not math.isnan(p.lat)


def test_destination_point_greenwich():
    p = destination_point(LatLon(51.4778, -0.0015), 7794, 300.7)
    assert p.lat == pytest.approx(51.5135, abs=1e-3)
    assert p.lon == pytest.approx(-0.0983, abs=1e-3)


@pytest.mark.parametrize("bearing", [0.0, 45.0, 137.5, 200.0, 300.7])
def test_destination_point_round_trip(bearing):
    start = LatLon(10.0, 20.0)
    d = 100_000.0
    end = destination_point(start, d, bearing)
    assert distance_to(start, end) == pytest.approx(d, rel=1e-9)
    assert bearing_to(start, end) == pytest.approx(bearing, abs=1e-6)


def test_destination_point_normalises_longitude():
    p = destination_point(LatLon(0.0, 179.5), 111_195.0, 90.0)
    assert -180 < p.lon <= 180
    assert p.lon == pytest.approx(-179.5, abs=1e-3)


def test_intersection_example():
    p = intersection(LatLon(51.8853, 0.2545), 108.547, LatLon(49.0034, 2.5735), 32.435)
    assert p is not None
    assert p.lat == pytest.approx(50.9078, abs=1e-3)
    assert p.lon == pytest.approx(4.5084, abs=1e-3)


def test_intersection_of_two_northbound_meridians_is_the_pole():
    p = intersection(LatLon(0.0, 0.0), 0.0, LatLon(0.0, 10.0), 0.0)
    assert p is not None
    assert p.lat == pytest.approx(90.0, abs=1e-6)


def test_intersection_is_none_for_coincident_start_points():
    assert intersection(CAMBRIDGE, 10.0, CAMBRIDGE, 80.0) is None


def test_intersection_is_none_when_included_angles_disagree():
    # One path heads north, the other south: no intersection ahead on both.
    assert intersection(LatLon(0.0, 0.0), 0.0, LatLon(0.0, 10.0), 180.0) is None


def test_intersection_is_none_for_paths_on_the_same_great_circle():
    # Both paths run along the equator towards each other: every point is shared.
    assert intersection(LatLon(0.0, 0.0), 90.0, LatLon(0.0, 10.0), 270.0) is None


def test_intersection_from_the_pole_stays_finite():
    p = intersection(LatLon(90.0, 0.0), 180.0, LatLon(0.0, 10.0), 270.0)
    assert p is not None
    assert math.isfinite(p.lat) and math.isfinite(p.lon)
    assert p.lat == pytest.approx(90.0, abs=1e-6)


def test_cross_track_distance_example():
    current = LatLon(53.2611, -0.7972)
    d = cross_track_distance_to(current, LatLon(53.3206, -1.7297), LatLon(53.1887, 0.1334))
    assert d == pytest.approx(-307.5, abs=1)


def test_cross_track_distance_sign():
    start, end = LatLon(0.0, 0.0), LatLon(0.0, 10.0)
    assert cross_track_distance_to(LatLon(-1.0, 5.0), start, end) > 0
    assert cross_track_distance_to(LatLon(1.0, 5.0), start, end) < 0
    assert cross_track_distance_to(LatLon(0.0, 5.0), start, end) == pytest.approx(0.0, abs=1e-6)


def test_max_latitude():
    assert max_latitude(LatLon(0.0, 0.0), 45.0) == pytest.approx(45.0, abs=1e-9)
    assert max_latitude(LatLon(30.0, 0.0), 90.0) == pytest.approx(30.0, abs=1e-9)
    assert max_latitude(LatLon(30.0, 50.0), 0.0) == pytest.approx(90.0, abs=1e-9)


def test_crossing_parallels_at_equator():
    crossings = crossing_parallels(LatLon(0.0, 0.0), LatLon(10.0, 10.0), 0.0)
    assert crossings is not None
    assert crossings.lon1 == pytest.approx(0.0, abs=1e-9)
    assert abs(crossings.lon2) == pytest.approx(180.0, abs=1e-9)


def test_crossing_parallels_points_lie_on_the_great_circle():
    p1, p2 = LatLon(0.0, 0.0), LatLon(10.0, 10.0)
    crossings = crossing_parallels(p1, p2, 20.0)
    assert crossings is not None
    for lon in (crossings.lon1, crossings.lon2):
        assert cross_track_distance_to(LatLon(20.0, lon), p1, p2) == pytest.approx(0.0, abs=1e-3)


def test_crossing_parallels_is_none_above_max_latitude():
    p1, p2 = LatLon(0.0, 0.0), LatLon(10.0, 10.0)
    top = max_latitude(p1, bearing_to(p1, p2))
    assert top < 60.0
    assert crossing_parallels(p1, p2, 60.0) is None


def test_point_is_immutable():
    with pytest.raises(AttributeError):
        CAMBRIDGE.lat = 50.0  # type: ignore[misc]


def test_point_stores_unnormalised_longitude():
    assert LatLon(10.0, 370.0).lon == 370.0


def test_operations_reject_non_points():
    with pytest.raises(InvalidArgumentTypeError, match="b is not a LatLon"):
        distance_to(CAMBRIDGE, (48.857, 2.351))  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        midpoint_to("52.205,0.119", PARIS)  # type: ignore[arg-type]
    with pytest.raises(InvalidArgumentTypeError):
        intersection(CAMBRIDGE, 10.0, None, 20.0)  # type: ignore[arg-type]
