import math

import pytest

from record_uploader.core.constants import EARTH_RADIUS_KM
from record_uploader.schemas.track import TrackPoint
from record_uploader.services.geo import distance, haversine_km, track_distance


def _pt(lat, lng, n=0):
    return TrackPoint(lat=lat, lng=lng, sort_num=n)


def test_distance_to_self_is_zero():
    p = _pt(32.0569, 118.7836)
    assert distance(p, p) == 0


def test_distance_is_symmetric():
    a = _pt(32.0569, 118.7836)
    b = _pt(32.0612, 118.7901)
    assert distance(a, b) == pytest.approx(distance(b, a), rel=1e-12)


def test_one_degree_of_latitude():
    # 1 degree along a meridian is R * pi / 180
    expected = EARTH_RADIUS_KM * math.pi / 180
    assert haversine_km(0, 0, 1, 0) == pytest.approx(expected, rel=1e-9)


def test_track_distance_empty_and_single_point():
    assert track_distance([]) == 0
    assert track_distance([_pt(32.0, 118.0)]) == 0


def test_track_distance_sums_legs_in_order():
    a, b, c = _pt(0, 0, 1), _pt(0, 1, 2), _pt(0, 2, 3)
    assert track_distance([a, b, c]) == pytest.approx(distance(a, b) + distance(b, c))
    # Out-and-back is longer than the direct leg
    assert track_distance([a, c, b]) > track_distance([a, b, c])
