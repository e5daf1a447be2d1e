import math

import pytest

from places_finder.core.geometry import bearing_degrees, cardinal_direction, distance_km, offset_coordinate
from places_finder.core.seeded_random import SplitMix64, seed_from
from places_finder.models.base_model import Coordinate

MUMBAI = Coordinate(lat=19.0760, lng=72.8777)


def test_distance_between_cities(new_delhi):
    d = distance_km(new_delhi, MUMBAI)
    assert 1100 < d < 1200


def test_distance_is_symmetric_and_zero_for_same_point(new_delhi):
    assert distance_km(new_delhi, new_delhi) == 0
    assert distance_km(new_delhi, MUMBAI) == pytest.approx(distance_km(MUMBAI, new_delhi))


def test_bearing_cardinal_axes():
    origin = Coordinate(lat=0, lng=0)
    assert bearing_degrees(origin, Coordinate(lat=1, lng=0)) == pytest.approx(0)
    assert bearing_degrees(origin, Coordinate(lat=0, lng=1)) == pytest.approx(90)
    assert bearing_degrees(origin, Coordinate(lat=-1, lng=0)) == pytest.approx(180)
    assert bearing_degrees(origin, Coordinate(lat=0, lng=-1)) == pytest.approx(270)


@pytest.mark.parametrize("bearing, expected", [
    (0, "north"),
    (44, "northeast"),
    (90, "east"),
    (200, "south"),
    (290, "west"),
    (350, "north"),
])
def test_cardinal_direction(bearing, expected):
    assert cardinal_direction(bearing) == expected


def test_offset_coordinate_keeps_distance(new_delhi):
    for angle in (0, math.pi / 2, math.pi, 1.3 * math.pi):
        moved = offset_coordinate(new_delhi, 2.0, angle)
        assert distance_km(new_delhi, moved) == pytest.approx(2.0, rel=0.02)


def test_offset_north_moves_latitude_only(new_delhi):
    moved = offset_coordinate(new_delhi, 1.0, 0)
    assert moved.lat > new_delhi.lat
    assert moved.lng == pytest.approx(new_delhi.lng)


def test_offset_clamps_near_pole():
    moved = offset_coordinate(Coordinate(lat=89.999, lng=10), 50, 0)
    assert moved.lat == 90.0


def test_coordinate_rejects_out_of_range():
    with pytest.raises(ValueError):
        Coordinate(lat=91, lng=0)
    with pytest.raises(ValueError):
        Coordinate(lat=0, lng=float("nan"))


def test_splitmix_is_reproducible():
    a = SplitMix64.for_key(28.6139, 77.209, "restaurant", 0)
    b = SplitMix64.for_key(28.6139, 77.209, "restaurant", 0)
    assert [a.next_u64() for _ in range(5)] == [b.next_u64() for _ in range(5)]
    assert seed_from(1.0, "x") != seed_from(1.0, "y")


def test_splitmix_ranges():
    rng = SplitMix64(12345)
    for _ in range(500):
        assert 0 <= rng.random() < 1
        assert 6 <= rng.randint(6, 10) <= 10
        assert 3.0 <= rng.uniform(3.0, 5.0) <= 5.0
