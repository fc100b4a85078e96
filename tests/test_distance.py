"""Unit tests for the Haversine distance calculator."""

import math

import pytest

from src.domain.distance import distance_between, haversine_km, round_half_up
from src.domain.entities import LocationData

MUMBAI = LocationData(19.0760, 72.8777, "Mumbai")
PUNE = LocationData(18.5204, 73.8567, "Pune")


class TestHaversine:
    def test_same_point_is_zero(self):
        assert haversine_km(19.0, 72.0, 19.0, 72.0) == 0.0

    def test_symmetric(self):
        d1 = haversine_km(19.0, 72.0, 20.0, 73.0)
        d2 = haversine_km(20.0, 73.0, 19.0, 72.0)
        assert abs(d1 - d2) < 1e-9

    def test_one_degree_of_latitude(self):
        # 2 * pi * 6371 / 360
        assert haversine_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(111.19, abs=0.01)


class TestDistanceBetween:
    def test_identical_locations_are_zero(self):
        assert distance_between(MUMBAI, MUMBAI) == 0.0

    def test_symmetric(self):
        assert distance_between(MUMBAI, PUNE) == distance_between(PUNE, MUMBAI)

    def test_known_city_pair(self):
        # Mumbai -> Pune great-circle distance is about 120 km
        assert 115.0 < distance_between(MUMBAI, PUNE) < 125.0

    def test_rounded_to_two_decimals(self):
        d = distance_between(MUMBAI, PUNE)
        assert d == round(d, 2)
        assert d == round_half_up(haversine_km(19.0760, 72.8777, 18.5204, 73.8567), 2)

    @pytest.mark.parametrize(
        "origin, destination",
        [
            (None, PUNE),
            (MUMBAI, None),
            (None, None),
        ],
    )
    def test_missing_location_is_zero(self, origin, destination):
        assert distance_between(origin, destination) == 0.0

    @pytest.mark.parametrize("bad", ["19.07", None, True, math.nan, math.inf])
    def test_non_numeric_coordinate_is_zero(self, bad):
        assert distance_between(LocationData(bad, 72.8777), PUNE) == 0.0
        assert distance_between(MUMBAI, LocationData(18.5204, bad)) == 0.0

    def test_object_without_coordinates_is_zero(self):
        assert distance_between(object(), PUNE) == 0.0

    def test_integer_coordinates_accepted(self):
        assert distance_between(LocationData(0, 0), LocationData(1, 0)) == 111.19


class TestRoundHalfUp:
    def test_halves_round_up(self):
        assert round_half_up(112.5) == 113
        assert round_half_up(113.5) == 114

    def test_decimal_places(self):
        assert round_half_up(2.675, 2) == 2.68
        assert round_half_up(1.004, 2) == 1.0
