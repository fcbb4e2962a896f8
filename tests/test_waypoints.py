"""
Tests for waypoint selection from recommended places.
"""
import pytest

from roadtrip.models import Coordinate, RecommendedPlace
from roadtrip.route.waypoints import (
    DEFAULT_MAX_WAYPOINTS,
    parse_coordinate,
    select_waypoints,
)


def _place(coordinate, name="Stop"):
    return RecommendedPlace(name=name, description="", coordinate=coordinate)


class TestParseCoordinate:
    def test_list(self):
        assert parse_coordinate([-100, 40]) == Coordinate(lng=-100.0, lat=40.0)

    def test_tuple(self):
        assert parse_coordinate((-111.5, 36.1)) == Coordinate(lng=-111.5, lat=36.1)

    def test_none(self):
        assert parse_coordinate(None) is None

    def test_sentinel_zero_zero(self):
        assert parse_coordinate([0, 0]) is None
        assert parse_coordinate([0.0, 0.0]) is None

    def test_zero_on_one_axis_is_valid(self):
        assert parse_coordinate([0.0, 51.5]) == Coordinate(lng=0.0, lat=51.5)

    @pytest.mark.parametrize("value", [
        [-100],
        [-100, 40, 5],
        ["-100", "40"],
        [True, False],
        [float("nan"), 40],
        [-200, 40],
        [-100, 95],
        {"lng": -100, "lat": 40},
        "-100,40",
    ])
    def test_malformed(self, value):
        assert parse_coordinate(value) is None


class TestSelectWaypoints:
    def test_filters_sentinel_and_missing(self):
        places = [_place([0, 0]), _place([-100, 40]), _place(None)]
        assert select_waypoints(places) == [Coordinate(lng=-100.0, lat=40.0)]

    def test_preserves_ranking_order(self):
        places = [
            _place([-112.1, 36.1], "Grand Canyon"),
            _place("nowhere", "Bad"),
            _place([-115.1, 36.2], "Las Vegas"),
            _place([-116.9, 36.5], "Death Valley"),
        ]
        assert select_waypoints(places) == [
            Coordinate(-112.1, 36.1),
            Coordinate(-115.1, 36.2),
            Coordinate(-116.9, 36.5),
        ]

    def test_caps_at_max_dropping_lowest_ranked(self):
        places = [_place([-100.0 + i * 0.1, 40.0]) for i in range(30)]
        result = select_waypoints(places)
        assert len(result) == DEFAULT_MAX_WAYPOINTS == 23
        assert result[0] == Coordinate(-100.0, 40.0)
        assert result[-1] == Coordinate(-100.0 + 22 * 0.1, 40.0)

    def test_custom_cap(self):
        places = [_place([-100.0, 40.0 + i]) for i in range(5)]
        assert len(select_waypoints(places, max_waypoints=2)) == 2
        assert select_waypoints(places, max_waypoints=0) == []

    def test_never_exceeds_cap_with_invalid_mixed_in(self):
        places = []
        for i in range(40):
            places.append(_place([0, 0]))
            places.append(_place([-90.0, 30.0 + i * 0.5]))
        result = select_waypoints(places, max_waypoints=10)
        assert len(result) == 10
        assert result == [Coordinate(-90.0, 30.0 + i * 0.5) for i in range(10)]

    def test_empty_and_none_input(self):
        assert select_waypoints([]) == []
        assert select_waypoints(None) == []

    def test_negative_cap_rejected(self):
        with pytest.raises(ValueError):
            select_waypoints([_place([-100, 40])], max_waypoints=-1)
