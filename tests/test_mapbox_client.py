"""
Tests for the Mapbox geocoding and directions client.
"""
import httpx
import pytest
from unittest.mock import MagicMock, patch

from roadtrip.mapbox.client import MapboxClient
from roadtrip.models import Coordinate

ORIGIN = Coordinate(lng=-122.42, lat=37.77)
DESTINATION = Coordinate(lng=-118.24, lat=34.05)


def _response(payload):
    resp = MagicMock()
    resp.json.return_value = payload
    resp.raise_for_status.return_value = None
    return resp


@pytest.fixture
def client():
    return MapboxClient(access_token="test-token", base_url="https://mapbox.test/")


class TestSearch:
    @patch("roadtrip.mapbox.client.httpx.get")
    def test_parses_features(self, mock_get, client):
        mock_get.return_value = _response({"features": [
            {"id": "place.1", "place_name": "San Francisco, California, United States",
             "center": [-122.4194, 37.7749]},
            {"id": "place.2", "place_name": "Broken", "center": None},
        ]})
        results = client.search("San Fran")
        assert len(results) == 1
        assert results[0].id == "place.1"
        assert results[0].coordinate == Coordinate(-122.4194, 37.7749)

        url = mock_get.call_args[0][0]
        params = mock_get.call_args[1]["params"]
        assert url == "https://mapbox.test/geocoding/v5/mapbox.places/San%20Fran.json"
        assert params["country"] == "us"
        assert params["autocomplete"] == "true"
        assert params["types"] == "place,address"

    @patch("roadtrip.mapbox.client.httpx.get")
    def test_blank_query_skips_request(self, mock_get, client):
        assert client.search("   ") == []
        mock_get.assert_not_called()

    @patch("roadtrip.mapbox.client.httpx.get")
    def test_http_error_returns_empty(self, mock_get, client):
        mock_get.side_effect = httpx.ConnectError("boom")
        assert client.search("Denver") == []

    @patch("roadtrip.mapbox.client.httpx.get")
    def test_missing_token_returns_empty(self, mock_get):
        client = MapboxClient(access_token="")
        client.access_token = ""
        assert client.search("Denver") == []
        mock_get.assert_not_called()


class TestRoute:
    @patch("roadtrip.mapbox.client.httpx.get")
    def test_parses_route(self, mock_get, client):
        mock_get.return_value = _response({"code": "Ok", "routes": [{
            "distance": 615000.0,
            "duration": 21900.0,
            "geometry": {"coordinates": [[-122.42, 37.77], [-119.5, 36.5], [-118.24, 34.05]]},
        }]})
        route = client.route(ORIGIN, DESTINATION)
        assert route is not None
        assert route.distance == 615000.0
        assert route.duration == 21900.0
        assert len(route.coordinates) == 3
        assert route.coordinates[1] == Coordinate(-119.5, 36.5)

        url = mock_get.call_args[0][0]
        params = mock_get.call_args[1]["params"]
        assert url.endswith("/directions/v5/mapbox/driving/-122.42,37.77;-118.24,34.05")
        assert params["geometries"] == "geojson"
        assert params["overview"] == "full"

    @patch("roadtrip.mapbox.client.httpx.get")
    def test_waypoints_in_order_between_endpoints(self, mock_get, client):
        mock_get.return_value = _response({"routes": []})
        client.route(ORIGIN, DESTINATION, [Coordinate(-121.0, 37.0), Coordinate(-119.5, 36.5)])
        url = mock_get.call_args[0][0]
        assert url.endswith("-122.42,37.77;-121.0,37.0;-119.5,36.5;-118.24,34.05")

    @patch("roadtrip.mapbox.client.httpx.get")
    def test_waypoints_capped_to_api_limit(self, mock_get, client):
        mock_get.return_value = _response({"routes": []})
        waypoints = [Coordinate(-120.0, 35.0 + i * 0.01) for i in range(30)]
        client.route(ORIGIN, DESTINATION, waypoints)
        path = mock_get.call_args[0][0].rsplit("/", 1)[1]
        stops = path.split(";")
        assert len(stops) == 25
        assert stops[0] == "-122.42,37.77"
        assert stops[-1] == "-118.24,34.05"

    @patch("roadtrip.mapbox.client.httpx.get")
    def test_no_route_returns_none(self, mock_get, client):
        mock_get.return_value = _response({"code": "NoRoute", "routes": []})
        assert client.route(ORIGIN, DESTINATION) is None

    @patch("roadtrip.mapbox.client.httpx.get")
    def test_transport_error_returns_none(self, mock_get, client):
        mock_get.side_effect = httpx.ReadTimeout("slow")
        assert client.route(ORIGIN, DESTINATION) is None
