"""
Geocoding and routing client abstraction.

Currently implements Mapbox Geocoding v5 and Directions v5 (driving).
"""
import logging
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import httpx

from roadtrip.config import get_settings
from roadtrip.models import Coordinate, Location, Route
from roadtrip.route.waypoints import MAX_ROUTER_STOPS

logger = logging.getLogger(__name__)
settings = get_settings()


class Geocoder:
    """Interface for place-name search."""

    def search(self, query: str) -> List[Location]:
        raise NotImplementedError


class Router:
    """Interface for driving directions."""

    def route(
        self,
        origin: Coordinate,
        destination: Coordinate,
        waypoints: Optional[Sequence[Coordinate]] = None,
    ) -> Optional[Route]:
        raise NotImplementedError


class MapboxClient(Geocoder, Router):
    """Mapbox REST client using HTTP requests."""

    def __init__(
        self,
        access_token: Optional[str] = None,
        base_url: Optional[str] = None,
        max_stops: Optional[int] = None,
    ):
        self.access_token = access_token or settings.mapbox_access_token
        if not self.access_token:
            logger.warning("MAPBOX_ACCESS_TOKEN not set; Mapbox calls will return no results")
        self.base_url = (base_url or settings.mapbox_base_url).rstrip("/")
        self.max_stops = max_stops or settings.max_router_stops or MAX_ROUTER_STOPS
        self.timeout = settings.mapbox_timeout_seconds

    def search(self, query: str) -> List[Location]:
        """
        Autocomplete a place name or address within the USA.

        Args:
            query: Free text typed by the user (e.g. "San Fran")

        Returns:
            List of Location objects, best match first.
        """
        if not self.access_token or not query or not query.strip():
            return []

        url = f"{self.base_url}/geocoding/v5/mapbox.places/{quote(query.strip(), safe='')}.json"
        params = {
            "access_token": self.access_token,
            "country": "us",
            "autocomplete": "true",
            "types": "place,address",
        }

        try:
            resp = httpx.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except Exception as e:
            logger.error(f"Mapbox geocoding error for {query!r}: {e}")
            return []

        results = []
        for feature in data.get("features", []):
            coordinate = _parse_center(feature.get("center"))
            if coordinate is None:
                continue
            results.append(Location(
                id=str(feature.get("id", "")),
                display_name=feature.get("place_name", ""),
                coordinate=coordinate,
            ))

        return results

    def route(
        self,
        origin: Coordinate,
        destination: Coordinate,
        waypoints: Optional[Sequence[Coordinate]] = None,
    ) -> Optional[Route]:
        """
        Get a driving route through the given stops, in order.

        Waypoints beyond what the API accepts are dropped from the end.

        Returns:
            The first route Mapbox offers, or None if there is none.
        """
        if not self.access_token:
            return None

        stops = [origin]
        if waypoints:
            stops.extend(waypoints[: max(0, self.max_stops - 2)])
        stops.append(destination)

        coordinates_param = ";".join(f"{c.lng},{c.lat}" for c in stops)
        url = f"{self.base_url}/directions/v5/mapbox/driving/{coordinates_param}"
        params = {
            "access_token": self.access_token,
            "geometries": "geojson",
            "overview": "full",
        }

        try:
            resp = httpx.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except Exception as e:
            logger.error(f"Mapbox directions error: {e}")
            return None

        return _parse_route(data)


def _parse_center(value: Any) -> Optional[Coordinate]:
    try:
        return Coordinate.from_lnglat(value)
    except (TypeError, ValueError):
        return None


def _parse_route(data: Dict[str, Any]) -> Optional[Route]:
    """Convert a Directions API response into a Route."""
    routes = data.get("routes") or []
    if not routes:
        logger.info(f"Mapbox found no route (code={data.get('code')})")
        return None

    first = routes[0]
    geometry = first.get("geometry") or {}
    coordinates = []
    for pair in geometry.get("coordinates", []):
        coordinate = _parse_center(pair)
        if coordinate is None:
            logger.warning(f"Skipping malformed route coordinate: {pair!r}")
            continue
        coordinates.append(coordinate)

    return Route(
        coordinates=tuple(coordinates),
        distance=float(first.get("distance", 0.0)),
        duration=float(first.get("duration", 0.0)),
    )


# Singleton
_client: Optional[MapboxClient] = None


def get_mapbox_client() -> MapboxClient:
    """Get or create the Mapbox client singleton."""
    global _client
    if _client is None:
        _client = MapboxClient()
    return _client
