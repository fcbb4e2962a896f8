"""
Trip planning service: orchestrates geocoding, recommendations, routing
and segmentation.

Only the core route lookup is allowed to fail a plan. Recommendations
and destination attractions are enrichment: when they fail the plan
still comes back, just without them.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from typing import List, Optional

from roadtrip.config import get_settings
from roadtrip.llm.client import LLMClient
from roadtrip.mapbox.client import Geocoder, Router, get_mapbox_client
from roadtrip.models import (
    CategoryPreferences,
    Coordinate,
    Location,
    PlaceOfInterest,
    RecommendedPlace,
    Route,
    RouteSegment,
)
from roadtrip.recommendations.recommender import (
    RecommenderUnavailableError,
    find_destination_pois,
    recommend_route_places,
)
from roadtrip.route.segmenter import segment_route
from roadtrip.route.waypoints import select_waypoints

logger = logging.getLogger(__name__)
settings = get_settings()


class LocationNotFoundError(Exception):
    """The geocoder had no match for a query."""


class NoRouteFoundError(Exception):
    """The router could not connect origin and destination."""


@dataclass(frozen=True)
class TripPlan:
    """Everything the map needs for one submitted trip."""
    origin: Location
    destination: Location
    route: Route
    target_hours: float
    segments: List[RouteSegment]
    waypoints: List[Coordinate] = field(default_factory=list)
    recommended_places: List[RecommendedPlace] = field(default_factory=list)
    destination_pois: List[PlaceOfInterest] = field(default_factory=list)
    recommendations_available: bool = True


def resolve_location(query: str, geocoder: Optional[Geocoder] = None) -> Location:
    """
    Geocode a free-text query to its best match.

    Raises:
        LocationNotFoundError: If the geocoder returns nothing.
    """
    geocoder = geocoder or get_mapbox_client()
    results = geocoder.search(query)
    if not results:
        raise LocationNotFoundError(f"No location found for {query!r}")
    return results[0]


def plan_trip(
    origin: Location,
    destination: Location,
    target_hours: Optional[float] = None,
    preferences: Optional[CategoryPreferences] = None,
    include_recommendations: bool = True,
    router: Optional[Router] = None,
    llm: Optional[LLMClient] = None,
) -> TripPlan:
    """
    Plan a trip between two resolved locations.

    1. Destination attractions are looked up in the background; nothing
       depends on them.
    2. The direct route is fetched; its distance and duration go into the
       recommendation prompt.
    3. Recommended stops become waypoints and the route is requested again
       through them. Any failure here keeps the direct route.
    4. The final route is segmented by target driving hours.

    Raises:
        NoRouteFoundError: If no direct route exists.
    """
    router = router or get_mapbox_client()
    if target_hours is None:
        target_hours = settings.default_segment_hours

    pool = ThreadPoolExecutor(max_workers=1)
    try:
        pois_future = None
        if include_recommendations:
            pois_future = pool.submit(
                find_destination_pois,
                destination.coordinate,
                destination.display_name,
                llm,
            )

        direct = router.route(origin.coordinate, destination.coordinate)
        if direct is None:
            raise NoRouteFoundError(
                f"No route found from {origin.display_name} to {destination.display_name}"
            )

        route = direct
        places: List[RecommendedPlace] = []
        waypoints: List[Coordinate] = []
        recommendations_available = include_recommendations

        if include_recommendations:
            try:
                places = recommend_route_places(
                    origin.display_name,
                    destination.display_name,
                    direct.distance,
                    direct.duration,
                    preferences=preferences,
                    llm=llm,
                )
            except RecommenderUnavailableError as e:
                logger.warning(f"Route recommendations unavailable: {e}")
                recommendations_available = False

            waypoints = select_waypoints(places, max(0, settings.max_router_stops - 2))
            if waypoints:
                via = router.route(origin.coordinate, destination.coordinate, waypoints)
                if via is None:
                    logger.warning("No route through recommended stops; using direct route")
                    waypoints = []
                else:
                    route = via

        destination_pois = pois_future.result() if pois_future else []
    finally:
        # A failed plan must not wait on the attraction lookup
        pool.shutdown(wait=False, cancel_futures=True)

    segments = segment_route(route, target_hours)

    logger.info(
        "planner.plan_trip",
        extra={
            "origin": origin.display_name,
            "destination": destination.display_name,
            "distance_m": round(route.distance),
            "duration_s": round(route.duration),
            "waypoint_count": len(waypoints),
            "segment_count": len(segments),
            "destination_poi_count": len(destination_pois),
        },
    )

    return TripPlan(
        origin=origin,
        destination=destination,
        route=route,
        target_hours=target_hours,
        segments=segments,
        waypoints=waypoints,
        recommended_places=places,
        destination_pois=destination_pois,
        recommendations_available=recommendations_available,
    )


def resegment(plan: TripPlan, target_hours: float) -> TripPlan:
    """Recompute segments from the plan's route for a new target."""
    return replace(
        plan,
        target_hours=target_hours,
        segments=segment_route(plan.route, target_hours),
    )
