"""
API routes for trip planning, route segmentation and location search.
"""
import logging
from typing import List

from fastapi import APIRouter, HTTPException, Query

from roadtrip.mapbox.client import get_mapbox_client
from roadtrip.models import Coordinate, Location, RecommendedPlace, Route, RouteSegment
from roadtrip.planner.schemas import (
    ErrorResponse,
    LocationOut,
    LocationSearchResponse,
    PlaceInput,
    PlaceOfInterestOut,
    RecommendedPlaceOut,
    RouteOut,
    RouteSegmentOut,
    SegmentRequest,
    SegmentResponse,
    TripPlanRequest,
    TripPlanResponse,
    WaypointRequest,
    WaypointResponse,
)
from roadtrip.planner.service import (
    LocationNotFoundError,
    NoRouteFoundError,
    TripPlan,
    plan_trip,
    resolve_location,
)
from roadtrip.route.segmenter import segment_route
from roadtrip.route.waypoints import parse_coordinate, select_waypoints

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["trips"])


@router.get("/locations/search", response_model=LocationSearchResponse)
def search_locations(q: str = Query(..., min_length=1, max_length=200)):
    """Autocomplete US places and addresses."""
    locations = get_mapbox_client().search(q)
    return LocationSearchResponse(locations=[_location_out(loc) for loc in locations])


@router.post(
    "/trips/plan",
    response_model=TripPlanResponse,
    responses={404: {"model": ErrorResponse}},
)
def plan(body: TripPlanRequest):
    """
    Plan a road trip.

    1. Resolves origin and destination (geocoding free text if needed)
    2. Fetches recommended stops and routes through them
    3. Splits the route into chunks of about `target_hours` driving each
    4. Attaches attractions at the destination

    Only a missing location or route is an error; unavailable
    recommendations just leave those fields empty.
    """
    try:
        origin = _resolve(body.origin, "origin")
        destination = _resolve(body.destination, "destination")
        trip = plan_trip(
            origin,
            destination,
            target_hours=body.target_hours,
            preferences=body.preferences.to_domain() if body.preferences else None,
            include_recommendations=body.include_recommendations,
        )
    except (LocationNotFoundError, NoRouteFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))

    return _trip_plan_out(trip)


@router.post("/routes/segment", response_model=SegmentResponse)
def segment(body: SegmentRequest):
    """
    Split a route into chunks of roughly `target_hours` of driving.

    A route without usable geometry yields no segments rather than an error.
    """
    route = None
    if body.route is not None and body.route.coordinates:
        route = Route(
            coordinates=tuple(Coordinate.from_lnglat(c) for c in body.route.coordinates),
            distance=body.route.distance,
            duration=body.route.duration,
        )

    segments = segment_route(route, body.target_hours)
    return SegmentResponse(
        segments=[_segment_out(s) for s in segments],
        target_hours=body.target_hours,
    )


@router.post("/routes/waypoints", response_model=WaypointResponse)
def waypoints(body: WaypointRequest):
    """Select routable waypoints from ranked recommendations."""
    places = [
        RecommendedPlace(
            name=p.name,
            description=p.description,
            category=p.category,
            coordinate=p.coordinate,
            reason_to_stop=p.reason_to_stop,
        )
        for p in body.places
    ]
    selected = select_waypoints(places, body.max_waypoints)
    return WaypointResponse(waypoints=[_lnglat(c) for c in selected])


def _resolve(place: PlaceInput, role: str) -> Location:
    if place.coordinate is not None:
        coordinate = Coordinate.from_lnglat(place.coordinate)
        name = place.name or place.query or f"{coordinate.lat:.4f}, {coordinate.lng:.4f}"
        return Location(id=f"input-{role}", display_name=name, coordinate=coordinate)
    return resolve_location(place.query)


def _lnglat(c: Coordinate) -> List[float]:
    return c.as_list()


def _location_out(loc: Location) -> LocationOut:
    return LocationOut(id=loc.id, display_name=loc.display_name, coordinate=_lnglat(loc.coordinate))


def _segment_out(s: RouteSegment) -> RouteSegmentOut:
    return RouteSegmentOut(
        start_index=s.start_index,
        end_index=s.end_index,
        start_coordinate=_lnglat(s.start_coordinate),
        end_coordinate=_lnglat(s.end_coordinate),
        distance=s.distance,
        duration=s.duration,
        coordinates=[_lnglat(c) for c in s.coordinates],
    )


def _trip_plan_out(trip: TripPlan) -> TripPlanResponse:
    recommended = []
    for p in trip.recommended_places:
        parsed = parse_coordinate(p.coordinate)
        recommended.append(RecommendedPlaceOut(
            name=p.name,
            description=p.description,
            category=p.category,
            reason_to_stop=p.reason_to_stop,
            coordinate=_lnglat(parsed) if parsed else None,
        ))

    return TripPlanResponse(
        origin=_location_out(trip.origin),
        destination=_location_out(trip.destination),
        route=RouteOut(
            coordinates=[_lnglat(c) for c in trip.route.coordinates],
            distance=trip.route.distance,
            duration=trip.route.duration,
        ),
        target_hours=trip.target_hours,
        segments=[_segment_out(s) for s in trip.segments],
        waypoints=[_lnglat(c) for c in trip.waypoints],
        recommended_places=recommended,
        destination_pois=[
            PlaceOfInterestOut(
                id=poi.id,
                name=poi.name,
                category=poi.category,
                coordinate=_lnglat(poi.coordinate),
                distance=poi.distance,
                address=poi.address,
                importance=poi.importance,
                description=poi.description,
            )
            for poi in trip.destination_pois
        ],
        recommendations_available=trip.recommendations_available,
    )
