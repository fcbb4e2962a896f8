"""
Pydantic schemas for the trip planning API.

Coordinates travel as GeoJSON-style [longitude, latitude] pairs.
"""
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from roadtrip.models import CategoryPreferences

LngLat = Tuple[float, float]


def _check_lnglat(value: LngLat) -> LngLat:
    lng, lat = value
    if not -180.0 <= lng <= 180.0 or not -90.0 <= lat <= 90.0:
        raise ValueError(f"coordinate out of range: [{lng}, {lat}]")
    return value


class PlaceInput(BaseModel):
    """An origin or destination: free text, or a coordinate with a name."""
    query: Optional[str] = Field(None, min_length=1, max_length=200)
    coordinate: Optional[LngLat] = None
    name: Optional[str] = Field(None, max_length=200)

    @field_validator("coordinate")
    @classmethod
    def _coordinate_in_range(cls, v: Optional[LngLat]) -> Optional[LngLat]:
        return _check_lnglat(v) if v is not None else v

    @model_validator(mode="after")
    def _query_or_coordinate(self) -> "PlaceInput":
        if not self.query and self.coordinate is None:
            raise ValueError("either query or coordinate is required")
        return self


class PreferencesIn(BaseModel):
    national_parks: bool = False
    landmarks: bool = False
    scenic_views: bool = False
    food: bool = False
    cities: bool = False
    quirky: bool = False

    def to_domain(self) -> CategoryPreferences:
        return CategoryPreferences(**self.model_dump())


class TripPlanRequest(BaseModel):
    origin: PlaceInput
    destination: PlaceInput
    target_hours: float = Field(5.0, ge=2, le=8)
    preferences: Optional[PreferencesIn] = None
    include_recommendations: bool = True


class RouteIn(BaseModel):
    coordinates: List[LngLat] = Field(default_factory=list)
    distance: float = 0.0  # meters
    duration: float = 0.0  # seconds

    @field_validator("coordinates")
    @classmethod
    def _coordinates_in_range(cls, v: List[LngLat]) -> List[LngLat]:
        for pair in v:
            _check_lnglat(pair)
        return v


class SegmentRequest(BaseModel):
    route: Optional[RouteIn] = None
    target_hours: float = Field(5.0, gt=0)


class RouteSegmentOut(BaseModel):
    start_index: int
    end_index: int
    start_coordinate: LngLat
    end_coordinate: LngLat
    distance: float
    duration: float
    coordinates: List[LngLat]


class SegmentResponse(BaseModel):
    segments: List[RouteSegmentOut]
    target_hours: float


class RecommendedPlaceIn(BaseModel):
    name: str = ""
    description: str = ""
    category: Optional[str] = None
    coordinate: Optional[Any] = None  # untrusted, validated by the waypoint composer
    reason_to_stop: str = ""


class WaypointRequest(BaseModel):
    places: List[RecommendedPlaceIn]
    max_waypoints: int = Field(23, ge=0, le=23)


class WaypointResponse(BaseModel):
    waypoints: List[LngLat]


class LocationOut(BaseModel):
    id: str
    display_name: str
    coordinate: LngLat


class LocationSearchResponse(BaseModel):
    locations: List[LocationOut]


class RecommendedPlaceOut(BaseModel):
    name: str
    description: str
    category: Optional[str]
    reason_to_stop: str
    coordinate: Optional[LngLat]


class PlaceOfInterestOut(BaseModel):
    id: str
    name: str
    category: str
    coordinate: LngLat
    distance: float
    address: str
    importance: Optional[int] = None
    description: str


class RouteOut(BaseModel):
    coordinates: List[LngLat]
    distance: float
    duration: float


class TripPlanResponse(BaseModel):
    origin: LocationOut
    destination: LocationOut
    route: RouteOut
    target_hours: float
    segments: List[RouteSegmentOut]
    waypoints: List[LngLat]
    recommended_places: List[RecommendedPlaceOut]
    destination_pois: List[PlaceOfInterestOut]
    recommendations_available: bool
    note: str = "Segment times are straight-line estimates at the route's average speed."


class ErrorResponse(BaseModel):
    detail: str
