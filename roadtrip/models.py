"""
Domain records for trip planning.

All records are immutable and transient: they live for a single planning
request and are never persisted.
"""
import math
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Coordinate:
    """A (longitude, latitude) pair in decimal degrees."""
    lng: float
    lat: float

    def __post_init__(self):
        if not (math.isfinite(self.lng) and math.isfinite(self.lat)):
            raise ValueError(f"Coordinate must be finite: ({self.lng}, {self.lat})")
        if not -180.0 <= self.lng <= 180.0:
            raise ValueError(f"Longitude out of range: {self.lng}")
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"Latitude out of range: {self.lat}")

    @classmethod
    def from_lnglat(cls, value: Sequence[float]) -> "Coordinate":
        """Build from a GeoJSON-style [lng, lat] pair."""
        if len(value) != 2:
            raise ValueError(f"Expected [lng, lat], got {value!r}")
        return cls(lng=float(value[0]), lat=float(value[1]))

    def as_list(self) -> List[float]:
        return [self.lng, self.lat]

    def rounded(self, precision: int = 4) -> Tuple[float, float]:
        return (round(self.lng, precision), round(self.lat, precision))


@dataclass(frozen=True)
class Route:
    """
    A routed path from origin to destination.

    Distance (meters) and duration (seconds) are aggregates for the whole
    path; the router does not provide per-point timing.
    """
    coordinates: Tuple[Coordinate, ...]
    distance: float
    duration: float


@dataclass(frozen=True)
class RouteSegment:
    """A contiguous slice of a Route, bounded by estimated driving time."""
    start_index: int
    end_index: int
    start_coordinate: Coordinate
    end_coordinate: Coordinate
    distance: float
    duration: float
    coordinates: Tuple[Coordinate, ...]


@dataclass(frozen=True)
class RecommendedPlace:
    """
    A stop suggested by the recommender.

    `coordinate` holds whatever the recommender sent; it is only trusted
    after the waypoint composer has parsed it.
    """
    name: str
    description: str = ""
    category: Optional[str] = None
    coordinate: Any = None
    reason_to_stop: str = ""


@dataclass(frozen=True)
class Location:
    """A geocoder hit."""
    id: str
    display_name: str
    coordinate: Coordinate


@dataclass(frozen=True)
class PlaceOfInterest:
    """A point of interest shown at the destination."""
    id: str
    name: str
    category: str
    coordinate: Coordinate
    distance: float = 0.0  # meters from the segment endpoint
    address: str = ""
    importance: Optional[int] = None
    description: str = ""


# Preference flag -> (prompt phrase, filter keywords)
CATEGORY_DEFINITIONS = {
    "national_parks": (
        "national parks, state parks, nature preserves",
        ["park", "preserve", "forest", "natural", "nature"],
    ),
    "landmarks": (
        "landmarks, monuments, historic sites",
        ["landmark", "monument", "historic", "heritage"],
    ),
    "scenic_views": (
        "scenic viewpoints, natural wonders, geological features",
        ["scenic", "view", "overlook", "vista", "mountain", "lake", "valley"],
    ),
    "food": (
        "iconic food stops, famous restaurants, local cuisine hotspots",
        ["food", "restaurant", "cuisine", "diner", "cafe", "dining"],
    ),
    "cities": (
        "interesting small towns, cities with unique character",
        ["city", "town", "village", "urban", "downtown"],
    ),
    "quirky": (
        "quirky roadside attractions, unusual sites, world's largest objects",
        ["quirky", "unusual", "strange", "roadside", "weird", "unique"],
    ),
}


@dataclass(frozen=True)
class CategoryPreferences:
    """Which kinds of stops the traveler wants recommended."""
    national_parks: bool = False
    landmarks: bool = False
    scenic_views: bool = False
    food: bool = False
    cities: bool = False
    quirky: bool = False

    def _enabled(self) -> List[str]:
        return [name for name in CATEGORY_DEFINITIONS if getattr(self, name)]

    def selected_categories(self) -> List[str]:
        """Prompt phrases for every enabled category."""
        return [CATEGORY_DEFINITIONS[name][0] for name in self._enabled()]

    def keywords(self) -> List[str]:
        """Lowercase filter keywords for every enabled category."""
        result: List[str] = []
        for name in self._enabled():
            result.extend(CATEGORY_DEFINITIONS[name][1])
        return result
