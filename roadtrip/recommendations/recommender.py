"""
LLM-backed recommendations: stops along a route and attractions at the
destination.

The model's output is free-form, so every entry is validated here before
it becomes a RecommendedPlace or PlaceOfInterest. Coordinates are kept
raw on RecommendedPlace; the waypoint composer decides which are usable.
"""
import logging
import uuid
from typing import Any, List, Optional

from roadtrip.llm.client import LLMClient, get_llm_client
from roadtrip.models import (
    CategoryPreferences,
    Coordinate,
    PlaceOfInterest,
    RecommendedPlace,
)
from roadtrip.recommendations.prompts import (
    build_destination_poi_prompt,
    build_route_places_prompt,
)
from roadtrip.route.waypoints import parse_coordinate

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a road trip planning assistant for trips within the USA. "
    "Answer with JSON only."
)


class RecommenderUnavailableError(RuntimeError):
    """The recommender failed or returned nothing usable."""


def recommend_route_places(
    origin_name: str,
    destination_name: str,
    distance: float,
    duration: float,
    preferences: Optional[CategoryPreferences] = None,
    llm: Optional[LLMClient] = None,
) -> List[RecommendedPlace]:
    """
    Ask the LLM for 2-4 stops between origin and destination.

    Args:
        distance: Direct route distance in meters.
        duration: Direct route duration in seconds.
        preferences: Optional category focus; also used to filter the answer.

    Returns:
        Places in the recommender's order.

    Raises:
        RecommenderUnavailableError: If the call fails or the answer has no places.
    """
    prompt = build_route_places_prompt(
        origin_name, destination_name, distance, duration, preferences
    )
    data = _ask(llm, prompt)

    raw_places = data.get("recommendedPlaces") if isinstance(data, dict) else None
    places = _validate_route_places(raw_places)
    if not places:
        raise RecommenderUnavailableError("No places recommendation received")

    if preferences:
        places = filter_by_preferences(places, preferences)

    logger.info(
        "recommendations.route_places",
        extra={
            "origin": origin_name,
            "destination": destination_name,
            "result_count": len(places),
        },
    )
    return places


def filter_by_preferences(
    places: List[RecommendedPlace],
    preferences: CategoryPreferences,
) -> List[RecommendedPlace]:
    """
    Keep places matching any selected category keyword.

    Matches on category first, then name, description and reason. If
    nothing matches, the original list is kept rather than emptied.
    """
    keywords = preferences.keywords()
    if not keywords:
        return places

    def matches(place: RecommendedPlace) -> bool:
        if place.category and any(k in place.category.lower() for k in keywords):
            return True
        text = " ".join([place.name, place.description, place.reason_to_stop]).lower()
        return any(k in text for k in keywords)

    filtered = [p for p in places if matches(p)]
    logger.info(f"Filtered recommendations from {len(places)} to {len(filtered)} places")

    if not filtered:
        logger.warning("No places matched the preferences, keeping original recommendations")
        return places
    return filtered


def get_destination_pois(
    coordinate: Coordinate,
    place_name: str,
    llm: Optional[LLMClient] = None,
) -> List[PlaceOfInterest]:
    """
    Ask the LLM for 2-3 attractions at the destination.

    Entries without a usable coordinate are pinned to the destination
    itself. The first attraction gets the highest importance.

    Raises:
        RecommenderUnavailableError: If the call fails or returns no attractions.
    """
    data = _ask(llm, build_destination_poi_prompt(place_name, coordinate))

    if isinstance(data, dict):
        # Some models wrap the array in an object anyway
        data = next((v for v in data.values() if isinstance(v, list)), [])
    if not isinstance(data, list):
        raise RecommenderUnavailableError("Invalid response format from recommender")

    pois: List[PlaceOfInterest] = []
    for rec in data:
        if not isinstance(rec, dict) or not rec.get("name"):
            continue
        index = len(pois)
        pois.append(PlaceOfInterest(
            id=f"poi-{index}-{uuid.uuid4().hex[:8]}",
            name=str(rec["name"]),
            category=str(rec.get("category") or "Attraction"),
            description=str(rec.get("description") or ""),
            coordinate=parse_coordinate(rec.get("coordinate")) or coordinate,
            distance=0.0,
            address=str(rec.get("address") or ""),
            importance=3 if index == 0 else 2,
        ))

    if not pois:
        raise RecommenderUnavailableError("No recommendations received")
    return pois


def find_destination_pois(
    coordinate: Coordinate,
    place_name: str,
    llm: Optional[LLMClient] = None,
) -> List[PlaceOfInterest]:
    """Destination attractions, or a single placeholder if the recommender fails."""
    logger.info(f"Finding destination POIs for {place_name} at {coordinate.as_list()}")
    try:
        return get_destination_pois(coordinate, place_name, llm=llm)
    except Exception as e:
        logger.warning(f"Destination recommendations failed for {place_name}: {e}")
        return fallback_destination_pois(coordinate, place_name)


def fallback_destination_pois(coordinate: Coordinate, place_name: str) -> List[PlaceOfInterest]:
    return [PlaceOfInterest(
        id=f"fallback-poi-1-{uuid.uuid4().hex[:8]}",
        name="Points of Interest",
        category="Information",
        description=(
            f"Configure an LLM API key to get real attraction recommendations for {place_name}."
        ),
        coordinate=coordinate,
        distance=0.0,
        importance=1,
    )]


def _ask(llm: Optional[LLMClient], prompt: str) -> Any:
    client = llm or get_llm_client()
    messages = [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]
    try:
        return client.chat_json(messages=messages)
    except Exception as e:
        logger.error(f"Recommender request failed: {e}")
        raise RecommenderUnavailableError(str(e)) from e


def _validate_route_places(raw: Any) -> List[RecommendedPlace]:
    """Validate and clean recommended places from the model."""
    if not isinstance(raw, list):
        logger.warning(f"recommendedPlaces is not a list: {type(raw)}")
        return []

    cleaned = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        if not entry.get("name"):
            continue
        cleaned.append(RecommendedPlace(
            name=str(entry["name"]),
            description=_as_str(entry.get("description")),
            category=_as_str(entry.get("category")) or None,
            coordinate=entry.get("coordinate"),
            reason_to_stop=_as_str(entry.get("reasonToStop")),
        ))
    return cleaned


def _as_str(val: Any) -> str:
    if val is None:
        return ""
    return str(val)
