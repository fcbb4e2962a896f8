"""
Turn recommended stops into routing waypoints.

Everything coming from the recommender is untrusted: coordinates may be
missing, the wrong shape, strings, or the [0, 0] placeholder the
recommender uses for "unknown". Only well-formed coordinates survive, in
the recommender's ranking order.
"""
import logging
import math
from numbers import Real
from typing import Any, Iterable, List, Optional

from roadtrip.models import Coordinate, RecommendedPlace

logger = logging.getLogger(__name__)

# Mapbox Directions accepts at most 25 coordinates per request
MAX_ROUTER_STOPS = 25
DEFAULT_MAX_WAYPOINTS = MAX_ROUTER_STOPS - 2  # origin + destination

UNSET_COORDINATE = (0.0, 0.0)


def parse_coordinate(value: Any) -> Optional[Coordinate]:
    """
    Parse an untrusted [lng, lat] value.

    Returns None for anything that is not exactly two finite, in-range
    numbers, and for the [0, 0] sentinel.
    """
    if isinstance(value, Coordinate):
        candidate = (value.lng, value.lat)
    elif isinstance(value, (list, tuple)):
        candidate = tuple(value)
    else:
        return None

    if len(candidate) != 2:
        return None
    # bool is a Real; a [true, false] pair is not a coordinate
    if not all(isinstance(v, Real) and not isinstance(v, bool) for v in candidate):
        return None

    lng, lat = float(candidate[0]), float(candidate[1])
    if not (math.isfinite(lng) and math.isfinite(lat)):
        return None
    if (lng, lat) == UNSET_COORDINATE:
        return None

    try:
        return Coordinate(lng=lng, lat=lat)
    except ValueError:
        return None


def select_waypoints(
    places: Optional[Iterable[RecommendedPlace]],
    max_waypoints: int = DEFAULT_MAX_WAYPOINTS,
) -> List[Coordinate]:
    """
    Pick the routable coordinates out of a ranked list of recommendations.

    Order is preserved and never optimized; the lowest-ranked entries are
    dropped first when the cap is hit. An empty or missing input yields an
    empty list so routing can go straight from origin to destination.
    """
    if max_waypoints < 0:
        raise ValueError(f"max_waypoints must be >= 0, got {max_waypoints}")
    if not places:
        return []

    waypoints: List[Coordinate] = []
    dropped = 0
    for place in places:
        coordinate = parse_coordinate(getattr(place, "coordinate", None))
        if coordinate is None:
            dropped += 1
            continue
        waypoints.append(coordinate)

    selected = waypoints[:max_waypoints]

    logger.info(
        "route.select_waypoints",
        extra={
            "usable_count": len(waypoints),
            "dropped_malformed": dropped,
            "truncated": len(waypoints) - len(selected),
            "result_count": len(selected),
        },
    )
    return selected
