"""
Split a route into chunks of roughly equal driving time.

The router only returns aggregate distance and duration for the whole
path, so every edge is timed with one average speed
(route.distance / route.duration). Boundaries always land on existing
route coordinates; nothing is interpolated.
"""
import logging
import math
from typing import List, Optional, Sequence

from roadtrip.geo.distance import haversine_distance
from roadtrip.models import Route, RouteSegment

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600.0
DEFAULT_TARGET_HOURS = 5.0
CHANGE_DETECTION_PRECISION = 4  # decimal degrees


def segment_route(
    route: Optional[Route],
    target_hours: float = DEFAULT_TARGET_HOURS,
) -> List[RouteSegment]:
    """
    Partition a route into segments of about `target_hours` of driving each.

    1. Short trips (duration <= target) come back as one segment carrying
       the route's own totals.
    2. Longer trips are walked edge by edge; each edge's haversine length
       is converted to time with the route-wide average speed.
    3. A segment closes once its accumulated time reaches the target, or
       at the last coordinate.

    Returns an empty list for a missing or malformed route.

    Raises:
        ValueError: If target_hours is not a positive number.
    """
    if not isinstance(target_hours, (int, float)) or not math.isfinite(target_hours) \
            or target_hours <= 0:
        raise ValueError(f"target_hours must be positive, got {target_hours!r}")

    if not _is_usable(route):
        logger.info(
            "route.segment_route",
            extra={"result_count": 0, "reason_if_empty": "missing or malformed route"},
        )
        return []

    coordinates = tuple(route.coordinates)
    last = len(coordinates) - 1

    if route.duration / SECONDS_PER_HOUR <= target_hours:
        return [RouteSegment(
            start_index=0,
            end_index=last,
            start_coordinate=coordinates[0],
            end_coordinate=coordinates[last],
            distance=route.distance,
            duration=route.duration,
            coordinates=coordinates,
        )]

    target_seconds = target_hours * SECONDS_PER_HOUR
    distance_time_ratio = route.distance / route.duration  # meters per second

    segments: List[RouteSegment] = []
    segment_start = 0
    acc_distance = 0.0
    acc_duration = 0.0

    for i in range(1, len(coordinates)):
        edge_distance = haversine_distance(coordinates[i - 1], coordinates[i])
        acc_distance += edge_distance
        acc_duration += edge_distance / distance_time_ratio

        if acc_duration >= target_seconds or i == last:
            segments.append(RouteSegment(
                start_index=segment_start,
                end_index=i,
                start_coordinate=coordinates[segment_start],
                end_coordinate=coordinates[i],
                distance=acc_distance,
                duration=acc_duration,
                coordinates=coordinates[segment_start:i + 1],
            ))
            segment_start = i
            acc_distance = 0.0
            acc_duration = 0.0

    logger.info(
        "route.segment_route",
        extra={
            "coordinate_count": len(coordinates),
            "target_hours": target_hours,
            "result_count": len(segments),
        },
    )
    return segments


def segments_equivalent(
    a: Sequence[RouteSegment],
    b: Sequence[RouteSegment],
    precision: int = CHANGE_DETECTION_PRECISION,
) -> bool:
    """
    Whether two segment lists describe the same split.

    Compared by end coordinates rounded to `precision` decimal degrees,
    never by identity: segment lists are rebuilt on every change.
    """
    if len(a) != len(b):
        return False
    return all(
        x.end_coordinate.rounded(precision) == y.end_coordinate.rounded(precision)
        for x, y in zip(a, b)
    )


def _is_usable(route: Optional[Route]) -> bool:
    if route is None or not route.coordinates:
        return False
    if len(route.coordinates) < 2:
        return False
    if not (math.isfinite(route.distance) and math.isfinite(route.duration)):
        return False
    if route.distance <= 0 or route.duration <= 0:
        return False
    # Both aggregates feed the average-speed estimate, which must not underflow
    ratio = route.distance / route.duration
    return math.isfinite(ratio) and ratio > 0
