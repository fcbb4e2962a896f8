"""
Great-circle distance on a spherical Earth.
"""
import math

from roadtrip.models import Coordinate

EARTH_RADIUS_M = 6_371_000.0


def haversine_distance(a: Coordinate, b: Coordinate) -> float:
    """
    Haversine distance between two coordinates, in meters.

    Accurate enough for route planning; not a geodetic survey formula.
    """
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lambda = math.radians(b.lng - a.lng)

    h = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
