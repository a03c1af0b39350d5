from __future__ import annotations

from math import atan2, cos, radians, sin, sqrt

from ..core.constants import EARTH_RADIUS_M


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters between two points given in degrees."""
    phi1, phi2 = radians(lat1), radians(lat2)
    d_phi = radians(lat2 - lat1)
    d_lambda = radians(lon2 - lon1)

    a = sin(d_phi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(d_lambda / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_M * c


def is_within_radius(lat: float, lon: float, center_lat: float, center_lon: float, radius_m: float) -> bool:
    return haversine_distance(lat, lon, center_lat, center_lon) <= radius_m
