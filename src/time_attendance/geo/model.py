from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_GEO_RADIUS_M
from .distance import haversine_distance, is_within_radius


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    def to_json(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class GeoSettings:
    """Geofence: circle of ``radius`` meters around ``center`` (None until configured)."""

    center: Optional[Coordinate] = None
    radius: int = DEFAULT_GEO_RADIUS_M

    def distance_to(self, point: Optional[Coordinate]) -> Optional[float]:
        if self.center is None or point is None:
            return None
        return haversine_distance(point.latitude, point.longitude, self.center.latitude, self.center.longitude)

    def contains(self, point: Optional[Coordinate]) -> bool:
        if self.center is None or point is None:
            return False
        return is_within_radius(point.latitude, point.longitude, self.center.latitude, self.center.longitude, self.radius)

    def to_json(self) -> dict:
        return {
            "center": self.center.to_json() if self.center else None,
            "radius": self.radius,
        }
