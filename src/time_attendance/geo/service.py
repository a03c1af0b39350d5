from __future__ import annotations

from typing import Any, Optional

from ..common.validators import require_number
from ..core.exceptions import ValidationError
from .model import Coordinate, GeoSettings
from .repository import GeoSettingsRepository


def parse_coordinate(value: Any, field_name: str = "location") -> Optional[Coordinate]:
    """``{"latitude": .., "longitude": ..}`` -> Coordinate; None stays None."""
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValidationError(f"{field_name} must be an object with latitude and longitude")

    latitude = require_number(value.get("latitude"), f"{field_name}.latitude")
    longitude = require_number(value.get("longitude"), f"{field_name}.longitude")
    if not -90 <= latitude <= 90:
        raise ValidationError(f"{field_name}.latitude must be between -90 and 90")
    if not -180 <= longitude <= 180:
        raise ValidationError(f"{field_name}.longitude must be between -180 and 180")
    return Coordinate(latitude=latitude, longitude=longitude)


class GeoSettingsService:
    """Use case: read/update the geofence."""

    def __init__(self, settings: GeoSettingsRepository):
        self._settings = settings

    def get(self) -> GeoSettings:
        return self._settings.get()

    def update(self, *, center: Any, radius: Any) -> GeoSettings:
        coordinate = parse_coordinate(center, "center")
        radius_m = require_number(radius, "radius")
        if radius_m < 0:
            raise ValidationError("radius must not be negative")
        # Stored as whole meters.
        radius_m = int(round(radius_m))

        settings = GeoSettings(center=coordinate, radius=radius_m)
        self._settings.save(settings)
        return settings
