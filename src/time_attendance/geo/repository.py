from __future__ import annotations

from typing import Protocol

from .model import GeoSettings


class GeoSettingsRepository(Protocol):
    """Access to the single geofence settings row."""

    def get(self) -> GeoSettings:
        raise NotImplementedError

    def save(self, settings: GeoSettings) -> None:
        raise NotImplementedError
