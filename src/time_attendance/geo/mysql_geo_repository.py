from __future__ import annotations

from ..core.constants import DEFAULT_GEO_RADIUS_M
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, optional_float
from .model import Coordinate, GeoSettings
from .repository import GeoSettingsRepository

SETTINGS_ROW_ID = 1


class MySQLGeoSettingsRepository(GeoSettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self) -> GeoSettings:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT center_latitude, center_longitude, radius FROM settings WHERE id=%s",
                (SETTINGS_ROW_ID,),
            )
            row = fetchone(cur)
            if not row:
                return GeoSettings()

            lat = optional_float(row.get("center_latitude"))
            lon = optional_float(row.get("center_longitude"))
            center = Coordinate(latitude=lat, longitude=lon) if lat is not None and lon is not None else None
            radius = row.get("radius")
            return GeoSettings(center=center, radius=int(radius if radius is not None else DEFAULT_GEO_RADIUS_M))

    def save(self, settings: GeoSettings) -> None:
        center = settings.center
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO settings(id, center_latitude, center_longitude, radius)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    center_latitude=VALUES(center_latitude),
                    center_longitude=VALUES(center_longitude),
                    radius=VALUES(radius)
                """,
                (
                    SETTINGS_ROW_ID,
                    center.latitude if center else None,
                    center.longitude if center else None,
                    int(settings.radius),
                ),
            )
