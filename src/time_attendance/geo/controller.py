from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_endpoint, json_object, session_user_id
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings/geo", methods=["PUT"], endpoint="update_geo_settings")
    @api_endpoint
    def update_geo_settings():
        container.auth_service.require_admin(session_user_id())
        data = json_object()
        settings = container.geo_service.update(center=data.get("center"), radius=data.get("radius"))
        return jsonify({"message": "Geolocation settings updated successfully", "geoSettings": settings.to_json()}), 200
