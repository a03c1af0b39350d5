from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_endpoint, session_user_id
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth = container.auth_service

    def _shared() -> dict:
        return {
            "shifts": [s.to_json() for s in container.shift_service.list_all()],
            "geoSettings": container.geo_service.get().to_json(),
        }

    @app.route("/api/data/all", methods=["GET"], endpoint="data_all")
    @api_endpoint
    def data_all():
        auth.require_admin(session_user_id())
        payload = {
            "users": [u.to_json() for u in container.user_service.list_all()],
            "logs": [log.to_json() for log in container.clock_service.list_all()],
        }
        payload.update(_shared())
        return jsonify(payload), 200

    @app.route("/api/data/employee/<int:user_id>", methods=["GET"], endpoint="data_employee")
    @api_endpoint
    def data_employee(user_id: int):
        auth.require_self_or_admin(session_user_id(), user_id)
        payload = {"logs": [log.to_json() for log in container.clock_service.list_for_user(user_id)]}
        payload.update(_shared())
        return jsonify(payload), 200
