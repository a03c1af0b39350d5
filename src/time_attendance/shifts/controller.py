from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_endpoint, json_payload, session_user_id
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings/shifts", methods=["PUT"], endpoint="update_shift_settings")
    @api_endpoint
    def update_shift_settings():
        container.auth_service.require_admin(session_user_id())
        shifts = container.shift_service.update_grace_periods(json_payload())
        return jsonify({"message": "Shift settings updated successfully", "shifts": [s.to_json() for s in shifts]}), 200
