from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_endpoint, client_ip, json_object, session_user_id
from ..common.validators import require_int
from ..container import Container
from ..geo.service import parse_coordinate


def register(app: Flask, container: Container) -> None:
    auth = container.auth_service
    clock = container.clock_service

    @app.route("/api/timelogs", methods=["POST"], endpoint="create_timelog")
    @api_endpoint
    def create_timelog():
        data = json_object()
        target = require_int(data.get("userId", session_user_id()), "userId")
        auth.require_self_or_admin(session_user_id(), target)

        confirmation = clock.clock(
            target,
            data.get("type"),
            data.get("location"),
            timestamp=data.get("timestamp"),
            ip_address=data.get("ipAddress"),
            fallback_ip=client_ip(),
        )
        return jsonify(confirmation.to_json()), 201

    @app.route("/api/data/employee/<int:user_id>/status", methods=["GET"], endpoint="employee_status")
    @api_endpoint
    def employee_status(user_id: int):
        auth.require_self_or_admin(session_user_id(), user_id)

        location = None
        if request.args.get("latitude") is not None or request.args.get("longitude") is not None:
            location = parse_coordinate(
                {"latitude": request.args.get("latitude"), "longitude": request.args.get("longitude")}
            )
        return jsonify(clock.status(user_id, location=location)), 200
