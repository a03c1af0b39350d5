from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_ms, to_local
from ..common.http import api_endpoint, session_user_id
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports/monthly", methods=["GET"], endpoint="monthly_report")
    @api_endpoint
    def monthly_report():
        container.auth_service.require_admin(session_user_id())

        today = to_local(now_ms(), container.report_service.tz)
        report = container.report_service.build(
            year=request.args.get("year", today.year),
            month=request.args.get("month", today.month),
        )
        return jsonify(report.to_json()), 200
