from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import api_endpoint, json_object, session_user_id
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth = container.auth_service
    users = container.user_service

    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    @api_endpoint
    def auth_register():
        data = json_object()
        user = users.register(
            username=data.get("username", ""),
            password=data.get("password", ""),
            first_name=data.get("firstName", ""),
            last_name=data.get("lastName", ""),
            position=data.get("position", ""),
            staff_type=data.get("staffType", ""),
            work_group=data.get("workGroup", ""),
        )
        return jsonify(user.to_json()), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    @api_endpoint
    def auth_login():
        data = json_object()
        user = auth.authenticate(data.get("username", ""), data.get("password", ""))

        session.clear()
        session["user_id"] = user.user_id
        # Informational only; authorization always re-reads the role from the store.
        session["role"] = user.role.value
        return jsonify(user.to_json()), 200

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def auth_logout():
        session.clear()
        return jsonify({"message": "Logged out"}), 200

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @api_endpoint
    def auth_me():
        return jsonify(auth.current_user(session_user_id()).to_json()), 200

    @app.route("/api/users/<int:user_id>", methods=["PUT"], endpoint="update_user")
    @api_endpoint
    def update_user(user_id: int):
        auth.require_admin(session_user_id())
        data = json_object()
        user = users.update_user(
            user_id,
            first_name=data.get("firstName"),
            last_name=data.get("lastName"),
            position=data.get("position"),
            staff_type=data.get("staffType"),
            work_group=data.get("workGroup"),
            password=data.get("password"),
        )
        return jsonify(user.to_json()), 200

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @api_endpoint
    def delete_user(user_id: int):
        auth.require_admin(session_user_id())
        users.delete_user(user_id)
        return jsonify({"message": "User deleted successfully"}), 200

    @app.route("/api/admin/password", methods=["PUT"], endpoint="change_admin_password")
    @api_endpoint
    def change_admin_password():
        admin = auth.require_admin(session_user_id())
        users.change_password(admin.user_id, json_object().get("newPassword") or "")
        return jsonify({"message": "Password updated successfully"}), 200
