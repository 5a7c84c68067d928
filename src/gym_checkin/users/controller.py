from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import caller_required, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = caller_required(container.access)

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(str(data.get("email", "")), str(data.get("password", "")))

        session.clear()
        session.permanent = bool(data.get("remember_me"))

        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

        return jsonify(
            {
                "success": True,
                "user_id": s_user.user_id,
                "name": s_user.full_name,
                "role": s_user.role.value,
                "gym_id": s_user.gym_id,
            }
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/me", endpoint="me")
    @login_required
    def me(caller):
        return jsonify(
            {
                "user_id": caller.user_id,
                "email": caller.email,
                "name": caller.full_name,
                "role": caller.role.value,
                "gym_id": caller.gym_id,
            }
        )
