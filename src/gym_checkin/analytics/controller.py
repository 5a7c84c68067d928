from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import caller_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = caller_required(container.access)

    @app.route("/api/member/stats", endpoint="member_stats")
    @login_required
    def member_stats(caller):
        result, badges = container.analytics_service.member_stats(caller)
        return jsonify({"stats": result.to_dict(), "badges": [b.to_dict() for b in badges]})

    @app.route("/api/member/leaderboard", endpoint="member_leaderboard")
    @login_required
    def member_leaderboard(caller):
        return jsonify(container.analytics_service.leaderboard(caller).to_dict())

    @app.route("/api/owner/overview", endpoint="owner_overview")
    @login_required
    def owner_overview(caller):
        return jsonify(container.analytics_service.gym_overview(caller).to_dict())
