from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import caller_required, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = caller_required(container.access)

    @app.route("/api/member/scan", methods=["POST"], endpoint="member_scan")
    @login_required
    def member_scan(caller):
        """QR scan by the member: check in or out depending on the open session."""
        data = json_body()
        outcome = container.checkin_service.scan(caller, data.get("qr_code"))
        return jsonify({"success": True, **outcome.to_dict()})

    @app.route("/api/member/session", endpoint="member_session")
    @login_required
    def member_session(caller):
        current = container.checkin_service.current_session(caller)
        return jsonify({"checked_in": current is not None, "session": current.to_dict() if current else None})

    @app.route("/api/member/history", endpoint="member_history")
    @login_required
    def member_history(caller):
        member = container.access.member_for_caller(caller)
        rows = container.checkin_service.member_history(caller, member.member_id)
        return jsonify({"total": len(rows), "sessions": [r.to_dict() for r in rows]})

    @app.route("/api/staff/members", endpoint="staff_members")
    @login_required
    def staff_members(caller):
        roster = container.checkin_service.presence_roster(caller, search=request.args.get("q", ""))
        return jsonify({"members": [r.to_dict() for r in roster]})

    @app.route("/api/staff/members/<int:member_id>/toggle", methods=["POST"], endpoint="staff_toggle")
    @login_required
    def staff_toggle(caller, member_id: int):
        outcome = container.checkin_service.staff_toggle(caller, member_id)
        return jsonify({"success": True, **outcome.to_dict()})

    @app.route("/api/staff/members/<int:member_id>/history", endpoint="staff_member_history")
    @login_required
    def staff_member_history(caller, member_id: int):
        limit = request.args.get("limit", type=int)
        rows = container.checkin_service.member_history(caller, member_id, limit=limit)
        return jsonify({"total": len(rows), "sessions": [r.to_dict() for r in rows]})

    @app.route("/api/owner/orphans", endpoint="owner_orphans")
    @login_required
    def owner_orphans(caller):
        reports = container.checkin_service.find_orphans(caller)
        return jsonify({"orphans": [r.to_dict() for r in reports]})

    if app.config.get("LEGACY_CHECKIN_ENABLED"):

        @app.route("/api/checkin/legacy", methods=["POST"], endpoint="legacy_checkin")
        def legacy_checkin():
            """Old in-memory toggle kept for existing clients. Not backed by the database."""
            data = json_body()
            result = container.legacy_toggle.toggle(data.get("userId"), data.get("qrToken"))
            return jsonify(result.to_dict())
