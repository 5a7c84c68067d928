from __future__ import annotations

from flask import Flask, Response, jsonify

from ..common.datetime_utils import format_iso
from ..common.web import caller_required
from ..container import Container
from ..core.exceptions import ValidationError
from .service import render_qr_png


def register(app: Flask, container: Container) -> None:
    login_required = caller_required(container.access)

    @app.route("/api/owner/qr", endpoint="owner_qr")
    @login_required
    def owner_qr(caller):
        credential = container.credential_service.current(caller)
        if not credential:
            return jsonify({"qr_value": None, "created_at": None})
        return jsonify({"qr_value": credential.qr_value, "created_at": format_iso(credential.created_at)})

    @app.route("/api/owner/qr.png", endpoint="owner_qr_image")
    @login_required
    def owner_qr_image(caller):
        credential = container.credential_service.current(caller)
        if not credential:
            raise ValidationError("No QR code generated yet")
        return Response(render_qr_png(credential.qr_value), mimetype="image/png")

    @app.route("/api/owner/qr/rotate", methods=["POST"], endpoint="owner_qr_rotate")
    @login_required
    def owner_qr_rotate(caller):
        credential = container.credential_service.rotate(caller)
        return jsonify(
            {"success": True, "qr_value": credential.qr_value, "created_at": format_iso(credential.created_at)}
        )
